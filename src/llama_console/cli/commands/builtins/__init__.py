"""
Built-in commands package.

Each subdirectory holds one command whose __init__.py registers it with
@command_registry.register(). They are imported by load_builtin_commands().
"""
