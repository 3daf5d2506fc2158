#!/usr/bin/env python3
"""
Tests for the command registry, builtin commands, dispatcher and REPL loop.
"""

import json
import logging
import pytest
from unittest.mock import MagicMock, patch

from llama_console.cli._simple_repl import run_loop
from llama_console.cli.commands import (
    Command,
    CommandRegistry,
    command_registry,
    load_builtin_commands,
)
from llama_console.cli.commands.builtins.exit import GOODBYE
from llama_console.cli.commands.loader import PACKAGE_BUILTINS_DIR, discover_commands
from llama_console.cli.dispatcher import CommandDispatcher
from llama_console.config import DEFAULTS, Config, ConfigStore
from llama_console.core import GenerationFailure, UnknownCommand
from llama_console.session import SessionManager, TranscriptExporter
from llama_console.utils import TypewriterOutput


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def engine():
    """Create a mock engine."""
    mock = MagicMock()
    mock.model_identifier = "Qwen2-1.5B-Instruct"
    mock.generate.return_value = "Hello!"
    return mock


@pytest.fixture
def session_mgr(engine):
    return SessionManager(engine, output=TypewriterOutput(delay=0))


@pytest.fixture
def config_store(tmp_path):
    return ConfigStore(tmp_path / "config.json")


@pytest.fixture
def exporter(tmp_path):
    return TranscriptExporter(tmp_path / "exports")


@pytest.fixture
def dispatcher(session_mgr, config_store, exporter):
    return CommandDispatcher(session_mgr, config_store, exporter)


# ============================================================================
# Registry Tests
# ============================================================================

class TestCommandRegistry:
    """Tests for CommandRegistry."""

    @pytest.fixture
    def registry(self):
        registry = CommandRegistry()

        @registry.register(Command.STATS, "Show statistics")
        def cmd_stats(ctx, args):
            return args

        return registry

    def test_register_default_usage(self, registry):
        entry = registry.get(Command.STATS)
        assert entry.name == "stats"
        assert entry.usage == "/stats"
        assert entry.description == "Show statistics"

    def test_match_splits_args(self, registry):
        entry, args = registry.match("/stats  some args ")
        assert entry.command is Command.STATS
        assert args == "some args"

    def test_match_is_case_insensitive(self, registry):
        entry, _ = registry.match("/STATS")
        assert entry.command is Command.STATS

    @pytest.mark.parametrize("line", ["/foo", "/", "/quit", "/statistics", "stats"])
    def test_unknown_command(self, registry, line):
        with pytest.raises(UnknownCommand):
            registry.match(line)

    def test_unregistered_member_is_unknown(self, registry):
        """Test a valid name without a handler is not dispatched."""
        with pytest.raises(UnknownCommand):
            registry.match("/help")

    def test_missing(self, registry):
        assert Command.STATS not in registry.missing()
        assert Command.HELP in registry.missing()


class TestBuiltinLoading:
    """Tests for builtin command discovery."""

    def test_discovers_every_command(self):
        names = discover_commands(PACKAGE_BUILTINS_DIR)
        assert sorted(names) == sorted(c.value for c in Command)

    def test_all_commands_registered(self):
        load_builtin_commands()
        assert command_registry.missing() == []

    def test_load_is_repeatable(self):
        assert load_builtin_commands() == len(Command)
        assert load_builtin_commands() == len(Command)
        assert len(command_registry.all_commands()) == len(Command)

    def test_complete_registry_logs_no_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="llama_console"):
            load_builtin_commands()
        assert "without a handler" not in caplog.text

    def test_warns_about_unhandled_commands(self, caplog):
        """Test commands with no registered handler are reported."""
        # Builtins are already imported, so nothing registers into the empty registry
        with patch("llama_console.cli.commands.loader.command_registry", CommandRegistry()), \
                caplog.at_level(logging.WARNING, logger="llama_console"):
            load_builtin_commands()
        assert "Commands without a handler" in caplog.text
        assert "help" in caplog.text
        assert "exit" in caplog.text

    def test_discover_missing_dir(self, tmp_path):
        assert discover_commands(tmp_path / "nope") == []

    def test_completions(self):
        load_builtin_commands()
        completions = command_registry.get_completions()
        assert "/help" in completions
        assert "/export" in completions


# ============================================================================
# Builtin Command Tests
# ============================================================================

class TestHelpCommand:

    def test_lists_all_commands(self, dispatcher, capsys):
        assert dispatcher.dispatch("/help") is False
        out = capsys.readouterr().out
        assert "Available Commands:" in out
        for command in Command:
            assert f"/{command.value}" in out
        assert "exit" in out


class TestConfigCommand:
    """Tests for /config."""

    def test_shows_all_keys(self, dispatcher, capsys):
        dispatcher.dispatch("/config")
        out = capsys.readouterr().out
        assert "Current Model Configuration:" in out
        assert "Context Size: 2048" in out
        assert "Temperature: 0.7" in out
        assert "Top P: 0.9" in out

    def test_set_generation_key(self, dispatcher, session_mgr, capsys):
        dispatcher.dispatch("/config set temperature 0.2")
        assert session_mgr.config.temperature == 0.2
        out = capsys.readouterr().out
        assert "Set temperature = 0.2" in out
        assert "next start" not in out

    def test_set_camel_case_key(self, dispatcher, session_mgr):
        dispatcher.dispatch("/config set maxTokens 64")
        assert session_mgr.config.max_tokens == 64

    def test_set_resource_key_notes_restart(self, dispatcher, session_mgr, capsys):
        dispatcher.dispatch("/config set contextSize 4096")
        assert session_mgr.config.context_size == 4096
        assert "contextSize take effect on next start" in capsys.readouterr().out

    def test_set_unknown_key(self, dispatcher, session_mgr, capsys):
        dispatcher.dispatch("/config set bogus 1")
        assert "Unknown config key: bogus" in capsys.readouterr().out
        assert session_mgr.config == Config()

    def test_set_invalid_value(self, dispatcher, session_mgr, capsys):
        dispatcher.dispatch("/config set topP 5")
        assert "invalid value for topP" in capsys.readouterr().out
        assert session_mgr.config.top_p == DEFAULTS["top_p"]

    def test_bad_usage(self, dispatcher, capsys):
        dispatcher.dispatch("/config set temperature")
        assert "Usage: /config" in capsys.readouterr().out


class TestHistoryCommand:
    """Tests for /history."""

    def test_empty(self, dispatcher, capsys):
        dispatcher.dispatch("/history")
        assert "No conversation history yet." in capsys.readouterr().out

    def test_lists_messages(self, dispatcher, capsys):
        dispatcher.dispatch("Hi")
        capsys.readouterr()
        dispatcher.dispatch("/history")
        lines = capsys.readouterr().out.splitlines()
        entries = [line for line in lines if line.startswith("[")]
        assert len(entries) == 2
        assert entries[0].endswith("You: Hi")
        assert entries[1].endswith("AI: Hello!")

    def test_truncates_long_content(self, dispatcher, engine, capsys):
        engine.generate.return_value = "x" * 150
        dispatcher.dispatch("Tell me a story")
        capsys.readouterr()
        dispatcher.dispatch("/history")
        out = capsys.readouterr().out
        assert "AI: " + "x" * 100 + "..." in out
        assert "x" * 101 not in out


class TestClearCommand:

    def test_clears_history_and_keeps_config(self, dispatcher, session_mgr, capsys):
        dispatcher.dispatch("/config set threads 8")
        dispatcher.dispatch("Hi")
        dispatcher.dispatch("/clear")
        assert "Conversation history cleared." in capsys.readouterr().out
        assert session_mgr.get_history() == ()
        assert session_mgr.config.threads == 8


class TestStatsCommand:

    def test_shows_counts(self, dispatcher, capsys):
        dispatcher.dispatch("Hi")
        dispatcher.dispatch("Again")
        capsys.readouterr()
        dispatcher.dispatch("/stats")
        out = capsys.readouterr().out
        assert "Total Turns: 2" in out
        assert "User Messages: 2" in out
        assert "AI Messages: 2" in out
        assert "Conversation Length: 4" in out

    def test_empty(self, dispatcher, capsys):
        dispatcher.dispatch("/stats")
        assert "Total Turns: 0" in capsys.readouterr().out


class TestExportCommand:
    """Tests for /export."""

    def test_empty_reports_and_writes_nothing(self, dispatcher, exporter, capsys):
        assert dispatcher.dispatch("/export") is False
        assert "Error: No conversation to export." in capsys.readouterr().out
        assert not exporter.export_dir.exists()

    def test_writes_transcript(self, dispatcher, exporter, capsys):
        dispatcher.dispatch("Hi")
        dispatcher.dispatch("/export")
        out = capsys.readouterr().out
        files = list(exporter.export_dir.glob("conversation-*.json"))
        assert len(files) == 1
        assert f"Conversation exported to: {files[0].name}" in out

        doc = json.loads(files[0].read_text())
        assert doc["modelIdentifier"] == "Qwen2-1.5B-Instruct"
        assert [m["content"] for m in doc["conversation"]] == ["Hi", "Hello!"]
        assert doc["statistics"]["totalTurns"] == 1

    def test_explicit_directory(self, dispatcher, tmp_path):
        dispatcher.dispatch("Hi")
        dispatcher.dispatch(f"/export {tmp_path / 'elsewhere'}")
        assert len(list((tmp_path / "elsewhere").glob("*.json"))) == 1


class TestSaveLoadResetCommands:
    """Tests for /save, /load and /reset."""

    def test_save_then_load(self, dispatcher, session_mgr, config_store, capsys):
        dispatcher.dispatch("/config set temperature 1.5")
        dispatcher.dispatch("/save")
        assert f"Configuration saved to {config_store.path}" in capsys.readouterr().out
        assert json.loads(config_store.path.read_text())["temperature"] == 1.5

        dispatcher.dispatch("/reset")
        assert session_mgr.config == Config()
        assert "Configuration reset to defaults" in capsys.readouterr().out

        dispatcher.dispatch("/load")
        out = capsys.readouterr().out
        assert "Configuration loaded from" in out
        assert "Temperature: 1.5" in out
        assert session_mgr.config.temperature == 1.5

    def test_load_absent(self, dispatcher, session_mgr, capsys):
        dispatcher.dispatch("/config set threads 2")
        dispatcher.dispatch("/load")
        assert "No saved configuration found." in capsys.readouterr().out
        assert session_mgr.config.threads == 2

    def test_load_partial_keeps_other_keys(self, dispatcher, session_mgr, config_store):
        config_store.path.write_text(json.dumps({"maxTokens": 10}))
        dispatcher.dispatch("/config set threads 2")
        dispatcher.dispatch("/load")
        assert session_mgr.config.max_tokens == 10
        assert session_mgr.config.threads == 2

    def test_load_malformed(self, dispatcher, session_mgr, config_store, capsys):
        config_store.path.write_text("{broken")
        dispatcher.dispatch("/load")
        assert "Error: Invalid JSON" in capsys.readouterr().out
        assert session_mgr.config == Config()

    def test_save_and_load_explicit_path(self, dispatcher, session_mgr, config_store, tmp_path):
        target = tmp_path / "profiles" / "fast.json"
        dispatcher.dispatch("/config set maxTokens 32")
        dispatcher.dispatch(f"/save {target}")
        assert target.exists()
        assert not config_store.path.exists()

        dispatcher.dispatch("/reset")
        dispatcher.dispatch(f"/load {target}")
        assert session_mgr.config.max_tokens == 32

    def test_reset_keeps_history(self, dispatcher, session_mgr):
        dispatcher.dispatch("Hi")
        dispatcher.dispatch("/reset")
        assert len(session_mgr.get_history()) == 2


class TestExitCommand:

    @pytest.mark.parametrize("line", ["/exit", "exit", "EXIT", "  Exit  ", "/EXIT"])
    def test_exit_forms(self, dispatcher, line, capsys):
        assert dispatcher.dispatch(line) is True
        assert GOODBYE in capsys.readouterr().out


# ============================================================================
# Dispatcher Tests
# ============================================================================

class TestDispatcher:
    """Tests for CommandDispatcher."""

    def test_blank_line_ignored(self, dispatcher, engine):
        assert dispatcher.dispatch("   ") is False
        engine.generate.assert_not_called()

    def test_chat_prints_response(self, dispatcher, capsys):
        assert dispatcher.dispatch("Hello") is False
        out = capsys.readouterr().out
        assert "Assistant: Hello!" in out

    def test_unknown_command(self, dispatcher, engine, capsys):
        assert dispatcher.dispatch("/foo") is False
        out = capsys.readouterr().out
        assert "Unknown command: /foo" in out
        assert "/help" in out
        engine.generate.assert_not_called()

    def test_unknown_command_keeps_session(self, dispatcher, session_mgr):
        dispatcher.dispatch("Hi")
        dispatcher.dispatch("/foo")
        assert len(session_mgr.get_history()) == 2

    def test_generation_failure_reported(self, dispatcher, engine, session_mgr, capsys):
        engine.generate.side_effect = GenerationFailure("out of memory")
        assert dispatcher.dispatch("Hi") is False
        assert "Error generating response: out of memory" in capsys.readouterr().out
        history = session_mgr.get_history()
        assert len(history) == 1
        assert history[0].role == "user"

    def test_loop_continues_after_failure(self, dispatcher, engine, session_mgr):
        engine.generate.side_effect = [GenerationFailure("boom"), "Recovered"]
        dispatcher.dispatch("First")
        dispatcher.dispatch("Second")
        roles = [m.role for m in session_mgr.get_history()]
        assert roles == ["user", "user", "assistant"]

    def test_unexpected_engine_error_reported(self, dispatcher, engine, session_mgr, capsys):
        """Test an engine error outside GenerationFailure does not end the loop."""
        engine.generate.side_effect = [RuntimeError("device lost"), "Recovered"]
        assert dispatcher.dispatch("Hi") is False
        assert "Error generating response: device lost" in capsys.readouterr().out

        assert dispatcher.dispatch("Again") is False
        assert [m.role for m in session_mgr.get_history()] == ["user", "user", "assistant"]

    def test_unexpected_handler_error(self, session_mgr, config_store, exporter, capsys):
        registry = CommandRegistry()

        @registry.register(Command.STATS, "Broken")
        def cmd_broken(ctx, args):
            raise RuntimeError("kaboom")

        dispatcher = CommandDispatcher(session_mgr, config_store, exporter, registry=registry)
        assert dispatcher.dispatch("/stats") is False
        assert "Command error: kaboom" in capsys.readouterr().out


# ============================================================================
# REPL Loop Tests
# ============================================================================

class TestRunLoop:
    """Tests for the line-reading loop."""

    def test_reads_until_exit(self, dispatcher, engine):
        lines = iter(["Hello", "/stats", "exit", "never read"])
        run_loop(lambda: next(lines), dispatcher)
        assert engine.generate.call_count == 1
        assert next(lines) == "never read"

    def test_eof_exits(self, dispatcher, capsys):
        with patch("builtins.input", side_effect=EOFError):
            run_loop(input, dispatcher)
        assert GOODBYE in capsys.readouterr().out

    def test_interrupt_at_prompt_exits(self, dispatcher, capsys):
        with patch("builtins.input", side_effect=["Hi", KeyboardInterrupt]):
            run_loop(input, dispatcher)
        assert GOODBYE in capsys.readouterr().out

    def test_interrupt_during_response_exits(self, dispatcher, engine, capsys):
        engine.generate.side_effect = KeyboardInterrupt
        with patch("builtins.input", side_effect=["Hi", "never read"]) as mock_input:
            run_loop(input, dispatcher)
        assert mock_input.call_count == 1
        assert GOODBYE in capsys.readouterr().out
