"""CLI tests for tfvc -- commands, option spelling and command files via Click's CliRunner.

The workspace and the prompter are injected through ``obj`` so no real
provider is imported.
"""

from __future__ import annotations

import logging

import pytest
from click.testing import CliRunner

from tfvc.cli import cli, expand_command_file_syntax
from tfvc.cli.commands.batch import tokenize_command_line
from tfvc.cli.options import build_option_map, normalize_option_syntax
from tfvc.models.changes import ChangeType
from tfvc.models.options import LockLevel, OptionKind
from tfvc.models.results import ExitCode
from tfvc.models.versions import ChangesetVersionSpec
from tfvc.protocols import QuestionResponse
from tests.conftest import pending


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def runner():
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def invoke(runner, provider, prompter):
    """Invoke the CLI with the fake workspace and prompter."""

    def _invoke(*args, **kwargs):
        obj = {"workspace_provider": provider, "prompter": prompter}
        return runner.invoke(cli, list(args), obj=obj, **kwargs)

    return _invoke


def _unchanged_workspace(workspace):
    workspace.pending = [
        pending(ChangeType.EDIT, "$/p/same.txt"),
        pending(ChangeType.EDIT, "$/p/changed.txt"),
    ]
    workspace.unchanged = {"$/p/same.txt"}


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


class TestCommands:
    def test_checkout(self, invoke, workspace):
        result = invoke("checkout", "$/p/a.txt")
        assert result.exit_code == 0, result.output
        assert "$/p/a.txt" in result.output
        assert workspace.calls_to("pend_edit")[0][1] == (["$/p/a.txt"],)

    def test_checkout_without_items_fails(self, invoke, workspace):
        result = invoke("checkout")
        assert result.exit_code == ExitCode.FAILURE
        assert "Error:" in result.output
        assert workspace.calls == []

    def test_silent_hides_targets(self, invoke):
        result = invoke("checkout", "-silent", "$/p/a.txt")
        assert result.exit_code == 0
        assert "$/p/a.txt" not in result.output

    def test_command_names_case_insensitive(self, invoke, workspace):
        result = invoke("CheckOut", "$/p/a.txt")
        assert result.exit_code == 0
        assert workspace.calls_to("pend_edit")

    def test_alias(self, invoke, workspace):
        result = invoke("ren", "$/p/a", "$/p/b")
        assert result.exit_code == 0
        assert workspace.calls_to("pend_rename")

    def test_unknown_command(self, invoke):
        result = invoke("frobnicate")
        assert result.exit_code == ExitCode.UNRECOGNIZED_COMMAND

    def test_unknown_option(self, invoke, workspace):
        result = invoke("checkout", "--bogus", "$/p/a")
        assert result.exit_code == ExitCode.FAILURE
        assert workspace.calls == []

    def test_traditional_lock_syntax(self, invoke, workspace):
        result = invoke("lock", "-lock:checkout", "$/p/a")
        assert result.exit_code == 0, result.output
        (_, _, kwargs) = workspace.calls_to("set_lock")[0]
        assert kwargs["lock_level"] == LockLevel.CHECKOUT

    def test_lock_requires_lock_option(self, invoke, workspace):
        result = invoke("lock", "-recursive", "$/p/a")
        assert result.exit_code == ExitCode.FAILURE
        assert "-lock" in result.output
        assert workspace.calls == []

    def test_version_option(self, invoke, workspace):
        result = invoke("undelete", "$/p/a", "-version:C5")
        assert result.exit_code == 0, result.output
        item = workspace.calls_to("pend_undelete")[0][1][0]
        assert item.version == ChangesetVersionSpec(5)

    def test_bad_version_option(self, invoke, workspace):
        result = invoke("undelete", "$/p/a", "-version:Q1")
        assert result.exit_code == ExitCode.FAILURE
        assert workspace.calls == []

    def test_global_options_reach_provider(self, invoke, provider):
        result = invoke("checkout", "-collection:http://tfs:8080/tfs", "-login:bob", "$/p/a")
        assert result.exit_code == 0, result.output
        assert provider.calls == [{"collection": "http://tfs:8080/tfs", "login": "bob"}]

    def test_add_nothing_detected(self, invoke):
        result = invoke("add")
        assert result.exit_code == ExitCode.PARTIAL_SUCCESS
        assert "No adds detected." in result.output

    def test_help_lists_accepted_forms(self, invoke):
        result = invoke("undo", "--help")
        assert result.exit_code == 0
        assert "undo -unchanged" in result.output

    def test_usage(self, invoke):
        result = invoke("usage")
        assert result.exit_code == 0
        for name in ("add", "delete", "checkout", "lock", "rename", "undelete", "undo"):
            assert name in result.output


class TestPrompting:
    def test_declined(self, invoke, workspace, prompter):
        _unchanged_workspace(workspace)
        prompter.answer = QuestionResponse.NO
        result = invoke("undo", "-unchanged")
        assert result.exit_code == 0
        assert "No changes were undone." in result.output
        assert workspace.calls_to("undo") == []

    def test_global_noprompt(self, invoke, workspace, prompter):
        _unchanged_workspace(workspace)
        result = invoke("--noprompt", "undo", "-unchanged")
        assert result.exit_code == 0
        assert prompter.questions == []
        assert workspace.calls_to("undo")

    def test_noprompt_from_environment(self, invoke, workspace, prompter):
        _unchanged_workspace(workspace)
        result = invoke("undo", "-unchanged", env={"TFVC_NOPROMPT": "1"})
        assert result.exit_code == 0
        assert prompter.questions == []

    def test_console_prompter_yes(self, runner, provider, workspace):
        _unchanged_workspace(workspace)
        result = runner.invoke(
            cli, ["undo", "-unchanged"], obj={"workspace_provider": provider}, input="y\n"
        )
        assert result.exit_code == 0
        assert workspace.calls_to("undo")

    def test_console_prompter_end_of_input_is_no(self, runner, provider, workspace):
        _unchanged_workspace(workspace)
        result = runner.invoke(cli, ["undo", "-unchanged"], obj={"workspace_provider": provider})
        assert result.exit_code == 0
        assert workspace.calls_to("undo") == []


# ---------------------------------------------------------------------------
# Command files
# ---------------------------------------------------------------------------


class TestCommandFiles:
    def test_runs_each_line(self, invoke, runner, workspace):
        with runner.isolated_filesystem():
            with open("cmds.tfc", "w") as f:
                f.write("checkout $/p/a\n\n# comment\nrem also a comment\nlock -lock:none %1\n")
            result = invoke("@cmds.tfc", "$/p/b")
        assert result.exit_code == 0, result.output
        assert workspace.calls_to("pend_edit")[0][1] == (["$/p/a"],)
        assert workspace.calls_to("set_lock")[0][1] == (["$/p/b"],)

    def test_stops_at_first_failure(self, invoke, runner, workspace):
        with runner.isolated_filesystem():
            with open("cmds.tfc", "w") as f:
                f.write("checkout\ncheckout $/p/a\n")
            result = invoke("batch", "cmds.tfc")
        assert result.exit_code == ExitCode.FAILURE
        assert workspace.calls_to("pend_edit") == []

    def test_continue_on_error_is_partial(self, invoke, runner, workspace):
        with runner.isolated_filesystem():
            with open("cmds.tfc", "w") as f:
                f.write("checkout\ncheckout $/p/a\n")
            result = invoke("batch", "cmds.tfc", "--continue-on-error")
        assert result.exit_code == ExitCode.PARTIAL_SUCCESS
        assert len(workspace.calls_to("pend_edit")) == 1

    def test_unknown_command_stops_run(self, invoke, runner):
        with runner.isolated_filesystem():
            with open("cmds.tfc", "w") as f:
                f.write("frobnicate\ncheckout $/p/a\n")
            result = invoke("batch", "cmds.tfc")
        assert result.exit_code == ExitCode.UNRECOGNIZED_COMMAND

    def test_output_separator(self, invoke, runner):
        with runner.isolated_filesystem():
            with open("cmds.tfc", "w") as f:
                f.write("checkout $/p/a\ncheckout $/p/b\n")
            result = invoke("batch", "cmds.tfc", "--output-separator", "=====")
        assert result.exit_code == 0
        assert result.output.count("=====") >= 2

    def test_stdin(self, invoke):
        result = invoke("@", input="checkout $/p/a\n")
        assert result.exit_code == 0, result.output

    def test_nested_command_files_rejected(self, invoke, runner, workspace):
        with runner.isolated_filesystem():
            with open("inner.tfc", "w") as f:
                f.write("checkout $/p/a\n")
            with open("outer.tfc", "w") as f:
                f.write("@inner.tfc\n")
            result = invoke("@outer.tfc")
        assert result.exit_code == ExitCode.FAILURE
        assert workspace.calls == []

    def test_global_options_apply_to_their_line_only(self, invoke, runner, workspace, prompter):
        _unchanged_workspace(workspace)
        with runner.isolated_filesystem():
            with open("cmds.tfc", "w") as f:
                f.write("--noprompt undo -unchanged\nundo -unchanged\n")
            result = invoke("@cmds.tfc")
        assert result.exit_code == 0, result.output
        assert len(workspace.calls_to("undo")) == 2
        assert prompter.questions == ["Undo 1 unchanged pending change(s)?"]

    def test_log_level_on_a_line_is_restored(self, invoke, runner):
        level = logging.getLogger().level
        with runner.isolated_filesystem():
            with open("cmds.tfc", "w") as f:
                f.write("--log-level debug checkout $/p/a\n")
            result = invoke("@cmds.tfc")
        assert result.exit_code == 0, result.output
        assert logging.getLogger().level == level

    def test_missing_file(self, invoke):
        result = invoke("@does-not-exist.tfc")
        assert result.exit_code != 0


# ---------------------------------------------------------------------------
# Argument rewriting
# ---------------------------------------------------------------------------


class TestArgumentRewriting:
    @pytest.mark.parametrize(
        "args, expected",
        [
            (["-lock:checkin"], ["--lock=checkin"]),
            (["-LOCK:CheckIn"], ["--lock=CheckIn"]),
            (["-recursive", "$/a"], ["--recursive", "$/a"]),
            (["-r"], ["-r"]),
            (["-unknown"], ["-unknown"]),
            (["--", "-lock"], ["--", "-lock"]),
            (["--lock=none"], ["--lock=none"]),
        ],
    )
    def test_normalize_option_syntax(self, args, expected):
        assert normalize_option_syntax(args) == expected

    @pytest.mark.parametrize(
        "args, expected",
        [
            (["@cmds"], ["batch", "cmds"]),
            (["@"], ["batch", "-"]),
            (["--noprompt", "@cmds", "x"], ["--noprompt", "batch", "cmds", "x"]),
            (["--log-level", "DEBUG", "@cmds"], ["--log-level", "DEBUG", "batch", "cmds"]),
            (["checkout", "@cmds"], ["checkout", "@cmds"]),
        ],
    )
    def test_expand_command_file_syntax(self, args, expected):
        assert expand_command_file_syntax(args) == expected

    def test_build_option_map_skips_unset(self):
        options = build_option_map(
            {"recursive": True, "silent": False, "lock": "checkin", "encoding": None, "items": ()}
        )
        assert options.kinds() == {OptionKind.RECURSIVE, OptionKind.LOCK}
        assert options.value(OptionKind.LOCK) == LockLevel.CHECKIN


class TestTokenizeCommandLine:
    @pytest.mark.parametrize("line", ["", "   \n", "# comment", "  rem comment", "REM x"])
    def test_skipped(self, line):
        assert tokenize_command_line(line) is None

    def test_quotes(self):
        assert tokenize_command_line('rename "$/p/a b" $/p/c\n') == ["rename", "$/p/a b", "$/p/c"]

    def test_parameters(self):
        params = [f"p{i}" for i in range(1, 11)]
        assert tokenize_command_line("checkout %1 %10", params) == ["checkout", "p1", "p10"]
