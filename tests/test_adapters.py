"""
Tests for the capability adapters — runners, prompters, config stores.
"""

import sys
from pathlib import Path

import pytest
from click.testing import CliRunner

from devbootstrap.adapters.mock import MemoryConfigStore, ScriptedPrompter, ScriptedRunner
from devbootstrap.adapters.prompt.console import ConsolePrompter, parse_yes_no
from devbootstrap.adapters.shell.command import SubprocessRunner
from devbootstrap.adapters.stores import GitConfigStore, GoEnvStore, ShellRcStore
from devbootstrap.core.errors import ConfigStoreError
from devbootstrap.core.models.command import EXIT_NOT_FOUND, EXIT_TIMEOUT, CommandResult

# ── Subprocess Runner ────────────────────────────────────────────────


class TestSubprocessRunner:
    def test_success(self):
        result = SubprocessRunner().run([sys.executable, "-c", "print('hello')"])
        assert result.ok
        assert result.output == "hello"
        assert result.argv[0] == sys.executable

    def test_stderr_merged_and_exit_status(self):
        code = "import sys; print('out'); print('Permission denied', file=sys.stderr); sys.exit(3)"
        result = SubprocessRunner().run([sys.executable, "-c", code])

        assert result.exit_status == 3
        assert "out" in result.output
        assert result.contains("permission denied")

    def test_missing_program(self):
        result = SubprocessRunner().run(["definitely-not-a-real-program-xyz"])
        assert result.exit_status == EXIT_NOT_FOUND
        assert "command not found" in result.output

    def test_timeout(self):
        result = SubprocessRunner().run([sys.executable, "-c", "import time; time.sleep(10)"], timeout=1)
        assert result.exit_status == EXIT_TIMEOUT
        assert "timed out" in result.output

    def test_extra_env(self):
        code = "import os; print(os.environ['DEVBOOTSTRAP_TEST'])"
        result = SubprocessRunner().run([sys.executable, "-c", code], env={"DEVBOOTSTRAP_TEST": "yes"})
        assert result.output == "yes"

    def test_is_available(self):
        runner = SubprocessRunner()
        assert runner.is_available(Path(sys.executable).name) or runner.is_available("sh")
        assert not runner.is_available("definitely-not-a-real-program-xyz")


# ── Scripted Runner ──────────────────────────────────────────────────


class TestScriptedRunner:
    def test_default_success(self):
        runner = ScriptedRunner(default_output="ok")
        result = runner.run(["anything"])
        assert result.ok
        assert result.output == "ok"
        assert runner.call_count == 1

    def test_longest_prefix_wins(self):
        runner = ScriptedRunner()
        runner.set_output(["git"], "generic")
        runner.set_output(["git", "ls-remote"], "specific")

        assert runner.run(["git", "ls-remote", "repo"]).output == "specific"
        assert runner.run(["git", "status"]).output == "generic"

    def test_queue_then_repeat_last(self):
        runner = ScriptedRunner()
        runner.set_response(
            ["probe"],
            CommandResult.failure(["probe"], exit_status=2),
            CommandResult.success(["probe"]),
        )
        statuses = [runner.run(["probe"]).exit_status for _ in range(3)]
        assert statuses == [2, 0, 0]

    def test_result_carries_real_argv(self):
        runner = ScriptedRunner()
        runner.set_failure(["git"], "boom")
        assert runner.run(["git", "push"]).argv == ["git", "push"]

    def test_callable_response(self):
        runner = ScriptedRunner()
        runner.set_response(["echo"], lambda argv: CommandResult.success(argv, output=argv[1]))
        assert runner.run(["echo", "hi"]).output == "hi"

    def test_availability(self):
        runner = ScriptedRunner(available=["git"])
        runner.set_available("go")
        runner.set_missing("git")
        assert runner.is_available("go")
        assert not runner.is_available("git")

    def test_calls_to_and_reset(self):
        runner = ScriptedRunner()
        runner.run(["git", "config", "--list"])
        runner.run(["go", "env"])

        assert runner.calls_to("git") == [["git", "config", "--list"]]
        runner.reset()
        assert runner.call_count == 0


# ── Prompters ────────────────────────────────────────────────────────


class TestParseYesNo:
    @pytest.mark.parametrize("answer", ["", "y", "Y", "yes", "YES", " yes "])
    def test_yes(self, answer):
        assert parse_yes_no(answer) is True

    @pytest.mark.parametrize("answer", ["n", "no", "nope", "yess", "1"])
    def test_no(self, answer):
        assert parse_yes_no(answer) is False

    def test_empty_uses_default(self):
        assert parse_yes_no("", default=False) is False


class TestConsolePrompter:
    def test_yes_no_reads_stdin(self):
        with CliRunner().isolation(input="n\n"):
            assert ConsolePrompter().ask_yes_no("Install Docker?") is False

    def test_empty_answer_is_default(self):
        with CliRunner().isolation(input="\n"):
            assert ConsolePrompter().ask_yes_no("Install Docker?") is True

    def test_text_default(self):
        with CliRunner().isolation(input="\n"):
            assert ConsolePrompter().ask_text("Email", default="name@example.org") == "name@example.org"

    def test_text_answer(self):
        with CliRunner().isolation(input="me@example.org\n"):
            assert ConsolePrompter().ask_text("Email", default="name@example.org") == "me@example.org"

    def test_show_and_prompt_text(self):
        with CliRunner().isolation(input="\n") as (out, _err, *_rest):
            prompter = ConsolePrompter()
            prompter.show("✅  done", "success")
            prompter.ask_yes_no("Continue?", default=False)
            text = out.getvalue().decode()
        assert "✅  done" in text
        assert "Continue? (y/N): " in text


class TestScriptedPrompter:
    def test_queued_answers_then_defaults(self):
        prompter = ScriptedPrompter(yes_no=[False], text=["typed"])
        assert prompter.ask_yes_no("a?") is False
        assert prompter.ask_yes_no("b?") is True
        assert prompter.ask_text("c", default="d") == "typed"
        assert prompter.ask_text("e", default="f") == "f"
        assert prompter.questions == ["a?", "b?", "c", "e"]

    def test_empty_text_uses_default(self):
        assert ScriptedPrompter(text=[""]).ask_text("x", default="dflt") == "dflt"

    def test_transcript(self):
        prompter = ScriptedPrompter()
        prompter.show("one")
        prompter.show("two", "error")
        prompter.wait_for_enter("press")
        assert prompter.output == "one\ntwo"
        assert prompter.messages[1] == ("error", "two")
        assert prompter.pauses == ["press"]


# ── Config Stores ────────────────────────────────────────────────────


class TestMemoryConfigStore:
    def test_read_write_contains(self):
        store = MemoryConfigStore("git", {"user.email": "a@b.c"})
        store.write("core.editor", "vim")

        assert store.read("core.editor") == "vim"
        assert store.read("missing") is None
        assert store.contains(r"user\.EMAIL")
        assert store.writes == [("core.editor", "vim")]


class TestGitConfigStore:
    def test_read(self):
        runner = ScriptedRunner()
        runner.set_output(["git", "config", "--global", "--get"], "dev@example.org\n")
        assert GitConfigStore(runner).read("user.email") == "dev@example.org"
        assert runner.call_log == [["git", "config", "--global", "--get", "user.email"]]

    def test_read_unset(self):
        runner = ScriptedRunner()
        runner.set_failure(["git", "config"], "", exit_status=1)
        assert GitConfigStore(runner).read("user.email") is None

    def test_write(self):
        runner = ScriptedRunner()
        GitConfigStore(runner).write("url.git@github.com:.insteadOf", "https://github.com/")
        assert runner.call_log == [
            ["git", "config", "--global", "url.git@github.com:.insteadOf", "https://github.com/"]
        ]

    def test_write_failure(self):
        runner = ScriptedRunner()
        runner.set_failure(["git", "config"], "error: could not lock config file")
        with pytest.raises(ConfigStoreError, match="could not lock"):
            GitConfigStore(runner).write("a.b", "c")

    def test_contains_over_list(self):
        runner = ScriptedRunner()
        runner.set_output(
            ["git", "config", "--global", "--list"],
            "user.email=dev@example.org\nurl.git@github.com:.insteadof=https://github.com/\n",
        )
        store = GitConfigStore(runner)
        assert store.contains(r"url\.git@github\.com:\.insteadOf")
        assert not store.contains(r"url\.git@gitlab\.com")


class TestGoEnvStore:
    def test_read(self):
        runner = ScriptedRunner()
        runner.set_output(["go", "env", "GOPRIVATE"], "github.com/CrisisTextLine/*\n")
        assert GoEnvStore(runner).read("GOPRIVATE") == "github.com/CrisisTextLine/*"

    def test_read_without_go(self):
        runner = ScriptedRunner()
        runner.set_failure(["go"], "go: command not found", exit_status=EXIT_NOT_FOUND)
        assert GoEnvStore(runner).read("GOPRIVATE") is None

    def test_write(self):
        runner = ScriptedRunner()
        GoEnvStore(runner).write("GOPRIVATE", "github.com/CrisisTextLine/*")
        assert runner.call_log == [["go", "env", "-w", "GOPRIVATE=github.com/CrisisTextLine/*"]]

    def test_entries_strip_quotes(self):
        runner = ScriptedRunner()
        runner.set_output(["go", "env"], "GOPATH='/home/dev/go'\nset GOPRIVATE=github.com/x/*\n")
        assert GoEnvStore(runner).entries() == ["GOPATH=/home/dev/go", "GOPRIVATE=github.com/x/*"]


class TestShellRcStore:
    def test_missing_file_is_empty(self, tmp_path):
        store = ShellRcStore(tmp_path / ".bashrc")
        assert store.entries() == []
        assert store.read("PATH") is None

    def test_append_only(self, tmp_path):
        rc = tmp_path / ".bashrc"
        rc.write_text("export EDITOR=vim\n")
        store = ShellRcStore(rc)
        store.write("PATH", "export PATH=$PATH:/opt/bin")

        assert rc.read_text() == "export EDITOR=vim\nexport PATH=$PATH:/opt/bin\n"
        assert store.read("PATH") == "export PATH=$PATH:/opt/bin"

    def test_write_failure(self, tmp_path):
        store = ShellRcStore(tmp_path / "missing-dir" / ".bashrc")
        with pytest.raises(ConfigStoreError):
            store.write("PATH", "export PATH=$PATH")
