"""
Mock adapters — test doubles for every capability.

Used to drive the workflow without touching the terminal, the network
or the user's real configuration:

    ScriptedRunner     — canned CommandResults keyed by argv prefix
    ScriptedPrompter   — queued answers, records everything shown
    MemoryConfigStore  — a dict pretending to be git/go/shell config
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence

from devbootstrap.adapters.base import CommandRunner, ConfigStore, MessageStyle, Prompter
from devbootstrap.core.models.command import CommandResult

Handler = Callable[[list[str]], CommandResult]
Response = CommandResult | Handler


class ScriptedRunner(CommandRunner):
    """Command runner that replays scripted results.

    Responses are registered per argv prefix; the longest matching
    prefix wins. Several responses for one prefix are consumed in
    order and the last one repeats. A response may be a callable
    taking the argv, for side effects such as creating key files.
    Unmatched commands succeed with ``default_output``.
    """

    def __init__(
        self,
        available: Sequence[str] = (),
        default_output: str = "",
    ):
        self._available: set[str] = set(available)
        self._default_output = default_output
        self._responses: dict[tuple[str, ...], list[Response]] = {}
        self._call_log: list[list[str]] = []

    @property
    def name(self) -> str:
        return "scripted"

    @property
    def call_log(self) -> list[list[str]]:
        """Every argv this runner has received, in order."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def calls_to(self, *prefix: str) -> list[list[str]]:
        """Calls whose argv starts with ``prefix``."""
        return [argv for argv in self._call_log if tuple(argv[: len(prefix)]) == prefix]

    # ── Scripting ───────────────────────────────────────────────

    def set_available(self, *programs: str) -> None:
        self._available.update(programs)

    def set_missing(self, *programs: str) -> None:
        self._available.difference_update(programs)

    def set_response(self, prefix: Sequence[str], *responses: Response) -> None:
        """Queue responses for commands starting with ``prefix``."""
        self._responses[tuple(prefix)] = list(responses)

    def set_output(self, prefix: Sequence[str], output: str, exit_status: int = 0) -> None:
        """Shortcut: respond with a fixed output and exit status."""
        self.set_response(
            prefix,
            CommandResult(argv=list(prefix), exit_status=exit_status, output=output),
        )

    def set_failure(self, prefix: Sequence[str], output: str = "mock failure", exit_status: int = 1) -> None:
        """Configure commands starting with ``prefix`` to fail."""
        self.set_output(prefix, output, exit_status=exit_status)

    # ── CommandRunner ───────────────────────────────────────────

    def is_available(self, program: str) -> bool:
        return program in self._available

    def run(
        self,
        argv: Sequence[str],
        *,
        interactive: bool = False,
        timeout: int | None = None,
        env: Mapping[str, str] | None = None,
    ) -> CommandResult:
        cmd = list(argv)
        self._call_log.append(cmd)

        prefix = self._match(cmd)
        if prefix is None:
            return CommandResult.success(cmd, output=self._default_output)

        queue = self._responses[prefix]
        response = queue.pop(0) if len(queue) > 1 else queue[0]
        if callable(response):
            return response(cmd)
        return response.model_copy(update={"argv": cmd})

    def _match(self, cmd: list[str]) -> tuple[str, ...] | None:
        best: tuple[str, ...] | None = None
        for prefix in self._responses:
            if tuple(cmd[: len(prefix)]) == prefix and (best is None or len(prefix) > len(best)):
                best = prefix
        return best

    def reset(self) -> None:
        """Clear call log and scripted responses."""
        self._call_log.clear()
        self._responses.clear()


class ScriptedPrompter(Prompter):
    """Prompter that answers from queues and records the conversation.

    When a queue runs dry the question's default is used, as if the
    operator pressed Enter.
    """

    def __init__(self, yes_no: Sequence[bool] = (), text: Sequence[str] = ()):
        self._yes_no = list(yes_no)
        self._text = list(text)
        self.questions: list[str] = []
        self.messages: list[tuple[str, str]] = []
        self.pauses: list[str] = []

    def ask_yes_no(self, question: str, default: bool = True) -> bool:
        self.questions.append(question)
        if self._yes_no:
            return self._yes_no.pop(0)
        return default

    def ask_text(self, prompt: str, default: str = "") -> str:
        self.questions.append(prompt)
        if self._text:
            return self._text.pop(0) or default
        return default

    def wait_for_enter(self, message: str) -> None:
        self.pauses.append(message)

    def show(self, message: str, style: MessageStyle = "info") -> None:
        self.messages.append((style, message))

    @property
    def output(self) -> str:
        """Everything shown, one message per line."""
        return "\n".join(message for _style, message in self.messages)


class MemoryConfigStore(ConfigStore):
    """In-memory configuration store with a write log."""

    def __init__(self, store_name: str = "memory", values: Mapping[str, str] | None = None):
        self._name = store_name
        self.values: dict[str, str] = dict(values or {})
        self.writes: list[tuple[str, str]] = []

    @property
    def name(self) -> str:
        return self._name

    def read(self, key: str) -> str | None:
        return self.values.get(key)

    def write(self, key: str, value: str) -> None:
        self.writes.append((key, value))
        self.values[key] = value

    def entries(self) -> list[str]:
        return [f"{key}={value}" for key, value in self.values.items()]
