"""
StepResult and ProvisionReport — what each provisioning step did.

Every "ensure" step returns a StepResult. The orchestrator collects
them into a ProvisionReport that the CLI summarizes. Fatal failures
are not StepResults; they are raised (see ``core.errors``).
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

StepStatus = Literal["ok", "changed", "skipped", "degraded"]


class StepResult(BaseModel):
    """Outcome of a single idempotent step.

    Statuses:
        ok       — already satisfied, nothing was touched
        changed  — a mutation was performed
        skipped  — the operator declined, or the step does not apply here
        degraded — a best-effort step failed; the run continues
    """

    step: str
    status: StepStatus = "ok"
    message: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def changed(self) -> bool:
        return self.status == "changed"

    @property
    def degraded(self) -> bool:
        return self.status == "degraded"

    @classmethod
    def satisfied(cls, step: str, message: str = "", **kwargs: Any) -> StepResult:
        """Create an already-satisfied result."""
        return cls(step=step, status="ok", message=message, **kwargs)

    @classmethod
    def applied(cls, step: str, message: str = "", **kwargs: Any) -> StepResult:
        """Create a result for a step that changed the machine."""
        return cls(step=step, status="changed", message=message, **kwargs)

    @classmethod
    def skip(cls, step: str, reason: str = "", **kwargs: Any) -> StepResult:
        """Create a skipped result."""
        return cls(step=step, status="skipped", message=reason, **kwargs)

    @classmethod
    def degrade(cls, step: str, reason: str, **kwargs: Any) -> StepResult:
        """Create a degraded (best-effort failure) result."""
        return cls(step=step, status="degraded", message=reason, **kwargs)


class ProvisionReport(BaseModel):
    """Ordered results of a provisioning run."""

    results: list[StepResult] = Field(default_factory=list)

    def add(self, result: StepResult) -> StepResult:
        self.results.append(result)
        return result

    def extend(self, results: list[StepResult]) -> None:
        self.results.extend(results)

    @property
    def changed(self) -> list[StepResult]:
        """Steps that performed a mutation."""
        return [r for r in self.results if r.changed]

    @property
    def degraded(self) -> list[StepResult]:
        """Best-effort steps that failed."""
        return [r for r in self.results if r.degraded]

    @property
    def skipped(self) -> list[StepResult]:
        return [r for r in self.results if r.status == "skipped"]

    def get(self, step: str) -> StepResult | None:
        """Find the result for a step by name (last one wins)."""
        for result in reversed(self.results):
            if result.step == step:
                return result
        return None
