"""
Schemas
File: verification.py

Purpose: Result format for proof checks and scenario runs.
A rejected proof is an ordinary result, never an exception; the CLI
and the API report these directly.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CheckResult(BaseModel):
    """
    Outcome of one check.

    check_id names the step that decided the outcome (e.g. "proof_length",
    "root_match") or, for scenario runs, the scenario.
    """

    model_config = ConfigDict(extra="forbid")

    check_id: str = Field(..., min_length=1)
    ok: bool
    message: str
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Context: field, index, timestamp, expected/actual outcome",
    )

    @classmethod
    def passed(
        cls,
        check_id: str,
        message: str = "Check passed",
        details: dict[str, Any] | None = None,
    ) -> "CheckResult":
        return cls(check_id=check_id, ok=True, message=message, details=details or {})

    @classmethod
    def failed(
        cls,
        check_id: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> "CheckResult":
        return cls(check_id=check_id, ok=False, message=message, details=details or {})


class VerificationResult(BaseModel):
    """Aggregate of several checks; ok only when every check passed."""

    model_config = ConfigDict(extra="forbid")

    ok: bool
    checks: list[CheckResult] = Field(default_factory=list)

    @property
    def passed_count(self) -> int:
        return sum(1 for check in self.checks if check.ok)

    @property
    def failed_count(self) -> int:
        return len(self.checks) - self.passed_count

    def get_failed_checks(self) -> list[CheckResult]:
        return [check for check in self.checks if not check.ok]

    @classmethod
    def from_checks(cls, checks: list[CheckResult]) -> "VerificationResult":
        return cls(ok=all(check.ok for check in checks), checks=checks)


__all__ = [
    "CheckResult",
    "VerificationResult",
]
