from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any

import numpy as np

from plumbline.runner import TestOutcome, UnexpectedError


@dataclass
class DurationStatistics:
    """Statistics for test durations, in milliseconds."""

    avg: float | None
    min: float | None
    max: float | None
    stddev: float | None

    def to_dict(self) -> dict[str, float | None]:
        return asdict(self)


@dataclass
class RunSummary:
    """Totals for a set of outcomes."""

    total: int
    passed: int
    failed: int
    errors: int
    pass_rate: float
    durations: DurationStatistics

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class Recorder:
    """Outcome listener that keeps every outcome it is handed, in order."""

    outcomes: list[TestOutcome] = field(default_factory=list)

    def __call__(self, outcome: TestOutcome) -> None:
        self.outcomes.append(outcome)

    @property
    def passed(self) -> list[TestOutcome]:
        return [o for o in self.outcomes if o.passed]

    @property
    def failed(self) -> list[TestOutcome]:
        return [o for o in self.outcomes if not o.passed]

    @property
    def all_passed(self) -> bool:
        return all(o.passed for o in self.outcomes)


def compute_stats(values: list[float | int | None]) -> DurationStatistics:
    """Compute avg, min, max, stddev for a list of numeric values."""
    nums = [v for v in values if v is not None]
    if not nums:
        return DurationStatistics(avg=None, min=None, max=None, stddev=None)

    arr = np.array(nums, dtype=float)
    return DurationStatistics(
        avg=round(float(np.mean(arr)), 4),
        min=round(float(np.min(arr)), 4),
        max=round(float(np.max(arr)), 4),
        stddev=round(float(np.std(arr)), 4),
    )


def summarize(outcomes: list[TestOutcome]) -> RunSummary:
    total = len(outcomes)
    passed = sum(1 for o in outcomes if o.passed)
    errors = sum(1 for o in outcomes if isinstance(o.failure, UnexpectedError))
    pass_rate = (passed / total * 100) if total > 0 else 0.0

    return RunSummary(
        total=total,
        passed=passed,
        failed=total - passed - errors,
        errors=errors,
        pass_rate=round(pass_rate, 2),
        durations=compute_stats([o.elapsed_ms for o in outcomes]),
    )
