"""specsync data models — typed contracts for the sync workflow."""

from specsync.models.run import (
    RunState,
    StepTiming,
    FileMapping,
    ReleaseInfo,
    RunResult,
)

__all__ = [
    "RunState",
    "StepTiming",
    "FileMapping",
    "ReleaseInfo",
    "RunResult",
]
