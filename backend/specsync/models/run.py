"""
specsync — Run result and workflow output contracts.

Every sync run returns a RunResult: which gate it stopped at,
which batches committed, and the release it published.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field


class RunState(str, enum.Enum):
    STARTED = "STARTED"
    AUTHENTICATED = "AUTHENTICATED"
    PRECONDITIONS_PASSED = "PRECONDITIONS_PASSED"
    PULLED = "PULLED"
    FILES_SYNCED = "FILES_SYNCED"
    COMMITTED = "COMMITTED"
    PUSHED = "PUSHED"
    RELEASED = "RELEASED"
    COMPLETED = "COMPLETED"
    NO_CHANGES = "NO_CHANGES"
    ABORTED = "ABORTED"


class StepTiming(BaseModel):
    step: str
    duration_ms: int
    status: str = "ok"  # ok | skipped | failed
    detail: str = ""


class FileMapping(BaseModel):
    """One logical file: where it comes from and the two files it becomes."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    source_path: str
    target_path: str
    converted_path: str


class ReleaseInfo(BaseModel):
    """The parts of a GitHub release response we rely on."""

    model_config = ConfigDict(extra="ignore")

    tag_name: str = Field(min_length=1)
    html_url: str = Field(min_length=1)


class RunResult(BaseModel):
    """Complete output contract for one sync run."""

    run_id: str
    state: RunState = RunState.STARTED
    dry_run: bool = False
    fixtures_committed: bool = False
    spec_committed: bool = False
    pushed: bool = False
    release: ReleaseInfo | None = None
    abort_reason: str = ""
    timings: list[StepTiming] = Field(default_factory=list)
