"""
specsync — Sync workflow.

Runs one update as a sequence of gates:

  credential → source exists → source on branch → target clean
  → pull → copy + convert → target changed? → commit fixtures
  → commit spec → push → release

A failed precondition aborts before anything is modified. An
unchanged target after copying ends the run successfully. Failures
inside git or the GitHub API are not caught here.
"""

from __future__ import annotations

import time
import uuid

from specsync.core.config import RunConfig
from specsync.models.run import RunResult, RunState, StepTiming
from specsync.ops.provider import Operations
from specsync.pipeline.convert import json_to_yaml
from specsync.utils.logging import logger


class SyncWorkflow:
    """
    Drives one sync run against an Operations provider.

    Each step is timed and recorded in the RunResult. Abort and
    early-success exits return the result so that fake providers, which
    do not exit the process, still stop the run.
    """

    def __init__(self, config: RunConfig, ops: Operations):
        self.config = config
        self.ops = ops
        self.result = RunResult(run_id=uuid.uuid4().hex[:12], dry_run=config.dry_run)
        self.credential = ""

    @property
    def state(self) -> RunState:
        return self.result.state

    def _record_step(self, name: str, start: float, status: str = "ok", detail: str = ""):
        ms = int((time.perf_counter() - start) * 1000)
        self.result.timings.append(StepTiming(step=name, duration_ms=ms, status=status, detail=detail))
        symbol = "✓" if status == "ok" else ("⊘" if status == "skipped" else "✗")
        logger.info("  %s %s — %dms %s", symbol, name, ms, detail)

    def _abort(self, step: str, start: float, message: str) -> RunResult:
        self._record_step(step, start, "failed", message)
        self.result.state = RunState.ABORTED
        self.result.abort_reason = message
        self.ops.abort(message)
        return self.result

    def run(self) -> RunResult:
        """Execute the full workflow. Returns the RunResult."""
        logger.info("=" * 60)
        logger.info(
            "[%s] Sync starting (%s/%s, dry_run=%s)",
            self.result.run_id, self.config.org, self.config.repo, self.config.dry_run,
        )
        logger.info("=" * 60)
        run_start = time.perf_counter()

        if not self._step_credential():
            return self.result
        if not self._step_preconditions():
            return self.result

        self._step_pull()
        self._step_sync_files()

        t = time.perf_counter()
        if self.ops.is_repo_clean(self.config.target_dir):
            self._record_step("detect_changes", t, "skipped", "target unchanged")
            self.result.state = RunState.NO_CHANGES
            self.ops.exit_success("No changes to commit; the public specification is already up to date.")
            return self.result
        self._record_step("detect_changes", t)

        self.result.fixtures_committed = self._commit_batch(
            "fixtures", self.config.fixtures_pattern, self.config.fixtures_commit_message,
        )
        self.result.spec_committed = self._commit_batch(
            "specification", self.config.spec_pattern, self.config.spec_commit_message,
        )
        if self.result.fixtures_committed or self.result.spec_committed:
            self.result.state = RunState.COMMITTED

        self._step_push()
        self._step_release()

        self.result.state = RunState.COMPLETED
        total_ms = int((time.perf_counter() - run_start) * 1000)
        logger.info("=" * 60)
        logger.info(
            "[%s] Sync complete — fixtures=%s spec=%s pushed=%s release=%s, %dms",
            self.result.run_id,
            self.result.fixtures_committed,
            self.result.spec_committed,
            self.result.pushed,
            self.result.release.tag_name if self.result.release else "none",
            total_ms,
        )
        logger.info("=" * 60)
        return self.result

    def _step_credential(self) -> bool:
        t = time.perf_counter()
        self.credential = self.ops.fetch_credential(self.config.operator)
        if not self.credential:
            self._abort(
                "credential", t,
                f"Could not fetch a GitHub token for '{self.config.operator}'. "
                "Re-authenticate with the credential helper and try again.",
            )
            return False
        self.result.state = RunState.AUTHENTICATED
        self._record_step("credential", t)
        return True

    def _step_preconditions(self) -> bool:
        t = time.perf_counter()
        source = self.config.source_dir

        if not self.ops.directory_exists(source):
            self._abort("preconditions", t, f"Source directory does not exist: {source}")
            return False

        branch = self.ops.current_branch(source)
        if branch != self.config.expected_branch:
            self._abort(
                "preconditions", t,
                f"Source repository {source} is on '{branch}', expected '{self.config.expected_branch}'.",
            )
            return False

        if not self.ops.is_repo_clean(self.config.target_dir):
            self._abort(
                "preconditions", t,
                f"Target repository {self.config.target_dir} has uncommitted changes; "
                "commit or stash them first.",
            )
            return False

        self.result.state = RunState.PRECONDITIONS_PASSED
        self._record_step("preconditions", t)
        return True

    def _step_pull(self):
        t = time.perf_counter()
        output = self.ops.pull()
        self.result.state = RunState.PULLED
        self._record_step("pull", t, detail=output.strip().splitlines()[-1] if output.strip() else "")

    def _step_sync_files(self):
        t = time.perf_counter()
        mappings = self.config.file_mappings()
        for mapping in mappings:
            logger.info("  Syncing %s", mapping.name)
            self.ops.copy_file(mapping.source_path, mapping.target_path)
            content = self.ops.read_file(mapping.target_path)
            self.ops.write_file(mapping.converted_path, json_to_yaml(content, source=mapping.target_path))
        self.result.state = RunState.FILES_SYNCED
        self._record_step("sync_files", t, detail=f"{len(mappings)} files")

    def _commit_batch(self, label: str, pattern: str, message: str) -> bool:
        t = time.perf_counter()
        paths = self.ops.glob_match(pattern)
        self.ops.stage_files(paths)
        if not self.ops.any_files_staged():
            self._record_step(f"commit_{label}", t, "skipped", f"no {label} changes")
            return False
        self.ops.commit(message)
        self._record_step(f"commit_{label}", t, detail=f"{len(paths)} files")
        return True

    def _step_push(self):
        t = time.perf_counter()
        if self.config.dry_run:
            self._record_step("push", t, "skipped", "dry run")
            return
        self.ops.push()
        self.result.pushed = True
        self.result.state = RunState.PUSHED
        self._record_step("push", t)

    def _step_release(self):
        t = time.perf_counter()
        if self.config.dry_run:
            self._record_step("release", t, "skipped", "dry run")
            return
        if not self.result.spec_committed:
            self._record_step("release", t, "skipped", "no specification changes")
            return

        org, repo = self.config.org, self.config.repo
        latest = self.ops.latest_release_tag(org, repo, self.credential)
        tag = self.ops.increment_version(latest)
        release = self.ops.create_release(org, repo, self.credential, tag)
        self.result.release = release
        self.result.state = RunState.RELEASED
        logger.info("  Released %s: %s", release.tag_name, release.html_url)
        self._record_step("release", t, detail=tag)
