"""
specsync — command-line entry point.

  specsync                 Sync, commit, push and release
  specsync --dry-run       Sync and commit locally only
  SPECSYNC_SELF_TEST=1     Run the bundled unit tests instead

Exit status is 0 on success (including "no changes") and 1 on any
abort or error.
"""

import argparse
import os
import sys
from pathlib import Path

from specsync.core.config import RunConfig, load_config, validate_config
from specsync.errors import SpecSyncError
from specsync.ops.provider import RealOperations
from specsync.pipeline.workflow import SyncWorkflow
from specsync.utils.logging import logger

_TESTS_DIR = Path(__file__).resolve().parent.parent.parent / "tests" / "unit"


def _args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="specsync",
        description="Copy the OpenAPI spec and fixtures into the public repository and cut a release.",
    )
    p.add_argument("--dry-run", action="store_true", default=None,
                   help="Commit locally but do not push or create a release")
    p.add_argument("--source-dir", default=None, help="Upstream checkout (SPECSYNC_SOURCE_DIR)")
    p.add_argument("--target-dir", default=None, help="Public repository checkout (SPECSYNC_TARGET_DIR)")
    p.add_argument("--no-edit", dest="edit_commit_messages", action="store_false", default=None,
                   help="Commit without opening an editor")
    return p.parse_args(argv)


def _self_test() -> int:
    if not _TESTS_DIR.is_dir():
        logger.error("SPECSYNC_SELF_TEST needs a source checkout; %s not found", _TESTS_DIR)
        return 1

    import pytest

    logger.info("SPECSYNC_SELF_TEST set — running unit tests in %s", _TESTS_DIR)
    return int(pytest.main([str(_TESTS_DIR), "-q"]))


def build_config(args: argparse.Namespace) -> RunConfig:
    cfg = load_config(
        dry_run=args.dry_run,
        source_dir=os.path.expanduser(args.source_dir) if args.source_dir else None,
        target_dir=os.path.expanduser(args.target_dir) if args.target_dir else None,
        edit_commit_messages=args.edit_commit_messages,
    )
    validate_config(cfg)
    return cfg


def main(argv: list[str] | None = None) -> int:
    if os.getenv("SPECSYNC_SELF_TEST"):
        return _self_test()

    args = _args(argv)
    try:
        cfg = build_config(args)
        result = SyncWorkflow(cfg, RealOperations(cfg)).run()
    except SpecSyncError as exc:
        print(f"\n  ERROR [{exc.code}]: {exc.message}", file=sys.stderr)
        if exc.detail:
            print(f"  {exc.detail}", file=sys.stderr)
        if exc.suggestion:
            print(f"  {exc.suggestion}\n", file=sys.stderr)
        return 1

    logger.info("Run %s finished in state %s", result.run_id, result.state.value)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
