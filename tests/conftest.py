"""Shared test configuration and fixtures for the specsync test suite."""

import glob
import json
import shutil
import sys
from pathlib import Path

import pytest

# Add backend to Python path so imports work
backend_dir = str(Path(__file__).parent.parent / "backend")
if backend_dir not in sys.path:
    sys.path.insert(0, backend_dir)

from specsync.core.config import FILE_NAMES, RunConfig  # noqa: E402
from specsync.models.run import ReleaseInfo  # noqa: E402
from specsync.ops.provider import Operations  # noqa: E402


SAMPLE_DOCS = {
    "fixtures2": {"resources": {"charge": {"id": "ch_123", "amount": 100, "paid": True}}},
    "fixtures3": {"resources": {"customer": {"id": "cus_123", "email": None, "tags": ["a", "b"]}}},
    "spec2": {"swagger": "2.0", "info": {"title": "API", "version": "2020-08-27"}, "paths": {}},
    "spec3": {
        "openapi": "3.0.0",
        "info": {"title": "API", "version": "2020-08-27", "description": "Ünïcode ✓"},
        "paths": {"/v1/charges": {"get": {"operationId": "GetCharges", "parameters": []}}},
    },
}


class FakeOperations(Operations):
    """
    Recording provider. Files are really copied inside tmp dirs so the
    conversion output can be checked; everything else is scripted.
    """

    def __init__(self, target_dir: str):
        self.target_dir = target_dir
        self.calls: list[tuple] = []
        self.credential = "gh-token"
        self.dir_exists = True
        self.branch = "master"
        # successive answers for is_repo_clean: before pull, after sync
        self.clean_answers = [True, False]
        # successive answers for any_files_staged: fixtures batch, spec batch
        self.staged_answers = [True, True]
        self.latest_tag = "v4"
        self.release_url = "https://github.com/acme/openapi/releases/tag/{tag}"
        self.aborted_with: str | None = None
        # operation name -> exception raised after the call is recorded
        self.failures: dict[str, Exception] = {}
        self.exited_with: str | None = None

    def names(self) -> list[str]:
        return [c[0] for c in self.calls]

    def _maybe_fail(self, name):
        if name in self.failures:
            raise self.failures[name]

    def abort(self, message):
        self.calls.append(("abort", message))
        self.aborted_with = message

    def exit_success(self, message):
        self.calls.append(("exit_success", message))
        self.exited_with = message

    def is_repo_clean(self, directory):
        self.calls.append(("is_repo_clean", directory))
        return self.clean_answers.pop(0)

    def copy_file(self, source, target):
        self.calls.append(("copy_file", source, target))
        Path(target).parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, target)

    def read_file(self, path):
        self.calls.append(("read_file", path))
        return Path(path).read_text(encoding="utf-8")

    def write_file(self, path, content):
        self.calls.append(("write_file", path))
        Path(path).write_text(content, encoding="utf-8")

    def directory_exists(self, directory):
        self.calls.append(("directory_exists", directory))
        return self.dir_exists

    def glob_match(self, pattern):
        self.calls.append(("glob_match", pattern))
        return sorted(glob.glob(pattern, root_dir=self.target_dir))

    def stage_files(self, paths):
        self.calls.append(("stage_files", list(paths)))

    def any_files_staged(self):
        self.calls.append(("any_files_staged",))
        return self.staged_answers.pop(0)

    def commit(self, message):
        self.calls.append(("commit", message))
        self._maybe_fail("commit")

    def current_branch(self, directory):
        self.calls.append(("current_branch", directory))
        return self.branch

    def fetch_credential(self, account):
        self.calls.append(("fetch_credential", account))
        return self.credential

    def create_release(self, org, repo, credential, tag):
        self.calls.append(("create_release", org, repo, credential, tag))
        self._maybe_fail("create_release")
        return ReleaseInfo(tag_name=tag, html_url=self.release_url.format(tag=tag))

    def latest_release_tag(self, org, repo, credential):
        self.calls.append(("latest_release_tag", org, repo, credential))
        self._maybe_fail("latest_release_tag")
        return self.latest_tag

    def pull(self):
        self.calls.append(("pull",))
        self._maybe_fail("pull")
        return "Already up to date.\n"

    def push(self):
        self.calls.append(("push",))
        self._maybe_fail("push")
        return ""


@pytest.fixture
def source_dir(tmp_path):
    root = tmp_path / "upstream"
    (root / "openapi").mkdir(parents=True)
    for name in FILE_NAMES:
        (root / "openapi" / f"{name}.json").write_text(
            json.dumps(SAMPLE_DOCS[name], indent=2, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )
    return root


@pytest.fixture
def target_dir(tmp_path):
    root = tmp_path / "public"
    (root / "openapi").mkdir(parents=True)
    return root


@pytest.fixture
def config(source_dir, target_dir):
    return RunConfig(
        source_dir=str(source_dir),
        target_dir=str(target_dir),
        org="acme",
        repo="openapi",
        operator="jdoe",
        edit_commit_messages=False,
    )


@pytest.fixture
def fake_ops(target_dir):
    return FakeOperations(str(target_dir))
