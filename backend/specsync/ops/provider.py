"""
specsync — Operations provider.

Every side effect the sync workflow performs goes through an Operations
object: filesystem, git, the credential helper and the GitHub API. The
workflow only talks to this interface, so tests can swap in a recording
fake and check the exact sequence of calls.

RealOperations runs git in the target repository except where a method
takes an explicit directory.
"""

from __future__ import annotations

import abc
import glob
import os
import shutil
import sys
from pathlib import Path
from typing import NoReturn

from specsync.core.config import RunConfig
from specsync.github.auth import GitHubCredentials, fetch_token
from specsync.github.releases import ReleasesClient, increment_version
from specsync.models.run import ReleaseInfo
from specsync.ops import git
from specsync.utils.logging import logger


class Operations(abc.ABC):
    """Side-effecting primitives used by SyncWorkflow."""

    @abc.abstractmethod
    def abort(self, message: str) -> None:
        """Stop the run with a failure. Real implementations do not return."""

    @abc.abstractmethod
    def exit_success(self, message: str) -> None:
        """Stop the run successfully. Real implementations do not return."""

    @abc.abstractmethod
    def is_repo_clean(self, directory: str) -> bool: ...

    @abc.abstractmethod
    def copy_file(self, source: str, target: str) -> None: ...

    @abc.abstractmethod
    def read_file(self, path: str) -> str: ...

    @abc.abstractmethod
    def write_file(self, path: str, content: str) -> None: ...

    @abc.abstractmethod
    def directory_exists(self, directory: str) -> bool: ...

    @abc.abstractmethod
    def glob_match(self, pattern: str) -> list[str]: ...

    @abc.abstractmethod
    def stage_files(self, paths: list[str]) -> None: ...

    @abc.abstractmethod
    def any_files_staged(self) -> bool: ...

    @abc.abstractmethod
    def commit(self, message: str) -> None: ...

    @abc.abstractmethod
    def current_branch(self, directory: str) -> str: ...

    @abc.abstractmethod
    def fetch_credential(self, account: str) -> str:
        """Secret for `account`, or "" when it cannot be obtained."""

    @abc.abstractmethod
    def create_release(self, org: str, repo: str, credential: str, tag: str) -> ReleaseInfo: ...

    @abc.abstractmethod
    def latest_release_tag(self, org: str, repo: str, credential: str) -> str:
        """Newest tag, or "v0" when the repository has no releases."""

    def increment_version(self, tag: str) -> str:
        return increment_version(tag)

    @abc.abstractmethod
    def pull(self) -> str: ...

    @abc.abstractmethod
    def push(self) -> str: ...


class RealOperations(Operations):
    """Operations against the real filesystem, git and GitHub."""

    def __init__(self, config: RunConfig):
        self.config = config
        self.repo_dir = config.target_dir

    def abort(self, message: str) -> NoReturn:
        print(f"\n  ERROR: {message}\n", file=sys.stderr)
        sys.exit(1)

    def exit_success(self, message: str) -> NoReturn:
        logger.info(message)
        sys.exit(0)

    def is_repo_clean(self, directory: str) -> bool:
        return git.is_clean(directory)

    def copy_file(self, source: str, target: str) -> None:
        Path(target).parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, target)
        logger.info("  Copied %s → %s", source, target)

    def read_file(self, path: str) -> str:
        return Path(path).read_text(encoding="utf-8")

    def write_file(self, path: str, content: str) -> None:
        Path(path).write_text(content, encoding="utf-8")
        logger.info("  Wrote %s (%d bytes)", path, len(content.encode("utf-8")))

    def directory_exists(self, directory: str) -> bool:
        return os.path.isdir(directory)

    def glob_match(self, pattern: str) -> list[str]:
        return sorted(glob.glob(pattern, root_dir=self.repo_dir))

    def stage_files(self, paths: list[str]) -> None:
        git.add(self.repo_dir, paths)

    def any_files_staged(self) -> bool:
        return git.has_staged_changes(self.repo_dir)

    def commit(self, message: str) -> None:
        git.commit(self.repo_dir, message, edit=self.config.edit_commit_messages)

    def current_branch(self, directory: str) -> str:
        return git.current_branch(directory)

    def fetch_credential(self, account: str) -> str:
        return fetch_token(self.config.credential_command, account)

    def _releases(self, credential: str) -> ReleasesClient:
        return ReleasesClient(
            credentials=GitHubCredentials(token=credential),
            base_url=self.config.github_api_url,
            timeout=self.config.http_timeout,
        )

    def create_release(self, org: str, repo: str, credential: str, tag: str) -> ReleaseInfo:
        return self._releases(credential).create_release(org, repo, tag)

    def latest_release_tag(self, org: str, repo: str, credential: str) -> str:
        return self._releases(credential).latest_tag(org, repo)

    def pull(self) -> str:
        return git.pull(self.repo_dir)

    def push(self) -> str:
        return git.push(self.repo_dir)
