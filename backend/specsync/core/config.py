"""
specsync — Run configuration.
Loads .env automatically, then reads all settings from environment variables.
"""

import getpass
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from specsync.errors import ConfigError
from specsync.models.run import FileMapping
from specsync.pipeline.convert import converted_path_for

_env_path = Path(__file__).resolve().parent.parent.parent.parent / ".env"
load_dotenv(_env_path)

FILE_NAMES = ("fixtures2", "fixtures3", "spec2", "spec3")

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def _default_operator() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return ""


@dataclass(frozen=True)
class RunConfig:
    """Everything one sync run needs. Fixed at start-up."""
    source_dir: str
    target_dir: str
    org: str
    repo: str
    dry_run: bool = False
    expected_branch: str = "master"
    operator: str = ""
    credential_command: str = "fetch-password"
    source_subdir: str = "openapi"
    target_subdir: str = "openapi"
    file_names: tuple[str, ...] = FILE_NAMES
    fixtures_commit_message: str = "Update OpenAPI fixtures"
    spec_commit_message: str = "Update OpenAPI specification"
    github_api_url: str = "https://api.github.com"
    http_timeout: float = 30.0
    edit_commit_messages: bool = True

    @property
    def fixtures_pattern(self) -> str:
        return f"{self.target_subdir}/fixtures*"

    @property
    def spec_pattern(self) -> str:
        return f"{self.target_subdir}/spec*"

    def file_mappings(self) -> list[FileMapping]:
        """Source/target/converted paths for every fixed file name, in order."""
        source_root = Path(self.source_dir) / self.source_subdir
        target_root = Path(self.target_dir) / self.target_subdir
        mappings = []
        for name in self.file_names:
            target_path = str(target_root / f"{name}.json")
            mappings.append(FileMapping(
                name=name,
                source_path=str(source_root / f"{name}.json"),
                target_path=target_path,
                converted_path=converted_path_for(target_path),
            ))
        return mappings


def load_config(**overrides: Any) -> RunConfig:
    """Build a RunConfig from SPECSYNC_* variables; keyword overrides win."""
    cfg = RunConfig(
        source_dir=os.path.expanduser(os.getenv("SPECSYNC_SOURCE_DIR", "")),
        target_dir=os.path.expanduser(os.getenv("SPECSYNC_TARGET_DIR", os.getcwd())),
        org=os.getenv("SPECSYNC_ORG", ""),
        repo=os.getenv("SPECSYNC_REPO", ""),
        dry_run=_env_flag("SPECSYNC_DRY_RUN"),
        expected_branch=os.getenv("SPECSYNC_BRANCH", "master"),
        operator=os.getenv("SPECSYNC_OPERATOR") or _default_operator(),
        credential_command=os.getenv("SPECSYNC_CREDENTIAL_COMMAND", "fetch-password"),
        source_subdir=os.getenv("SPECSYNC_SOURCE_SUBDIR", "openapi"),
        target_subdir=os.getenv("SPECSYNC_TARGET_SUBDIR", "openapi"),
        github_api_url=os.getenv("SPECSYNC_GITHUB_API_URL", "https://api.github.com"),
        http_timeout=float(os.getenv("SPECSYNC_HTTP_TIMEOUT", "30.0")),
        edit_commit_messages=_env_flag("SPECSYNC_EDIT_COMMIT", default=True),
    )
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if overrides:
        cfg = replace(cfg, **overrides)
    return cfg


def validate_config(cfg: RunConfig) -> None:
    """Fail fast if required settings are missing."""
    missing: list[str] = []
    if not cfg.source_dir:
        missing.append("SPECSYNC_SOURCE_DIR")
    if not cfg.org:
        missing.append("SPECSYNC_ORG")
    if not cfg.repo:
        missing.append("SPECSYNC_REPO")
    if not cfg.credential_command.strip():
        missing.append("SPECSYNC_CREDENTIAL_COMMAND")
    if missing:
        raise ConfigError(missing)
