"""
specsync — Structured error catalog.

Every error has a code, human message, and suggested fix.
Guarded precondition failures do not use these; they go through
Operations.abort. These cover the failures that propagate.
"""

from __future__ import annotations

from typing import Any


class SpecSyncError(Exception):
    """Base error with structured code + suggestion."""

    def __init__(self, code: str, message: str, suggestion: str = "", detail: Any = None):
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.detail = detail
        super().__init__(message)


class ConfigError(SpecSyncError):
    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(
            code="CONFIG_INVALID",
            message=f"Missing required settings: {', '.join(missing)}",
            suggestion="Export the variables or add them to the .env file at the repository root.",
            detail=missing,
        )


class GitCommandError(SpecSyncError):
    def __init__(self, args: list[str], returncode: int, stderr: str = ""):
        self.command = args
        self.returncode = returncode
        subcommand = args[0] if args else "unknown"
        super().__init__(
            code=f"GIT_{subcommand.upper().replace('-', '_')}_FAILED",
            message=f"git {' '.join(args)} exited with status {returncode}",
            suggestion="Run the same git command by hand in the target repository to see what went wrong.",
            detail=stderr.strip()[:500] if stderr else None,
        )


class GitHubAPIError(SpecSyncError):
    def __init__(self, api: str, status: int, body: str = ""):
        self.status = status
        super().__init__(
            code=f"GITHUB_{api.upper().replace(' ', '_')}_ERROR",
            message=f"GitHub {api} returned HTTP {status}",
            suggestion="Check that the token has repo scope and the organization/repository names are right.",
            detail=body[:500] if body else None,
        )


class ReleaseResponseError(SpecSyncError):
    def __init__(self, message: str):
        super().__init__(
            code="RELEASE_RESPONSE_INVALID",
            message=f"Unexpected release response: {message}",
            suggestion="The release may still have been created; check the releases page before retrying.",
        )


class ConversionError(SpecSyncError):
    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(
            code="CONVERSION_FAILED",
            message=f"Could not convert {path} to YAML: {message}",
            suggestion="Make sure the upstream file is valid JSON.",
        )
