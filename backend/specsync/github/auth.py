"""
specsync — GitHub authentication helpers.

The token comes from an external password helper invoked with the
operator's account name. The releases API takes it as a
`Bearer` authorization header on every request.
"""

import shlex
import subprocess
from dataclasses import dataclass

from specsync.utils.logging import logger

ACCEPT_HEADER = "application/vnd.github.v3+json"


@dataclass(frozen=True)
class GitHubCredentials:
    token: str

    def as_headers(self) -> dict[str, str]:
        """Return the auth headers required by the GitHub REST API."""
        return {
            "Accept": ACCEPT_HEADER,
            "Authorization": f"Bearer {self.token}",
        }


def fetch_token(command: str, account: str, timeout: float = 30.0) -> str:
    """
    Run `<command> <account>` and return the secret it prints.

    Returns an empty string when the helper is missing, fails, or prints
    nothing. The reason is logged so an expired login can be told apart
    from a broken helper.
    """
    parts = shlex.split(command)
    if not parts:
        logger.warning("  No credential helper configured")
        return ""
    argv = parts + [account]
    try:
        proc = subprocess.run(
            argv,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError:
        logger.warning("  Credential helper not found: %s", argv[0])
        return ""
    except subprocess.TimeoutExpired:
        logger.warning("  Credential helper timed out after %.0fs", timeout)
        return ""

    if proc.returncode != 0:
        logger.warning(
            "  Credential helper exited with %d: %s",
            proc.returncode, proc.stderr.strip()[:200],
        )
        return ""
    return proc.stdout.strip()
