"""Unit tests for the structured error catalog."""

from specsync.errors import (
    SpecSyncError, ConfigError, GitCommandError,
    GitHubAPIError, ReleaseResponseError, ConversionError,
)


class TestErrorCatalog:
    def test_base_error(self):
        e = SpecSyncError(code="TEST", message="test msg", suggestion="try this")
        assert e.code == "TEST"
        assert e.message == "test msg"
        assert str(e) == "test msg"
        assert e.suggestion == "try this"
        assert e.detail is None

    def test_config_error(self):
        e = ConfigError(["SPECSYNC_ORG"])
        assert e.code == "CONFIG_INVALID"
        assert "SPECSYNC_ORG" in e.message
        assert e.detail == ["SPECSYNC_ORG"]

    def test_git_command_error(self):
        e = GitCommandError(["push"], 128, "fatal: could not read from remote\n")
        assert e.code == "GIT_PUSH_FAILED"
        assert "128" in e.message
        assert e.returncode == 128
        assert e.detail == "fatal: could not read from remote"

    def test_git_command_error_hyphenated(self):
        e = GitCommandError(["rev-parse", "HEAD"], 1)
        assert e.code == "GIT_REV_PARSE_FAILED"
        assert e.detail is None

    def test_github_api_error(self):
        e = GitHubAPIError("create release", 401, "Bad credentials")
        assert e.code == "GITHUB_CREATE_RELEASE_ERROR"
        assert "401" in e.message
        assert e.status == 401

    def test_release_response_error(self):
        e = ReleaseResponseError("html_url missing")
        assert e.code == "RELEASE_RESPONSE_INVALID"

    def test_conversion_error(self):
        e = ConversionError("openapi/spec3.json", "Expecting value")
        assert e.code == "CONVERSION_FAILED"
        assert e.path == "openapi/spec3.json"

    def test_all_errors_are_exceptions(self):
        error_classes = [
            ConfigError, GitCommandError, GitHubAPIError,
            ReleaseResponseError, ConversionError,
        ]
        for cls in error_classes:
            assert issubclass(cls, SpecSyncError)
            assert issubclass(cls, Exception)
