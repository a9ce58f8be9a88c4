import pytest
from click.testing import CliRunner

from gitcommitlint.commit_message import CommitMessageValidator
from gitcommitlint.config import Config


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep GIT_COMMIT_LINT_* variables from the outer shell out of the tests."""
    for name in [
        "GIT_COMMIT_LINT_EXTENDS",
        "GIT_COMMIT_LINT_DEFAULT_IGNORES",
        "GIT_COMMIT_LINT_HELP_URL",
        "GIT_COMMIT_LINT_FORMAT",
        "GIT_COMMIT_LINT_ALWAYS_LOG",
        "GIT_COMMIT_LINT_LOG_FILE",
    ]:
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def default_validator():
    """Validator built from the default configuration."""
    return CommitMessageValidator.from_config(Config())


@pytest.fixture
def cli_runner():
    """Fixture for testing CLI commands."""
    return CliRunner()
