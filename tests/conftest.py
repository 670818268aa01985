"""Test configuration and fixtures for trx."""

import os

import pytest


def pytest_addoption(parser):
    """Add custom command-line options for tests."""
    parser.addoption("--run-cli-tests", action="store_true", default=False, help="Run CLI integration tests (slow)")


@pytest.fixture
def can_symlink(tmp_path):
    """Skip the test when the platform refuses to create symlinks."""
    try:
        os.symlink(tmp_path, tmp_path / ".probe")
    except (OSError, NotImplementedError):
        pytest.skip("Symlinks are not supported on this platform")
    os.unlink(tmp_path / ".probe")


@pytest.fixture
def requires_permissions():
    """Skip the test when permission bits are not enforced (Windows or root)."""
    if os.name != "posix" or os.geteuid() == 0:
        pytest.skip("Permission bits are not enforced for this user")
