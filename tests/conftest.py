"""Pytest configuration for the test suite."""

from typing import Any

from tests.mock_utils import patch_mockfirestore


def pytest_configure(config: Any) -> None:
    """Patch mockfirestore once before any test module is collected."""
    patch_mockfirestore()
