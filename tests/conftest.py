"""Pytest configuration for collage-tools tests."""

import pytest

from collage_tools import Project


@pytest.fixture
def project() -> Project:
    """Fresh 10x10 project with only the background layer."""
    return Project.new(10, 10)
