"""Shared fixtures for nslkit tests."""

import pytest


@pytest.fixture
def temp_file(tmp_path):
    """Create a file under the test's temporary directory."""
    def _create_temp_file(content: str, name: str = "skill.nsl"):
        file_path = tmp_path / name
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")
        return str(file_path)
    return _create_temp_file
