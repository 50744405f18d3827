"""Shared fixtures."""

from __future__ import annotations

import pytest

from tests.helpers import PythonScriptBackend, RecordingRunner


@pytest.fixture
def python_backend() -> PythonScriptBackend:
    return PythonScriptBackend()


@pytest.fixture
def recording_runner() -> RecordingRunner:
    return RecordingRunner()
