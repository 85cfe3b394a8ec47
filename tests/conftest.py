"""
Test configuration and fixtures.
"""

import logging
import subprocess

import pytest

logging.basicConfig(level=logging.INFO)


def detect_docker() -> bool:
    try:
        result = subprocess.run(["docker", "ps"], check=False, capture_output=True, text=True)  # noqa: S607
    except Exception:
        return False
    else:
        return result.returncode == 0


class SleepRecorder:
    def __init__(self, events: list[tuple[str, float | None]] | None = None) -> None:
        self.calls: list[float] = []
        self.events: list[tuple[str, float | None]] = events if events is not None else []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        self.events.append(("sleep", seconds))


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()
