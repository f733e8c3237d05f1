import os
import shutil
from pathlib import Path

import pytest

SCHEMAS_DIR = Path(__file__).parent / "test_data" / "schemas"


class RecordingReporter:
    """ReportingPort keeping every event it receives"""

    def __init__(self):
        self.events = []

    def start(self, label):
        self.events.append(("start", label))

    def succeed(self, label, duration_ms):
        self.events.append(("succeed", label, duration_ms))

    def fail(self, label):
        self.events.append(("fail", label))


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def schemas_dir(tmp_path, monkeypatch):
    """Copy of the test schemas, also made the working directory"""
    target = tmp_path / "schemas"
    shutil.copytree(SCHEMAS_DIR, target)
    monkeypatch.chdir(target)
    return Path(os.getcwd())
