import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'datafields'
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from datafields.core.events import Event
from datafields.core.logging import reset_stdlib_logging_for_tests


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch, tmp_path):
    """Run every test in an empty directory with no DATAFIELDS_* overrides."""
    for key in list(os.environ):
        if key.startswith("DATAFIELDS_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    reset_stdlib_logging_for_tests()


@pytest.fixture
def profile_viewed_event() -> Event:
    """User 2's profile viewed by user 1, with course details under ``other``."""
    return Event(
        eventname="\\core\\event\\user_profile_viewed",
        component="core",
        action="viewed",
        target="user_profile",
        objectid=2,
        crud="r",
        contextid=25,
        userid=3,
        courseid=0,
        relateduserid=2,
        timecreated=1700000000,
        other={
            "courseid": 7,
            "courseshortname": "CS101",
            "coursefullname": "Intro to CS",
        },
    )
