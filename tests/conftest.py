from __future__ import annotations

import pytest
from _frames import EXTENDED_ID, LEGACY_ID, RecordingResolver

from pynoran.identity import DeviceDirectory


@pytest.fixture
def resolver() -> RecordingResolver:
    return RecordingResolver({LEGACY_ID.decode(): 7, EXTENDED_ID.decode(): 8})


@pytest.fixture
def directory() -> DeviceDirectory:
    directory = DeviceDirectory()
    directory.add(LEGACY_ID.decode(), "legacy unit")
    directory.add(EXTENDED_ID.decode(), "extended unit")
    return directory
