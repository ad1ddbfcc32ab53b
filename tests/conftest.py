from __future__ import annotations

import pytest

from orchestrator import log


@pytest.fixture(autouse=True)
def _events_to_tmp(tmp_path):
    log.configure(tmp_path / "events")
    yield
