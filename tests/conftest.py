from __future__ import annotations

import pytest

from accountant.settings import EngineSettings


@pytest.fixture
def settings() -> EngineSettings:
    return EngineSettings()
