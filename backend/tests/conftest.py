# Put backend at sys.path[0] so tests import core/ingestion/main the same way the app does
import sys
from pathlib import Path

import pytest

_tests_dir = Path(__file__).resolve().parent
_backend = _tests_dir.parent
_str_backend = str(_backend)
if sys.path[0:1] != [_str_backend]:
    sys.path.insert(0, _str_backend)


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Settings are cached per process; tests that touch env must not leak into each other."""
    from core.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
