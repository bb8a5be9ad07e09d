import sys
from pathlib import Path

import pytest

# Ensure 'src' and 'tests' are on sys.path for imports
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
TESTS = ROOT / "tests"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))
if str(TESTS) not in sys.path:
    sys.path.insert(0, str(TESTS))

_SETTINGS_ENV = (
    "DEFAULT_CURRENCY",
    "DEFAULT_COUNTRY",
    "LOCALE",
    "AUDIT_EXPORT_LIMIT",
    "AUDIT_PAGE_SIZE",
)


@pytest.fixture(autouse=True)
def _default_settings(monkeypatch, tmp_path):
    """Run every test against built-in settings, not the developer's .env."""
    from shareregistry.config import reload_settings

    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    reload_settings()
    yield
    reload_settings()
