import os
import signal
import sys
from pathlib import Path

import pytest

# ensure project root is on sys.path when running tests
sys.path.append(str(Path(__file__).resolve().parent))

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
# тесты никогда не должны обращаться к настоящему Supabase
os.environ["SUPABASE_URL"] = ""
os.environ["SUPABASE_ANON_KEY"] = ""

_TEST_TIMEOUT = int(os.environ.get("PYTEST_TIMEOUT", "60"))


@pytest.fixture(autouse=True)
def watchdog():
    """Fail a test if it hangs longer than the timeout."""
    if not hasattr(signal, "SIGALRM"):
        yield
        return

    def handler(signum, frame):  # pragma: no cover - timeout handler
        pytest.fail("Test timeout exceeded", pytrace=False)

    signal.signal(signal.SIGALRM, handler)
    signal.alarm(_TEST_TIMEOUT)
    try:
        yield
    finally:
        signal.alarm(0)


@pytest.fixture(autouse=True)
def isolated_ui_settings(tmp_path, monkeypatch):
    """UI-настройки каждого теста пишутся во временный каталог."""
    from ui import settings as ui_settings

    monkeypatch.setattr(ui_settings, "SETTINGS_PATH", tmp_path / "ui_settings.json")
    ui_settings.reset_cache()
    yield
    ui_settings.reset_cache()
