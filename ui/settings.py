import copy
import json
import logging
from pathlib import Path

from appdirs import user_data_dir

from config import APP_NAME

logger = logging.getLogger(__name__)

SETTINGS_PATH = Path(user_data_dir(APP_NAME)) / "ui_settings.json"
_CACHE: dict | None = None


def _load_data() -> dict:
    global _CACHE
    if _CACHE is None:
        if SETTINGS_PATH.exists():
            try:
                _CACHE = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            except (OSError, ValueError) as e:
                logger.exception("Не удалось загрузить настройки: %s", e)
                _CACHE = {}
        else:
            _CACHE = {}
    return copy.deepcopy(_CACHE)


def _save_data(data: dict) -> None:
    global _CACHE
    _CACHE = copy.deepcopy(data)
    try:
        SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
        SETTINGS_PATH.write_text(
            json.dumps(_CACHE, ensure_ascii=False, indent=2), encoding="utf-8"
        )
    except OSError as e:
        logger.exception("Не удалось сохранить настройки: %s", e)


def reset_cache() -> None:
    """Сбрасывает кэш, чтобы следующее чтение шло с диска."""
    global _CACHE
    _CACHE = None


def get_app_settings() -> dict:
    """Возвращает общие настройки приложения."""
    data = _load_data()
    return data.get("app", {})


def set_app_settings(settings: dict) -> None:
    """Сохраняет общие настройки приложения."""
    data = _load_data()
    data["app"] = settings
    _save_data(data)


def get_last_email() -> str:
    return get_app_settings().get("last_email", "")


def set_last_email(email: str) -> None:
    settings = get_app_settings()
    settings["last_email"] = email
    set_app_settings(settings)


def get_window_settings(name: str) -> dict:
    """Возвращает сохранённые настройки окна."""
    data = _load_data()
    return data.get("windows", {}).get(name, {})


def set_window_settings(name: str, settings: dict) -> None:
    """Сохраняет настройки окна."""
    data = _load_data()
    windows = data.setdefault("windows", {})
    windows[name] = settings
    _save_data(data)
