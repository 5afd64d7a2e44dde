from __future__ import annotations

import json
import logging
from pathlib import Path

from supabase import Client, ClientOptions, create_client
from supabase_auth import SyncSupportedStorage

from config import Settings

logger = logging.getLogger(__name__)


class FileSessionStorage(SyncSupportedStorage):
    """Хранилище сессии Supabase в JSON-файле пользователя.

    Клиент Supabase по умолчанию держит токен в памяти, поэтому
    настольное приложение теряло бы вход после перезапуска.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.exception("Не удалось прочитать файл сессии %s", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")

    def get_item(self, key: str) -> str | None:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)


def create_supabase_client(
    settings: Settings, storage: SyncSupportedStorage | None = None
) -> Client:
    """Создать клиента Supabase по настройкам приложения.

    Используется публичный anon-ключ: доступ к строкам ограничивается
    политиками RLS по токену вошедшего пользователя.
    """

    if not settings.is_supabase_configured:
        raise RuntimeError("SUPABASE_URL и SUPABASE_ANON_KEY не заданы в .env")

    options = ClientOptions(
        storage=storage or FileSessionStorage(settings.session_file),
        persist_session=True,
        auto_refresh_token=True,
        postgrest_client_timeout=settings.request_timeout,
    )
    logger.debug("Подключение к Supabase: %s", settings.supabase_url)
    return create_client(settings.supabase_url, settings.supabase_anon_key, options)


__all__ = ["FileSessionStorage", "create_supabase_client"]
