"""Доступ к таблице клиентов в Supabase."""

from __future__ import annotations

import logging
from typing import Any

from .dto import ClientDTO, ClientDraft

logger = logging.getLogger(__name__)

DEFAULT_TABLE = "clients"


class ClientRepositoryError(RuntimeError):
    """Базовая ошибка обращения к удалённой таблице клиентов."""

    default_message = "Ошибка обращения к серверу"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class ClientLoadError(ClientRepositoryError):
    default_message = "Не удалось загрузить клиентов"


class ClientCreateError(ClientRepositoryError):
    default_message = "Не удалось добавить клиента"


class ClientUpdateError(ClientRepositoryError):
    default_message = "Не удалось обновить клиента"


class ClientDeleteError(ClientRepositoryError):
    default_message = "Не удалось удалить клиента"


class ClientRepository:
    """Фасад CRUD над таблицей клиентов.

    Каждая операция соответствует ровно одному удалённому вызову, без
    повторов. Строки ограничены текущим аккаунтом политиками RLS.
    """

    def __init__(self, client: Any, table: str = DEFAULT_TABLE) -> None:
        self._client = client
        self.table = table

    def _table(self):
        return self._client.table(self.table)

    def list_clients(self) -> list[ClientDTO]:
        try:
            response = (
                self._table().select("*").order("created_at", desc=True).execute()
            )
            rows = response.data or []
            clients = [ClientDTO.from_row(row) for row in rows]
        except Exception as exc:  # noqa: BLE001 - сеть/сервис
            logger.exception("Ошибка загрузки клиентов")
            raise ClientLoadError() from exc
        logger.debug("Загружено клиентов: %d", len(clients))
        return clients

    def create_client(self, draft: ClientDraft) -> ClientDTO:
        payload = draft.to_payload()
        logger.debug("📤 Создание клиента: %r", payload)
        try:
            response = self._table().insert(payload).execute()
            rows = response.data or []
            if not rows:
                raise ClientCreateError("Сервер не вернул созданную запись")
            created = ClientDTO.from_row(rows[0])
        except ClientCreateError:
            logger.error("Сервер не вернул созданного клиента %r", draft.name)
            raise
        except Exception as exc:  # noqa: BLE001 - сеть/сервис
            logger.exception("Ошибка создания клиента %r", draft.name)
            raise ClientCreateError() from exc
        logger.info("Клиент создан: id=%s", created.id)
        return created

    def update_client(self, client: ClientDTO) -> None:
        payload = client.to_payload()
        logger.debug("📤 Обновление клиента id=%s: %r", client.id, payload)
        try:
            response = self._table().update(payload).eq("id", client.id).execute()
        except Exception as exc:  # noqa: BLE001 - сеть/сервис
            logger.exception("Ошибка обновления клиента id=%s", client.id)
            raise ClientUpdateError() from exc
        # RLS не даёт ошибки, если строка чужая или уже удалена
        if not response.data:
            logger.error("Сервер не подтвердил обновление клиента id=%s", client.id)
            raise ClientUpdateError()
        logger.info("Клиент обновлён: id=%s", client.id)

    def delete_client(self, client_id: str) -> None:
        try:
            response = self._table().delete().eq("id", client_id).execute()
        except Exception as exc:  # noqa: BLE001 - сеть/сервис
            logger.exception("Ошибка удаления клиента id=%s", client_id)
            raise ClientDeleteError() from exc
        if not response.data:
            logger.error("Сервер не подтвердил удаление клиента id=%s", client_id)
            raise ClientDeleteError()
        logger.info("Клиент удалён: id=%s", client_id)


__all__ = [
    "ClientCreateError",
    "ClientDeleteError",
    "ClientLoadError",
    "ClientRepository",
    "ClientRepositoryError",
    "ClientUpdateError",
]
