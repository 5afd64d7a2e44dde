import csv
import logging
from pathlib import Path
from typing import Iterable

from services.clients.dto import ClientDTO

logger = logging.getLogger(__name__)

CLIENT_EXPORT_FIELDS = ("name", "email", "company", "phone")
RU_HEADERS = {
    "name": "Имя",
    "email": "Email",
    "company": "Компания",
    "phone": "Телефон",
}


def export_clients_to_csv(path, clients: Iterable[ClientDTO], fields=CLIENT_EXPORT_FIELDS) -> int:
    """Сохранить клиентов в CSV (``;``, UTF-8 с BOM для Excel).

    Returns:
        int: Количество записанных строк без заголовка.
    """
    headers = [RU_HEADERS.get(f, f) for f in fields]
    logger.debug("Заголовки CSV: %s", headers)
    count = 0
    with open(Path(path), "w", newline="", encoding="utf-8-sig") as f:
        writer = csv.writer(f, delimiter=";")
        writer.writerow(headers)
        for client in clients:
            writer.writerow([getattr(client, name, "") or "" for name in fields])
            count += 1
    logger.info("Экспортировано клиентов: %d → %s", count, path)
    return count
