from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from .dto import ClientDTO

SEARCH_FIELDS = ("name", "email", "company")

# Доли для декоративных счётчиков дашборда
ACTIVE_TODAY_RATIO = 0.6
NEW_THIS_WEEK_RATIO = 0.3


def matches_search(client: ClientDTO, search_text: str) -> bool:
    needle = (search_text or "").strip().casefold()
    if not needle:
        return True
    return any(
        needle in (getattr(client, field) or "").casefold() for field in SEARCH_FIELDS
    )


def filter_clients(clients: Iterable[ClientDTO], search_text: str) -> list[ClientDTO]:
    """Регистронезависимый поиск подстроки по имени, email и компании."""
    return [client for client in clients if matches_search(client, search_text)]


@dataclass(frozen=True)
class DashboardStats:
    total: int
    active_today: int
    new_this_week: int


def compute_stats(clients: Iterable[ClientDTO]) -> DashboardStats:
    total = len(list(clients))
    return DashboardStats(
        total=total,
        active_today=math.floor(total * ACTIVE_TODAY_RATIO),
        new_this_week=math.floor(total * NEW_THIS_WEEK_RATIO),
    )


__all__ = ["DashboardStats", "compute_stats", "filter_clients", "matches_search"]
