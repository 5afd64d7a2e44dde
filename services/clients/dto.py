from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Mapping

CLIENT_FIELDS = ("name", "email", "company", "phone")


def _clean(value: Any) -> str:
    return str(value).strip() if value is not None else ""


@dataclass(frozen=True)
class ClientDTO:
    id: str
    name: str
    email: str
    company: str
    phone: str
    created_at: str | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ClientDTO":
        """Построить DTO из строки PostgREST, лишние колонки игнорируются."""
        if row.get("id") is None:
            raise ValueError("Строка клиента без id")
        return cls(
            id=str(row["id"]),
            name=_clean(row.get("name")),
            email=_clean(row.get("email")),
            company=_clean(row.get("company")),
            phone=_clean(row.get("phone")),
            created_at=row.get("created_at"),
        )

    def merged(self, data: Mapping[str, Any]) -> "ClientDTO":
        """Копия клиента, поверх которой наложены отредактированные поля."""
        changes = {key: _clean(data[key]) for key in CLIENT_FIELDS if key in data}
        return replace(self, **changes)

    def to_payload(self) -> dict[str, str]:
        return {key: _clean(getattr(self, key)) for key in CLIENT_FIELDS}


@dataclass(frozen=True)
class ClientDraft:
    """Данные нового клиента до присвоения сервером ``id``."""

    name: str
    email: str
    company: str
    phone: str

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ClientDraft":
        return cls(**{key: _clean(data.get(key)) for key in CLIENT_FIELDS})

    def to_payload(self) -> dict[str, str]:
        return {key: _clean(value) for key, value in asdict(self).items()}


__all__ = ["CLIENT_FIELDS", "ClientDTO", "ClientDraft"]
