"""Валидаторы и нормализаторы входных данных."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

MIN_PASSWORD_LENGTH = 6

CLIENT_FIELD_LABELS = {
    "name": "Имя",
    "email": "Email",
    "company": "Компания",
    "phone": "Телефон",
}


class ValidationError(ValueError):
    """Ошибка проверки данных формы до обращения к серверу."""

    def __init__(self, message: str, fields: Iterable[str] = ()) -> None:
        super().__init__(message)
        self.fields = tuple(fields)


def normalize_text(value: Any) -> str:
    """Привести значение поля к строке без крайних пробелов."""
    if value is None:
        return ""
    return str(value).strip()


def require_fields(
    data: Mapping[str, Any],
    fields: Iterable[str],
    labels: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Проверить, что обязательные поля заполнены.

    Args:
        data: Данные формы.
        fields: Имена обязательных полей.
        labels: Подписи полей для сообщения об ошибке.

    Returns:
        dict: Нормализованные значения обязательных полей.

    Raises:
        ValidationError: Если хотя бы одно поле пустое.
    """
    labels = labels or {}
    cleaned = {name: normalize_text(data.get(name)) for name in fields}
    missing = [name for name, value in cleaned.items() if not value]
    if missing:
        names = ", ".join(labels.get(name, name) for name in missing)
        raise ValidationError(f"Заполните обязательные поля: {names}", missing)
    return cleaned


def validate_client_data(data: Mapping[str, Any]) -> dict[str, str]:
    """Проверка формы клиента: все четыре поля обязательны."""
    return require_fields(data, CLIENT_FIELD_LABELS, CLIENT_FIELD_LABELS)


def validate_credentials(email: str, password: str, *, sign_up: bool = False) -> str:
    """Проверить email и пароль до запроса к сервису авторизации.

    Returns:
        str: Email без крайних пробелов.
    """
    email = normalize_text(email)
    if not email or not password:
        raise ValidationError("Введите email и пароль", ["email", "password"])
    if sign_up and len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Пароль должен содержать не менее {MIN_PASSWORD_LENGTH} символов",
            ["password"],
        )
    return email
