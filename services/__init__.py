"""Прикладные сервисы: авторизация, работа со списком клиентов, экспорт.

Подмодули импортируются напрямую, например:
    from services.clients.client_repository import ClientRepository
    from services.auth.session_gate import SessionGate
"""

__all__: list[str] = []
