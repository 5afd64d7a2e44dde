"""Контекст приложения и управление зависимостями."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, ClassVar

from config import Settings, get_settings
from infrastructure.supabase_gateway import create_supabase_client
from services.auth.session_service import SessionProvider, SupabaseSessionProvider
from services.clients.client_repository import ClientRepository
from ui.common.task_runner import QtTaskRunner, TaskRunner

DependencyName = str


class AppContext:
    """Контекст приложения с ленивым созданием зависимостей."""

    _DEPENDENCY_NAMES: ClassVar[set[str]] = {
        "supabase_client",
        "session_provider",
        "client_repository",
        "task_runner",
    }

    def __init__(
        self,
        settings: Settings,
        *,
        supabase_client_factory: Callable[[Settings], Any],
        session_provider_factory: Callable[["AppContext"], SessionProvider],
        client_repository_factory: Callable[["AppContext"], ClientRepository],
        task_runner_factory: Callable[[], TaskRunner],
        overrides: dict[str, Any] | None = None,
        instances: dict[str, Any] | None = None,
    ) -> None:
        self._settings = settings
        self._supabase_client_factory = supabase_client_factory
        self._session_provider_factory = session_provider_factory
        self._client_repository_factory = client_repository_factory
        self._task_runner_factory = task_runner_factory
        self._overrides: dict[str, Any] = dict(overrides or {})
        self._instances: dict[str, Any] = dict(instances or {})

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def supabase_client(self) -> Any:
        return self._get_dependency(
            "supabase_client",
            lambda: self._supabase_client_factory(self._settings),
        )

    @property
    def session_provider(self) -> SessionProvider:
        return self._get_dependency(
            "session_provider",
            lambda: self._session_provider_factory(self),
        )

    @property
    def client_repository(self) -> ClientRepository:
        return self._get_dependency(
            "client_repository",
            lambda: self._client_repository_factory(self),
        )

    @property
    def task_runner(self) -> TaskRunner:
        return self._get_dependency("task_runner", self._task_runner_factory)

    def override(self, **deps: Any) -> "AppContext":
        """Создать новый контекст с переопределёнными зависимостями."""

        override_args = dict(deps)
        new_settings = override_args.pop("settings", self._settings)

        unknown = set(override_args) - self._DEPENDENCY_NAMES
        if unknown:
            names = ", ".join(sorted(unknown))
            raise ValueError(f"Неизвестные зависимости для переопределения: {names}")

        overrides = dict(self._overrides)
        overrides.update(override_args)
        if new_settings is self._settings:
            instances = {
                key: value
                for key, value in self._instances.items()
                if key not in override_args
            }
        else:
            instances = {}
        return AppContext(
            settings=new_settings,
            supabase_client_factory=self._supabase_client_factory,
            session_provider_factory=self._session_provider_factory,
            client_repository_factory=self._client_repository_factory,
            task_runner_factory=self._task_runner_factory,
            overrides=overrides,
            instances=instances,
        )

    def _get_dependency(
        self, name: DependencyName, factory: Callable[[], Any]
    ) -> Any:
        if name in self._overrides:
            return self._overrides[name]
        if name not in self._instances:
            self._instances[name] = factory()
        return self._instances[name]


_app_context: AppContext | None = None


def build_context(settings: Settings) -> AppContext:
    return AppContext(
        settings=settings,
        supabase_client_factory=create_supabase_client,
        session_provider_factory=lambda context: SupabaseSessionProvider(
            context.supabase_client
        ),
        client_repository_factory=lambda context: ClientRepository(
            context.supabase_client, table=context.settings.clients_table
        ),
        task_runner_factory=QtTaskRunner,
    )


def get_app_context() -> AppContext:
    """Получить (или создать) синглтон контекста приложения."""

    global _app_context
    if _app_context is None:
        _app_context = build_context(get_settings())
    return _app_context


__all__ = ["AppContext", "build_context", "get_app_context"]
