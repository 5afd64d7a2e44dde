import os

import pytest
from PySide6.QtWidgets import QApplication

from fakes import (
    DeferredTaskRunner,
    FakeSessionProvider,
    FakeSupabaseClient,
    SyncTaskRunner,
    make_session,
)
from services.clients.client_repository import ClientRepository
from services.clients.dashboard_controller import DashboardController
from services.clients.dto import ClientDTO


@pytest.fixture(scope="session")
def qapp():
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


# ---------------------------------------------------------------------------
# Фикстуры
# ---------------------------------------------------------------------------
SAMPLE_ROWS = [
    {
        "id": "1",
        "name": "John Smith",
        "email": "john@example.com",
        "company": "Acme Corp",
        "phone": "+1 555-0101",
        "created_at": "2024-01-03T10:00:00",
    },
    {
        "id": "2",
        "name": "Sarah Johnson",
        "email": "sarah.j@techstart.io",
        "company": "TechStart",
        "phone": "+1 555-0102",
        "created_at": "2024-01-02T10:00:00",
    },
    {
        "id": "3",
        "name": "Michael Chen",
        "email": "m.chen@globalinc.com",
        "company": "Global Inc",
        "phone": "+1 555-0103",
        "created_at": "2024-01-01T10:00:00",
    },
]


@pytest.fixture
def sample_clients():
    return [ClientDTO.from_row(row) for row in SAMPLE_ROWS]


@pytest.fixture
def fake_supabase():
    return FakeSupabaseClient(SAMPLE_ROWS)


@pytest.fixture
def repository(fake_supabase):
    return ClientRepository(fake_supabase)


@pytest.fixture
def session_provider():
    return FakeSessionProvider(session=make_session())


@pytest.fixture
def sync_runner():
    return SyncTaskRunner()


@pytest.fixture
def deferred_runner():
    return DeferredTaskRunner()


@pytest.fixture
def dashboard_controller(qapp, repository, session_provider, sync_runner):
    return DashboardController(repository, session_provider, sync_runner)


@pytest.fixture
def notifications(dashboard_controller):
    received = []
    dashboard_controller.notified.connect(received.append)
    return received
