"""Заменители Supabase, сессии и исполнителя задач для тестов."""

import itertools
from types import SimpleNamespace

from services.auth.session_service import AuthResult


# ---------------------------------------------------------------------------
# Выполнение задач
# ---------------------------------------------------------------------------
class SyncTaskRunner:
    """Выполняет задачу сразу в текущем потоке."""

    def __init__(self):
        self.submitted = 0

    def submit(self, func, on_success, on_error):
        self.submitted += 1
        try:
            result = func()
        except Exception as exc:  # noqa: BLE001 - как у QtTaskRunner
            on_error(exc)
            return
        on_success(result)


class DeferredTaskRunner:
    """Копит задачи до явного вызова ``run_all``: имитация долгого запроса."""

    def __init__(self):
        self.queue = []

    def submit(self, func, on_success, on_error):
        self.queue.append((func, on_success, on_error))

    @property
    def pending(self) -> int:
        return len(self.queue)

    def run_one(self, index=0):
        func, on_success, on_error = self.queue.pop(index)
        try:
            result = func()
        except Exception as exc:  # noqa: BLE001
            on_error(exc)
        else:
            on_success(result)

    def run_all(self):
        for _ in range(len(self.queue)):
            self.run_one()


# ---------------------------------------------------------------------------
# Supabase
# ---------------------------------------------------------------------------
class FakeQuery:
    def __init__(self, client, table):
        self._client = client
        self._table = table
        self._op = None
        self._payload = None
        self._filters = []
        self._order = None

    def select(self, *columns):
        self._op = "select"
        return self

    def order(self, column, desc=False):
        self._order = (column, desc)
        return self

    def insert(self, payload):
        self._op = "insert"
        self._payload = payload
        return self

    def update(self, payload):
        self._op = "update"
        self._payload = payload
        return self

    def delete(self):
        self._op = "delete"
        return self

    def eq(self, column, value):
        self._filters.append((column, value))
        return self

    def _matches(self, row):
        return all(str(row.get(col)) == str(val) for col, val in self._filters)

    def execute(self):
        client = self._client
        client.calls.append((self._table, self._op, self._payload, list(self._filters)))
        error = client.errors.get(self._op)
        if error is not None:
            raise error
        rows = client.tables.setdefault(self._table, [])

        if self._op == "select":
            data = [dict(r) for r in rows if self._matches(r)]
            if self._order:
                column, desc = self._order
                data.sort(key=lambda r: r.get(column) or "", reverse=desc)
            return SimpleNamespace(data=data)
        if self._op == "insert":
            if client.insert_returns_nothing:
                return SimpleNamespace(data=[])
            row = dict(self._payload)
            row["id"] = str(next(client.ids))
            row["created_at"] = f"2030-01-01T00:00:{len(rows):02d}"
            rows.append(row)
            return SimpleNamespace(data=[dict(row)])
        if self._op == "update":
            changed = []
            for row in rows:
                if self._matches(row):
                    row.update(self._payload)
                    changed.append(dict(row))
            return SimpleNamespace(data=changed)
        if self._op == "delete":
            removed = [dict(r) for r in rows if self._matches(r)]
            rows[:] = [r for r in rows if not self._matches(r)]
            return SimpleNamespace(data=removed)
        raise AssertionError(f"Неожиданная операция {self._op}")


class FakeSupabaseClient:
    """Минимальный заменитель ``supabase.Client`` для таблиц."""

    def __init__(self, rows=None, table="clients"):
        self.tables = {table: [dict(r) for r in rows or []]}
        self.calls = []
        self.errors = {}
        self.insert_returns_nothing = False
        self.ids = itertools.count(100)

    def table(self, name):
        return FakeQuery(self, name)

    def fail(self, op, exc=None):
        self.errors[op] = exc or ConnectionError("сеть недоступна")

    def ops(self):
        return [call[1] for call in self.calls]


# ---------------------------------------------------------------------------
# Сессия
# ---------------------------------------------------------------------------
def make_session(email="user@example.com"):
    return SimpleNamespace(access_token="token", user=SimpleNamespace(email=email))


class FakeSessionProvider:
    def __init__(self, session=None):
        self.session = session
        self.calls = []
        self.listeners = []
        self.unsubscribed = 0
        self.get_session_error = None
        self.sign_in_error = None
        self.sign_up_error = None
        self.sign_out_error = None
        self.require_confirmation = False

    def get_session(self):
        self.calls.append(("get_session",))
        if self.get_session_error is not None:
            raise self.get_session_error
        return self.session

    def sign_in(self, email, password):
        self.calls.append(("sign_in", email, password))
        if self.sign_in_error is not None:
            raise self.sign_in_error
        self.session = make_session(email)
        return AuthResult(session=self.session, user=self.session.user)

    def sign_up(self, email, password):
        self.calls.append(("sign_up", email, password))
        if self.sign_up_error is not None:
            raise self.sign_up_error
        user = SimpleNamespace(email=email)
        if self.require_confirmation:
            return AuthResult(session=None, user=user)
        self.session = make_session(email)
        return AuthResult(session=self.session, user=user)

    def sign_out(self):
        self.calls.append(("sign_out",))
        if self.sign_out_error is not None:
            raise self.sign_out_error
        self.session = None

    def subscribe(self, listener):
        self.calls.append(("subscribe",))
        self.listeners.append(listener)

        def unsubscribe():
            self.unsubscribed += 1
            if listener in self.listeners:
                self.listeners.remove(listener)

        return unsubscribe

    def emit(self, event, session):
        for listener in list(self.listeners):
            listener(event, session)

    def network_calls(self):
        return [c for c in self.calls if c[0] in {"sign_in", "sign_up", "sign_out"}]

