# tests/conftest.py

from contextlib import contextmanager

import pytest


class FakeCursor:
    def __init__(self, rows=None, description=None, fetchone_value=None):
        self.rows = rows or []
        self.description = description
        self.fetchone_value = fetchone_value
        self.executados = []

    def execute(self, sql, params=None):
        self.executados.append((sql, params))

    def fetchall(self):
        return self.rows

    def fetchone(self):
        return self.fetchone_value

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class FakeConnection:
    def __init__(self, cursor: FakeCursor):
        self._cursor = cursor

    def cursor(self):
        return self._cursor


@pytest.fixture
def fake_db(monkeypatch):
    """
    Substitui get_connection_context no módulo informado por uma conexão fake.
    Uso: cur = fake_db(modulo, rows=[...])
    """
    def _instalar(modulo, **kwargs):
        cur = FakeCursor(**kwargs)

        @contextmanager
        def _ctx(*args, **kw):
            yield FakeConnection(cur)

        monkeypatch.setattr(modulo, "get_connection_context", _ctx)
        return cur

    return _instalar
