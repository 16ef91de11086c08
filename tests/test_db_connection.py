import psycopg2
import pytest

from src.database import db_connection


def test_parse_endpoint():
    assert db_connection.parse_endpoint("cassandra-host:9042") == ("cassandra-host", "9042")
    assert db_connection.parse_endpoint(" db ")[0] == "db"


@pytest.mark.parametrize("endpoint", ["", ":5432", "db:porta"])
def test_parse_endpoint_invalido(endpoint):
    with pytest.raises(ValueError):
        db_connection.parse_endpoint(endpoint)


def test_definir_endpoint(monkeypatch):
    monkeypatch.setitem(db_connection.DB_PARAMS, "host", "antes")
    monkeypatch.setitem(db_connection.DB_PARAMS, "port", "1")

    db_connection.definir_endpoint("novo-host:6543")

    assert db_connection.DB_PARAMS["host"] == "novo-host"
    assert db_connection.DB_PARAMS["port"] == "6543"


class _Conn:
    autocommit = True


def test_get_connection_retenta_com_backoff(monkeypatch):
    tentativas = []
    esperas = []

    def connect(**params):
        tentativas.append(params)
        if len(tentativas) < 3:
            raise psycopg2.OperationalError("indisponível")
        return _Conn()

    monkeypatch.setattr(db_connection.psycopg2, "connect", connect)
    monkeypatch.setattr(db_connection.time, "sleep", esperas.append)

    conn = db_connection.get_connection(retries=5, delay=2, backoff=1.5)

    assert conn.autocommit is False
    assert len(tentativas) == 3
    assert esperas == [2, 3.0]


def test_get_connection_esgota_tentativas(monkeypatch):
    def connect(**params):
        raise psycopg2.OperationalError("indisponível")

    monkeypatch.setattr(db_connection.psycopg2, "connect", connect)
    monkeypatch.setattr(db_connection.time, "sleep", lambda s: None)

    with pytest.raises(ConnectionError):
        db_connection.get_connection(retries=2)


def test_definir_endpoint_nao_altera_banco_do_historico(monkeypatch):
    monkeypatch.setitem(db_connection.DB_PARAMS, "host", "antes")
    monkeypatch.setitem(db_connection.DB_PARAMS, "port", "1")
    monkeypatch.setitem(db_connection.HISTORY_DB_PARAMS, "host", "historico")

    db_connection.definir_endpoint("novo-host:6543")

    assert db_connection.HISTORY_DB_PARAMS["host"] == "historico"
