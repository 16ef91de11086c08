from src.database import db_connection
from src.vehicle_hotspots import jobs


class _Cursor:
    def __init__(self, conexoes, host):
        self.conexoes = conexoes
        self.host = host

    def execute(self, sql, params=None):
        self.conexoes.append((self.host, sql))

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class _Conn:
    autocommit = True

    def __init__(self, conexoes, host):
        self._cursor = _Cursor(conexoes, host)

    def cursor(self):
        return self._cursor

    def commit(self):
        pass

    def rollback(self):
        pass

    def close(self):
        pass


def _instalar_banco(monkeypatch):
    conexoes = []
    monkeypatch.setitem(db_connection.DB_PARAMS, "host", "envdb")
    monkeypatch.setitem(db_connection.DB_PARAMS, "port", "5432")
    monkeypatch.setitem(db_connection.HISTORY_DB_PARAMS, "host", "envdb")
    monkeypatch.setattr(
        db_connection.psycopg2, "connect", lambda **params: _Conn(conexoes, params["host"])
    )
    return conexoes


def _hosts_do_historico(conexoes):
    return [host for host, sql in conexoes if "historico_hotspot_jobs" in sql]


def test_historico_do_job_fica_em_um_unico_banco(monkeypatch):
    conexoes = _instalar_banco(monkeypatch)

    def executar(**kwargs):
        with db_connection.get_connection_context(retries=1) as conn:
            with conn.cursor() as cur:
                cur.execute("INSERT INTO hotspot_run DEFAULT VALUES")
        return {"run_id": 1, "n_clusters": 0}

    monkeypatch.setattr(jobs, "executar_hotspots", executar)

    resultado = jobs.processar_hotspots("job-x", "otherdb:5432")

    assert resultado["status"] == "done"
    assert _hosts_do_historico(conexoes) == ["envdb", "envdb"]
    # a janela em si vai para o endpoint informado
    assert ("otherdb", "INSERT INTO hotspot_run DEFAULT VALUES") in conexoes


def test_historico_de_erro_no_mesmo_banco_do_running(monkeypatch):
    conexoes = _instalar_banco(monkeypatch)

    def falha(**kwargs):
        raise ConnectionError("sem banco")

    monkeypatch.setattr(jobs, "executar_hotspots", falha)

    resultado = jobs.processar_hotspots("job-y", "otherdb:6000")

    assert resultado["status"] == "error"
    assert _hosts_do_historico(conexoes) == ["envdb", "envdb"]
