#vehicle_hotspots/src/database/db_connection.py

import os
import time
import psycopg2
from psycopg2 import OperationalError, InterfaceError, DatabaseError
from contextlib import contextmanager
from loguru import logger


# =====================================================
# ⚙️ Configuração do banco
# =====================================================
DB_PARAMS = {
    "dbname": os.getenv("DB_NAME", os.getenv("POSTGRES_DB", "streaming")),
    "user": os.getenv("DB_USER", os.getenv("POSTGRES_USER", "postgres")),
    "password": os.getenv("DB_PASSWORD", os.getenv("POSTGRES_PASSWORD", "postgres")),
    "host": os.getenv("DB_HOST", os.getenv("POSTGRES_HOST", "hotspots_db")),
    "port": os.getenv("DB_PORT", os.getenv("POSTGRES_PORT", "5432")),
    "connect_timeout": int(os.getenv("DB_CONNECT_TIMEOUT", "10")),
    "application_name": os.getenv("DB_APP_NAME", "vehicle_hotspots"),
}

# Histórico dos jobs fica sempre no banco do ambiente (HISTORY_DB_*),
# independente do endpoint definido para a janela.
HISTORY_DB_PARAMS = {
    **DB_PARAMS,
    "host": os.getenv("HISTORY_DB_HOST", DB_PARAMS["host"]),
    "port": os.getenv("HISTORY_DB_PORT", DB_PARAMS["port"]),
}


def parse_endpoint(endpoint: str) -> tuple[str, str]:
    """
    Converte "host:porta" em (host, porta).
    Sem porta explícita, mantém a porta configurada no ambiente.
    """
    if not endpoint or not endpoint.strip():
        raise ValueError("Endpoint do banco vazio — use o formato host:porta.")

    partes = endpoint.strip().split(":")
    host = partes[0]
    porta = partes[-1] if len(partes) > 1 else str(DB_PARAMS["port"])

    if not host:
        raise ValueError(f"Endpoint inválido: '{endpoint}' — host ausente.")
    if not porta.isdigit():
        raise ValueError(f"Endpoint inválido: '{endpoint}' — porta deve ser numérica.")

    return host, porta


def definir_endpoint(endpoint: str):
    """Sobrescreve host/porta do DB_PARAMS a partir de 'host:porta'."""
    host, porta = parse_endpoint(endpoint)
    DB_PARAMS["host"] = host
    DB_PARAMS["port"] = porta
    logger.info(f"🔌 Endpoint do banco definido: {host}:{porta}")


# =====================================================
# 🔄 Retentativas automáticas com backoff exponencial
# =====================================================
def get_connection(retries: int = 5, delay: int = 2, backoff: float = 1.5, params: dict | None = None):
    """
    Cria e retorna uma conexão com o PostgreSQL.
    Retenta automaticamente em caso de falha temporária.
    Sem `params`, usa DB_PARAMS (endpoint corrente).
    """
    params = params if params is not None else DB_PARAMS
    ultimo_erro = None
    for attempt in range(1, retries + 1):
        try:
            conn = psycopg2.connect(**params)
            conn.autocommit = False
            logger.debug(f"✅ Conexão PostgreSQL estabelecida (tentativa {attempt})")
            return conn
        except OperationalError as e:
            ultimo_erro = e
            wait = delay * (backoff ** (attempt - 1))
            logger.warning(f"⚠️ Erro de conexão (tentativa {attempt}/{retries}): {e} — aguardando {wait:.1f}s")
            time.sleep(wait)

    raise ConnectionError("❌ Falha ao conectar ao banco após múltiplas tentativas.") from ultimo_erro


# =====================================================
# 🧱 Context Manager seguro (rollback e fechamento)
# =====================================================
@contextmanager
def get_connection_context(retries: int = 3, params: dict | None = None):
    """
    Context manager seguro para uso de conexões PostgreSQL.
    Faz commit no sucesso, rollback em erro e sempre fecha a conexão.
    Exemplo:
        with get_connection_context() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1;")
    """
    conn = None
    try:
        conn = get_connection(retries=retries, params=params)
        yield conn
        conn.commit()
    except (OperationalError, InterfaceError) as e:
        if conn:
            conn.rollback()
        logger.error(f"💥 Erro operacional na conexão: {e}")
        raise
    except DatabaseError as e:
        if conn:
            conn.rollback()
        logger.error(f"❌ Erro de banco de dados: {e}")
        raise
    except Exception as e:
        if conn:
            conn.rollback()
        logger.error(f"⚠️ Exceção não tratada: {e}")
        raise
    finally:
        if conn:
            try:
                conn.close()
                logger.debug("🔌 Conexão PostgreSQL fechada com sucesso.")
            except Exception as e:
                logger.warning(f"⚠️ Falha ao fechar conexão: {e}")


# =====================================================
# 🔍 Verificação rápida (saúde do banco)
# =====================================================
def checar_conexao_banco() -> bool:
    """
    Testa a conexão com o banco de dados e retorna True/False.
    Útil para healthchecks da API.
    """
    try:
        with get_connection_context(retries=1) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT NOW();")
                result = cur.fetchone()
                logger.success(f"✅ Banco conectado. Hora atual: {result[0]}")
        return True
    except Exception as e:
        logger.error(f"❌ Falha ao testar conexão com o banco: {e}")
        return False
