# vehicle_hotspots/src/database/pipeline_history_service.py

from datetime import datetime
import json
from loguru import logger
from src.database.db_connection import HISTORY_DB_PARAMS, get_connection_context


# ============================================================
# 🧠 Função principal: registrar histórico do pipeline
# ============================================================
def registrar_historico_pipeline(
    job_id: str,
    etapa: str,
    status: str,
    mensagem: str,
    metadata: dict | None = None,
):
    """
    Registra histórico de execução dos jobs de hotspots.
    Utiliza a tabela historico_hotspot_jobs.
    Falhas aqui são apenas logadas: o histórico não pode derrubar o job.
    """
    try:
        with get_connection_context(retries=1, params=HISTORY_DB_PARAMS) as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO historico_hotspot_jobs
                        (job_id, etapa, status, mensagem, metadata, criado_em)
                    VALUES (%s, %s, %s, %s, %s, %s)
                    """,
                    (
                        job_id,
                        etapa,
                        status,
                        mensagem,
                        json.dumps(metadata or {}, ensure_ascii=False, default=str),
                        datetime.utcnow(),
                    ),
                )

        logger.info(f"💾 Histórico salvo: job={job_id} | etapa={etapa} | status={status}")

    except Exception as e:
        logger.error(f"❌ Erro ao registrar histórico do pipeline: {e}")


def listar_historico(limit: int = 20) -> list[dict]:
    sql = """
        SELECT job_id, etapa, status, mensagem, metadata, criado_em
        FROM historico_hotspot_jobs
        ORDER BY criado_em DESC
        LIMIT %s;
    """
    with get_connection_context(params=HISTORY_DB_PARAMS) as conn:
        with conn.cursor() as cur:
            cur.execute(sql, (limit,))
            cols = [c[0] for c in cur.description]
            rows = cur.fetchall()

    return [dict(zip(cols, r)) for r in rows]
