#vehicle_hotspots/src/vehicle_hotspots/jobs.py

import uuid
from datetime import datetime
from loguru import logger

from src.database.db_connection import definir_endpoint
from src.database.pipeline_history_service import registrar_historico_pipeline
from src.vehicle_hotspots.application.hotspot_use_case import executar_hotspots


def gerar_job_id() -> str:
    return f"hotspots-{datetime.utcnow().strftime('%Y%m%d%H%M%S')}-{uuid.uuid4().hex[:6]}"


# ============================================================
# 🚀 Função: processar hotspots (executada pelo worker RQ)
# ============================================================
def processar_hotspots(job_id, endpoint, start_time=None, correcao=None, zoom=None):
    """
    Executa uma janela de hotspots de forma assíncrona (via RQ).
    Registra o progresso em historico_hotspot_jobs e devolve um resumo;
    erros viram status "error" no histórico e no retorno.
    """
    etapa = "hotspots"
    metadata = {"endpoint": endpoint, "start_time": start_time, "correcao": correcao, "zoom": zoom}

    logger.info(f"🚀 Iniciando job de hotspots ({job_id}) | endpoint={endpoint} | start={start_time or 'agora'}")

    registrar_historico_pipeline(
        job_id=job_id,
        etapa=etapa,
        status="running",
        mensagem=f"Iniciando hotspots ({start_time or 'agora'})",
        metadata=metadata,
    )

    try:
        definir_endpoint(endpoint)
        resumo = executar_hotspots(start_time=start_time, correcao=correcao, zoom=zoom)

        msg = f"✅ Hotspots concluídos | run_id={resumo.get('run_id')} | clusters={resumo.get('n_clusters')}"
        logger.success(msg)

        registrar_historico_pipeline(
            job_id=job_id,
            etapa=etapa,
            status="done",
            mensagem=msg,
            metadata={**metadata, "resultado": resumo},
        )

        return {"status": "done", "job_id": job_id, "resultado": resumo}

    except Exception as e:
        logger.error(f"❌ Erro no job {job_id}: {e}")
        registrar_historico_pipeline(
            job_id=job_id,
            etapa=etapa,
            status="error",
            mensagem=str(e),
            metadata=metadata,
        )
        return {"status": "error", "job_id": job_id, "erro": str(e)}
