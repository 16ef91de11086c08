#vehicle_hotspots/src/vehicle_hotspots/api/routes.py

# ============================================================
# 📦 src/vehicle_hotspots/api/routes.py
# ============================================================

from fastapi import APIRouter, Query, HTTPException
from loguru import logger
from pydantic import BaseModel

from src.database.db_connection import parse_endpoint
from src.database.pipeline_history_service import registrar_historico_pipeline, listar_historico
from src.vehicle_hotspots.application.hotspot_use_case import parse_start_time
from src.vehicle_hotspots.config import settings
from src.vehicle_hotspots.infrastructure.queue_factory import fila_hotspots
from src.vehicle_hotspots.infrastructure.persistence.database_reader import (
    buscar_clusters_por_tile,
    buscar_detalhes_cluster,
    listar_runs,
)
from src.vehicle_hotspots.domain.coordinate_correction import obter_corretor
from src.vehicle_hotspots.domain.tile_calc import validar_zoom
from src.vehicle_hotspots.jobs import gerar_job_id, processar_hotspots

router = APIRouter()

QUADKEY_DIGITOS = set("0123")


class ProcessarRequest(BaseModel):
    endpoint: str
    start_time: str | None = None
    correcao: str | None = None
    zoom: int | None = None


# ============================================================
# 🧠 Health
# ============================================================
@router.get("/health", tags=["Status"])
def health():
    return {"status": "ok", "message": "Hotspots API saudável 🚗"}


# ============================================================
# 🚀 Enfileirar cálculo de hotspots
# ============================================================
@router.post("/processar", tags=["Hotspots"])
def processar(body: ProcessarRequest):
    try:
        parse_endpoint(body.endpoint)
        parse_start_time(body.start_time)
        if body.correcao is not None:
            obter_corretor(body.correcao)
        if body.zoom is not None:
            validar_zoom(body.zoom)
    except ValueError as e:
        raise HTTPException(400, str(e))

    job_id = gerar_job_id()
    queue = fila_hotspots()

    registrar_historico_pipeline(
        job_id, "hotspots",
        status="queued", mensagem=f"Hotspots enfileirados ({body.start_time or 'agora'})",
    )

    job = queue.enqueue(
        processar_hotspots,
        job_id, body.endpoint, body.start_time, body.correcao, body.zoom,
        job_timeout=settings.JOB_TIMEOUT,
    )

    logger.info(f"📨 Job de hotspots enfileirado via API | job_id={job_id} | rq={job.id}")
    return {"status": "queued", "job_id": job_id, "rq_job_id": job.id}


# ============================================================
# 🗺️ Clusters por tile (prefixo de quadkey)
# ============================================================
@router.get("/tiles/{tile_key}", tags=["Hotspots"])
def clusters_por_tile(tile_key: str, time_stamp: int | None = Query(default=None)):
    if not tile_key or not set(tile_key) <= QUADKEY_DIGITOS:
        raise HTTPException(400, f"tile_key inválido: '{tile_key}' (apenas dígitos 0-3).")

    clusters = buscar_clusters_por_tile(tile_key, time_stamp)
    return {"tile_key": tile_key, "total": len(clusters), "clusters": clusters}


# ============================================================
# 🧩 Pontos de um cluster
# ============================================================
@router.get("/clusters/{cluster_id}/detalhes", tags=["Hotspots"])
def detalhes_cluster(cluster_id: int, time_stamp: int = Query(...)):
    pontos = buscar_detalhes_cluster(cluster_id, time_stamp)
    if not pontos:
        raise HTTPException(404, f"Cluster {cluster_id} não encontrado em time_stamp={time_stamp}.")
    return {"cluster_id": cluster_id, "time_stamp": time_stamp, "pontos": pontos}


# ============================================================
# 📋 Execuções e jobs
# ============================================================
@router.get("/runs", tags=["Hotspots"])
def runs(limit: int = Query(default=20, ge=1, le=500)):
    return {"runs": listar_runs(limit)}


@router.get("/jobs", tags=["Hotspots"])
def jobs(limit: int = Query(default=20, ge=1, le=500)):
    return {"jobs": listar_historico(limit)}
