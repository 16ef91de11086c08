#vehicle_hotspots/src/vehicle_hotspots/infrastructure/persistence/database_writer.py

# ============================================================
# 📦 src/vehicle_hotspots/infrastructure/persistence/database_writer.py
# ============================================================

from datetime import datetime
from typing import List
from psycopg2.extras import execute_values
from loguru import logger

from src.database.db_connection import get_connection_context
from src.vehicle_hotspots.domain.entities import (
    VehicleClusterDetail,
    VehicleCluster,
    TiledVehicleCluster,
)


# ============================================================
# 🆕 Registro da execução (run)
# ============================================================
def criar_run(window_start: datetime, window_end: datetime) -> int:
    sql = """
        INSERT INTO hotspot_run (window_start, window_end, status, criado_em)
        VALUES (%s, %s, 'running', NOW())
        RETURNING id;
    """

    with get_connection_context() as conn:
        with conn.cursor() as cur:
            cur.execute(sql, (window_start, window_end))
            run_id = cur.fetchone()[0]

    logger.info(f"🆕 Run criado | id={run_id} | janela=[{window_start}, {window_end})")
    return run_id


# ============================================================
# ✅ Finalização da execução
# ============================================================
def finalizar_run(
    run_id: int,
    status: str = "done",
    n_records: int = 0,
    n_points: int = 0,
    n_clusters: int = 0,
    error: str | None = None,
):
    sql = """
        UPDATE hotspot_run
        SET finished_at = NOW(),
            status = %s,
            n_records = %s,
            n_points = %s,
            n_clusters = %s,
            error = %s
        WHERE id = %s;
    """
    with get_connection_context() as conn:
        with conn.cursor() as cur:
            cur.execute(sql, (status, int(n_records), int(n_points), int(n_clusters), error, int(run_id)))

    logger.info(f"🏁 Run finalizado | id={run_id} | status={status} | clusters={n_clusters}")


# ============================================================
# 💾 Detalhe por ponto (vehicleclusterdetails)
# ============================================================
def salvar_detalhes(detalhes: List[VehicleClusterDetail]) -> int:
    if not detalhes:
        logger.info("⚪ Nenhum detalhe de cluster para gravar.")
        return 0

    valores = [
        (d.cluster_id, d.point_index, d.timestamp, d.latitude, d.longitude)
        for d in detalhes
    ]

    with get_connection_context() as conn:
        with conn.cursor() as cur:
            execute_values(
                cur,
                """
                INSERT INTO vehicleclusterdetails (id, idx, time_stamp, latitude, longitude)
                VALUES %s
                """,
                valores,
            )

    logger.info(f"🧩 {len(valores)} pontos de cluster gravados em vehicleclusterdetails")
    return len(valores)


# ============================================================
# 💾 Resumo por cluster (vehiclecluster)
# ============================================================
def salvar_clusters(clusters: List[VehicleCluster]) -> int:
    if not clusters:
        logger.info("⚪ Nenhum cluster para gravar.")
        return 0

    valores = [
        (c.cluster_id, c.timestamp, c.center_latitude, c.center_longitude, c.member_count)
        for c in clusters
    ]

    with get_connection_context() as conn:
        with conn.cursor() as cur:
            execute_values(
                cur,
                """
                INSERT INTO vehiclecluster (id, time_stamp, latitude, longitude, amount)
                VALUES %s
                """,
                valores,
            )

    logger.info(f"💾 {len(valores)} clusters gravados em vehiclecluster")
    return len(valores)


# ============================================================
# 💾 Resumo indexado por tile (vehiclecluster_by_tileid)
# ============================================================
def salvar_clusters_por_tile(tiled: List[TiledVehicleCluster]) -> int:
    if not tiled:
        logger.info("⚪ Nenhum cluster por tile para gravar.")
        return 0

    valores = [
        (t.tile_key, t.cluster_id, t.timestamp, t.center_latitude, t.center_longitude, t.amount)
        for t in tiled
    ]

    with get_connection_context() as conn:
        with conn.cursor() as cur:
            execute_values(
                cur,
                """
                INSERT INTO vehiclecluster_by_tileid (tile_id, id, time_stamp, latitude, longitude, amount)
                VALUES %s
                """,
                valores,
            )

    logger.info(f"🗺️ {len(valores)} clusters gravados em vehiclecluster_by_tileid")
    return len(valores)
