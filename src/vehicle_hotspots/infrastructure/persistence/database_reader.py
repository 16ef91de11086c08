#vehicle_hotspots/src/vehicle_hotspots/infrastructure/persistence/database_reader.py

# ============================================================
# 📦 src/vehicle_hotspots/infrastructure/persistence/database_reader.py
# ============================================================

import math
from datetime import datetime
from typing import List, Optional
from loguru import logger

from src.database.db_connection import get_connection_context
from src.vehicle_hotspots.domain.entities import PositionRecord


# ============================================================
# 🚗 Posições da janela [inicio, fim)
# ============================================================
def carregar_posicoes(inicio: datetime, fim: datetime) -> List[PositionRecord]:
    """
    Lê todas as posições com time em [inicio, fim).
    Erros do banco sobem sem tratamento; a retentativa é da conexão.
    Linhas sem coordenada são descartadas (apenas log). Latitudes fora de
    faixa são mantidas: a correção de lat/lon acontece mais adiante.
    """
    sql = """
        SELECT id, latitude, longitude, time
        FROM vehicles
        WHERE time >= %s
          AND time < %s;
    """

    with get_connection_context() as conn:
        with conn.cursor() as cur:
            cur.execute(sql, (inicio, fim))
            rows = cur.fetchall()

    if not rows:
        logger.warning(f"⚠️ Nenhuma posição encontrada | janela=[{inicio}, {fim})")
        return []

    registros = []
    invalidos = 0

    for _id, lat, lon, ts in rows:
        if _id is None or lat is None or lon is None:
            invalidos += 1
            continue

        lat, lon = float(lat), float(lon)
        if math.isnan(lat) or math.isnan(lon):
            invalidos += 1
            continue

        registros.append(PositionRecord(identity=str(_id), latitude=lat, longitude=lon, timestamp=ts))

    logger.info(
        f"📦 {len(registros)} posições carregadas | janela=[{inicio}, {fim}) | 🧹 {invalidos} inválidas"
    )
    return registros


# ============================================================
# 🗺️ Leituras usadas pela API
# ============================================================
def buscar_clusters_por_tile(tile_prefixo: str, time_stamp: Optional[int] = None) -> List[dict]:
    """
    Clusters cujo tile_id começa com o prefixo informado.
    Um prefixo de quadkey cobre todos os tiles filhos.
    """
    sql = """
        SELECT tile_id, id, time_stamp, latitude, longitude, amount
        FROM vehiclecluster_by_tileid
        WHERE tile_id LIKE %s
    """
    params = [f"{tile_prefixo}%"]

    if time_stamp is not None:
        sql += " AND time_stamp = %s"
        params.append(time_stamp)

    sql += " ORDER BY time_stamp DESC, id;"

    with get_connection_context() as conn:
        with conn.cursor() as cur:
            cur.execute(sql, tuple(params))
            rows = cur.fetchall()

    clusters = [
        {
            "tile_id": r[0],
            "cluster_id": int(r[1]),
            "time_stamp": int(r[2]),
            "latitude": float(r[3]),
            "longitude": float(r[4]),
            "amount": int(r[5]),
        }
        for r in rows
    ]

    logger.info(f"📍 {len(clusters)} clusters encontrados para tile={tile_prefixo}")
    return clusters


def buscar_detalhes_cluster(cluster_id: int, time_stamp: int) -> List[dict]:
    sql = """
        SELECT id, idx, time_stamp, latitude, longitude
        FROM vehicleclusterdetails
        WHERE id = %s AND time_stamp = %s
        ORDER BY idx;
    """

    with get_connection_context() as conn:
        with conn.cursor() as cur:
            cur.execute(sql, (cluster_id, time_stamp))
            rows = cur.fetchall()

    pontos = [
        {
            "cluster_id": int(r[0]),
            "point_index": int(r[1]),
            "time_stamp": int(r[2]),
            "latitude": float(r[3]),
            "longitude": float(r[4]),
        }
        for r in rows
    ]

    logger.info(f"🧩 {len(pontos)} pontos no cluster {cluster_id} (time_stamp={time_stamp})")
    return pontos


def listar_runs(limit: int = 20) -> List[dict]:
    sql = """
        SELECT id, window_start, window_end, status, n_records, n_points,
               n_clusters, error, criado_em, finished_at
        FROM hotspot_run
        ORDER BY criado_em DESC
        LIMIT %s;
    """

    with get_connection_context() as conn:
        with conn.cursor() as cur:
            cur.execute(sql, (limit,))
            cols = [c[0] for c in cur.description]
            rows = cur.fetchall()

    return [dict(zip(cols, r)) for r in rows]
