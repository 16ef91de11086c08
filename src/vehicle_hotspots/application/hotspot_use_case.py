# ============================================================
# 📦 src/vehicle_hotspots/application/hotspot_use_case.py
# ============================================================

import time
from datetime import datetime, timedelta
from typing import Optional, Dict, Any, Iterable
from loguru import logger

from src.vehicle_hotspots.config import settings
from src.vehicle_hotspots.infrastructure.persistence.database_reader import carregar_posicoes
from src.vehicle_hotspots.infrastructure.persistence.database_writer import (
    criar_run,
    finalizar_run,
    salvar_detalhes,
    salvar_clusters,
    salvar_clusters_por_tile,
)
from src.vehicle_hotspots.domain.entities import (
    PositionRecord,
    HotspotResult,
    VehicleClusterDetail,
    VehicleCluster,
    TiledVehicleCluster,
)
from src.vehicle_hotspots.domain.position_dedup import deduplicar_posicoes, extrair_pontos
from src.vehicle_hotspots.domain.cluster_engine import DensityClusterEngine
from src.vehicle_hotspots.domain.centroid import calcular_centroide
from src.vehicle_hotspots.domain.coordinate_correction import (
    CorretorCoordenadas,
    corrigir_lat_lon,
    obter_corretor,
)
from src.vehicle_hotspots.domain.tile_calc import latlon_para_quadkey, validar_zoom


# ============================================================
# 🕐 Janela de análise
# ============================================================
def parse_start_time(valor: Optional[str]) -> datetime:
    if valor is None or not valor.strip():
        return datetime.now().replace(microsecond=0)
    try:
        return datetime.strptime(valor.strip(), settings.START_TIME_FORMAT)
    except ValueError:
        raise ValueError(
            f"start_time inválido: '{valor}' — formato esperado 'YYYY-MM-DD HH:MM:SS'."
        ) from None


def calcular_janela(inicio: datetime) -> tuple[datetime, datetime]:
    return inicio, inicio + timedelta(hours=settings.WINDOW_HOURS)


# ============================================================
# 🧠 Pipeline puro (sem I/O)
# ============================================================
def calcular_hotspots(
    registros: Iterable[PositionRecord],
    timestamp_ms: int,
    corretor: CorretorCoordenadas = corrigir_lat_lon,
    zoom: int = settings.TILE_ZOOM,
    engine: Optional[DensityClusterEngine] = None,
) -> HotspotResult:
    """
    Deduplica → DBSCAN → centróide esférico → quadkey.
    Todos os registros de saída recebem o mesmo timestamp da execução.
    """
    engine = engine or DensityClusterEngine()

    distintos = deduplicar_posicoes(registros)
    pontos = extrair_pontos(distintos)
    logger.info(f"📌 {len(pontos)} pontos distintos na janela.")

    clusters = engine.clusterizar(pontos)

    resultado = HotspotResult(n_points=len(pontos))
    agrupados = 0

    for cluster in clusters:
        agrupados += cluster.size

        # mesma ordem de iteração para pointIndex e centróide
        for idx, (lat, lon) in enumerate(cluster.members):
            lat_c, lon_c = corretor(lat, lon)
            resultado.details.append(
                VehicleClusterDetail(
                    cluster_id=cluster.id,
                    point_index=idx,
                    timestamp=timestamp_ms,
                    latitude=lat_c,
                    longitude=lon_c,
                )
            )

        centro_lat, centro_lon = calcular_centroide(cluster.members, corretor)

        resultado.clusters.append(
            VehicleCluster(
                cluster_id=cluster.id,
                timestamp=timestamp_ms,
                center_latitude=centro_lat,
                center_longitude=centro_lon,
                member_count=cluster.size,
            )
        )

        resultado.tiled.append(
            TiledVehicleCluster(
                tile_key=latlon_para_quadkey(centro_lat, centro_lon, zoom),
                cluster_id=cluster.id,
                timestamp=timestamp_ms,
                center_latitude=centro_lat,
                center_longitude=centro_lon,
                amount=cluster.size,
            )
        )

        logger.debug(
            f"🎯 Cluster {cluster.id}: {cluster.size} pontos | centro=({centro_lat:.6f}, {centro_lon:.6f})"
        )

    resultado.n_noise = len(pontos) - agrupados
    return resultado


# ============================================================
# 🚀 Execução principal
# ============================================================
def executar_hotspots(
    start_time: Optional[str] = None,
    correcao: Optional[str] = None,
    zoom: Optional[int] = None,
) -> Dict[str, Any]:

    inicio, fim = calcular_janela(parse_start_time(start_time))
    corretor = obter_corretor(correcao or settings.COORD_CORRECTION)
    zoom = zoom if zoom is not None else settings.TILE_ZOOM
    validar_zoom(zoom)

    logger.info(f"🏁 Iniciando cálculo de hotspots | janela=[{inicio}, {fim}) | zoom={zoom}")
    t0 = time.time()

    run_id = criar_run(inicio, fim)
    n_records = 0
    resultado = HotspotResult()

    try:
        # ============================================================
        # 1) Carregar posições
        # ============================================================
        registros = carregar_posicoes(inicio, fim)
        n_records = len(registros)

        # ============================================================
        # 2–4) Dedup, clusters, centróides e tiles
        # ============================================================
        timestamp_ms = int(time.time() * 1000)
        resultado = calcular_hotspots(registros, timestamp_ms, corretor=corretor, zoom=zoom)

        # ============================================================
        # 💾 Persistência (cada tabela de forma independente)
        # ============================================================
        n_detalhes = salvar_detalhes(resultado.details)
        n_clusters = salvar_clusters(resultado.clusters)
        n_tiles = salvar_clusters_por_tile(resultado.tiled)

        finalizar_run(
            run_id,
            status="done",
            n_records=n_records,
            n_points=resultado.n_points,
            n_clusters=len(resultado.clusters),
        )

    except Exception as e:
        logger.error(f"❌ Erro durante cálculo de hotspots: {e}")
        try:
            finalizar_run(
                run_id,
                status="error",
                n_records=n_records,
                n_points=resultado.n_points,
                n_clusters=0,
                error=str(e),
            )
        except Exception as erro_run:
            logger.error(f"⚠️ Não foi possível marcar run {run_id} como erro: {erro_run}")
        raise

    duracao = round(time.time() - t0, 2)
    logger.success(
        f"✅ Hotspots concluídos | run_id={run_id} | clusters={n_clusters} | "
        f"detalhes={n_detalhes} | tiles={n_tiles} | ruído={resultado.n_noise} | {duracao}s"
    )

    return {
        "run_id": run_id,
        "window_start": inicio.strftime(settings.START_TIME_FORMAT),
        "window_end": fim.strftime(settings.START_TIME_FORMAT),
        "n_records": n_records,
        "n_points": resultado.n_points,
        "n_noise": resultado.n_noise,
        "n_clusters": n_clusters,
        "n_details": n_detalhes,
        "n_tiled": n_tiles,
        "duracao_s": duracao,
    }
