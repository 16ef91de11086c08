# ============================================================
# 📦 src/vehicle_hotspots/domain/coordinate_correction.py
# ============================================================

from typing import Callable, Tuple

# Faixa válida de latitude da projeção de tiles (Web Mercator)
MIN_LATITUDE = -85.05112878
MAX_LATITUDE = 85.05112878
MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0

CorretorCoordenadas = Callable[[float, float], Tuple[float, float]]


# ------------------------------------------------------------
# 🔀 Correção lat/lon invertidos (válida apenas para Los Angeles)
# ------------------------------------------------------------
def corrigir_lat_lon(lat: float, lon: float) -> Tuple[float, float]:
    """
    Se a latitude está fora da faixa da projeção, assume que o par
    chegou como (lon, lat) e devolve invertido.
    Heurística regional: não valida a longitude resultante.
    """
    if lat < MIN_LATITUDE or lat > MAX_LATITUDE:
        return lon, lat
    return lat, lon


def sem_correcao(lat: float, lon: float) -> Tuple[float, float]:
    return lat, lon


CORRETORES = {
    "swap_out_of_range": corrigir_lat_lon,
    "none": sem_correcao,
}


def obter_corretor(nome: str) -> CorretorCoordenadas:
    try:
        return CORRETORES[nome.strip().lower()]
    except KeyError:
        raise ValueError(
            f"Correção de coordenadas desconhecida: '{nome}' "
            f"(opções: {', '.join(sorted(CORRETORES))})"
        ) from None
