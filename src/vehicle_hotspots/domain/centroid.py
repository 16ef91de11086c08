# ============================================================
# 📦 src/vehicle_hotspots/domain/centroid.py
# ============================================================

from functools import reduce
from math import radians, degrees, sin, cos, sqrt, atan2
from typing import Iterable, Tuple

from src.vehicle_hotspots.domain.coordinate_correction import (
    CorretorCoordenadas,
    corrigir_lat_lon,
)

Vetor3 = Tuple[float, float, float]


# ------------------------------------------------------------
# 🌍 Grau → vetor unitário cartesiano
# ------------------------------------------------------------
def para_cartesiano(lat: float, lon: float) -> Vetor3:
    lat_r = radians(lat)
    lon_r = radians(lon)

    a = cos(lat_r) * cos(lon_r)
    b = cos(lat_r) * sin(lon_r)
    c = sin(lat_r)
    return a, b, c


def _acumular(acc: Tuple[int, Vetor3], ponto: Vetor3) -> Tuple[int, Vetor3]:
    count, (acc_a, acc_b, acc_c) = acc
    a, b, c = ponto
    return count + 1, (acc_a + a, acc_b + b, acc_c + c)


# ------------------------------------------------------------
# 🎯 Centróide esférico
# ------------------------------------------------------------
def calcular_centroide(
    pontos: Iterable[Tuple[float, float]],
    corretor: CorretorCoordenadas = corrigir_lat_lon,
) -> Tuple[float, float]:
    """
    Média esférica de pontos (lat, lon) em graus.

    Cada ponto passa pelo corretor, vira vetor unitário (a, b, c), os três
    componentes são somados num fold e divididos pela contagem. O vetor médio
    não é renormalizado: só os ângulos (atan2) importam.
    """
    vetores = (para_cartesiano(*corretor(lat, lon)) for lat, lon in pontos)
    count, (soma_a, soma_b, soma_c) = reduce(_acumular, vetores, (0, (0.0, 0.0, 0.0)))

    if count == 0:
        raise ValueError("Centróide indefinido: cluster sem pontos.")

    a, b, c = soma_a / count, soma_b / count, soma_c / count

    lon = atan2(b, a)
    hyp = sqrt(a * a + b * b)
    lat = atan2(c, hyp)

    return degrees(lat), degrees(lon)
