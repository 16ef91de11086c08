# ============================================================
# 📦 src/vehicle_hotspots/domain/tile_calc.py
# ============================================================

import math

from src.vehicle_hotspots.domain.coordinate_correction import (
    MIN_LATITUDE,
    MAX_LATITUDE,
    MIN_LONGITUDE,
    MAX_LONGITUDE,
)

TILE_SIZE = 256
MAX_ZOOM = 23


def _clip(valor: float, minimo: float, maximo: float) -> float:
    return min(max(valor, minimo), maximo)


def validar_zoom(zoom: int):
    if not 1 <= zoom <= MAX_ZOOM:
        raise ValueError(f"Zoom fora do intervalo [1, {MAX_ZOOM}]: {zoom}")


def validar_coordenada(lat: float, lon: float):
    """Fora da faixa da projeção é erro do chamador, nunca clamp silencioso."""
    if math.isnan(lat) or math.isnan(lon):
        raise ValueError(f"Coordenada inválida para tile: ({lat}, {lon})")
    if not (MIN_LATITUDE <= lat <= MAX_LATITUDE):
        raise ValueError(f"Latitude fora da projeção de tiles: {lat}")
    if not (MIN_LONGITUDE <= lon <= MAX_LONGITUDE):
        raise ValueError(f"Longitude fora da projeção de tiles: {lon}")


# ------------------------------------------------------------
# 🗺️ Lat/Lon → pixel → tile (Web Mercator)
# ------------------------------------------------------------
def latlon_para_tile(lat: float, lon: float, zoom: int) -> tuple[int, int]:
    validar_zoom(zoom)
    validar_coordenada(lat, lon)

    x = (lon + 180.0) / 360.0
    sin_lat = math.sin(lat * math.pi / 180.0)
    y = 0.5 - math.log((1 + sin_lat) / (1 - sin_lat)) / (4 * math.pi)

    map_size = TILE_SIZE << zoom
    pixel_x = int(_clip(x * map_size + 0.5, 0, map_size - 1))
    pixel_y = int(_clip(y * map_size + 0.5, 0, map_size - 1))

    return pixel_x // TILE_SIZE, pixel_y // TILE_SIZE


def tile_para_quadkey(tile_x: int, tile_y: int, zoom: int) -> str:
    digitos = []
    for nivel in range(zoom, 0, -1):
        digito = 0
        mascara = 1 << (nivel - 1)
        if tile_x & mascara:
            digito += 1
        if tile_y & mascara:
            digito += 2
        digitos.append(str(digito))
    return "".join(digitos)


def latlon_para_quadkey(lat: float, lon: float, zoom: int) -> str:
    """Chave quadtree do tile que contém (lat, lon) no nível `zoom`."""
    tile_x, tile_y = latlon_para_tile(lat, lon, zoom)
    return tile_para_quadkey(tile_x, tile_y, zoom)
