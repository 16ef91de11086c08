# ============================================================
# ⚙️ src/vehicle_hotspots/config/settings.py
# ============================================================

import os

# Nível de detalhe do quadkey (tiles de mapa)
TILE_ZOOM = int(os.getenv("HOTSPOT_TILE_ZOOM", "15"))

# Correção de coordenadas por região: "swap_out_of_range" (Los Angeles) ou "none"
COORD_CORRECTION = os.getenv("HOTSPOT_COORD_CORRECTION", "swap_out_of_range")

# Janela fixa de análise
WINDOW_HOURS = 1

# Formato de data aceito na linha de comando
START_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

# Fila assíncrona
REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379/0")
HOTSPOT_QUEUE = os.getenv("HOTSPOT_QUEUE", "hotspot_jobs")
JOB_TIMEOUT = int(os.getenv("HOTSPOT_JOB_TIMEOUT", "3600"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
