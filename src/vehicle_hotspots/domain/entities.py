# ==========================================================
# 📦 src/vehicle_hotspots/domain/entities.py
# ==========================================================

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Tuple

LatLon = Tuple[float, float]


@dataclass(frozen=True)
class PositionRecord:
    """Um reporte de posição de veículo, como lido da tabela vehicles."""
    identity: str
    latitude: float
    longitude: float
    timestamp: Optional[datetime] = None


# ==========================================================
# 🧩 Cluster (saída do DBSCAN)
# ==========================================================
@dataclass(frozen=True)
class Cluster:
    """
    Cluster de densidade.
    - id único dentro de uma execução (não estável entre execuções)
    - members na ordem de iteração usada pelo centróide e pelo pointIndex
    """
    id: int
    members: Tuple[LatLon, ...]

    @property
    def size(self) -> int:
        return len(self.members)


@dataclass(frozen=True)
class VehicleClusterDetail:
    cluster_id: int
    point_index: int
    timestamp: int
    latitude: float
    longitude: float


@dataclass(frozen=True)
class VehicleCluster:
    cluster_id: int
    timestamp: int
    center_latitude: float
    center_longitude: float
    member_count: int


@dataclass(frozen=True)
class TiledVehicleCluster:
    tile_key: str
    cluster_id: int
    timestamp: int
    center_latitude: float
    center_longitude: float
    amount: int


# ==========================================================
# 🗺️ Resultado completo de uma janela
# ==========================================================
@dataclass
class HotspotResult:
    details: List[VehicleClusterDetail] = field(default_factory=list)
    clusters: List[VehicleCluster] = field(default_factory=list)
    tiled: List[TiledVehicleCluster] = field(default_factory=list)
    n_points: int = 0
    n_noise: int = 0
