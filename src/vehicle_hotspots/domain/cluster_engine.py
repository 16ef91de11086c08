# ============================================================
# 📦 src/vehicle_hotspots/domain/cluster_engine.py
# ============================================================

from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np
from loguru import logger
from sklearn.cluster import DBSCAN

from src.vehicle_hotspots.domain.entities import Cluster

# Raio em graus "crus" (distância euclidiana no plano lat/lon, NÃO metros)
EPSILON = 0.0005
# O próprio ponto conta para o mínimo de vizinhos
MIN_POINTS = 3

NOISE_LABEL = -1


@dataclass(frozen=True)
class DensityClusterEngine:
    """
    DBSCAN sobre a janela inteira de pontos.
    Não pode ser particionado: dividir os pontos muda as vizinhanças.
    """
    epsilon: float = EPSILON
    min_points: int = MIN_POINTS

    def clusterizar(self, pontos: Sequence[Tuple[float, float]]) -> List[Cluster]:
        total = len(pontos)
        if total < self.min_points:
            logger.info(f"⚪ {total} pontos < min_points={self.min_points} — nenhum cluster.")
            return []

        coords = np.asarray(pontos, dtype=float).reshape(-1, 2)

        model = DBSCAN(eps=self.epsilon, min_samples=self.min_points, metric="euclidean")
        labels = model.fit_predict(coords)

        clusters = []
        for label in sorted(set(labels.tolist()) - {NOISE_LABEL}):
            idx = np.flatnonzero(labels == label)
            membros = tuple((float(coords[i, 0]), float(coords[i, 1])) for i in idx)
            clusters.append(Cluster(id=int(label), members=membros))

        n_noise = int(np.sum(labels == NOISE_LABEL))
        logger.info(
            f"🧩 DBSCAN: {len(clusters)} clusters | {total - n_noise} pontos agrupados | "
            f"🧹 {n_noise} ruído | eps={self.epsilon} | min_points={self.min_points}"
        )
        return clusters


def clusterizar_pontos(pontos: Sequence[Tuple[float, float]]) -> List[Cluster]:
    """Atalho com os parâmetros fixos do pipeline."""
    return DensityClusterEngine().clusterizar(pontos)
