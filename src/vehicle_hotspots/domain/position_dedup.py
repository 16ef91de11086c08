# ============================================================
# 📦 src/vehicle_hotspots/domain/position_dedup.py
# ============================================================

from typing import Iterable, List, Tuple

from src.vehicle_hotspots.domain.entities import PositionRecord


def deduplicar_posicoes(registros: Iterable[PositionRecord]) -> List[PositionRecord]:
    """
    Um registro por (identity, latitude, longitude); o último visto vence.
    A saída é ordenada pela chave para que a mesma janela gere sempre
    a mesma sequência de pontos, independente da ordem do banco.
    """
    unicos = {(r.identity, r.latitude, r.longitude): r for r in registros}
    return [unicos[chave] for chave in sorted(unicos)]


def extrair_pontos(registros: Iterable[PositionRecord]) -> List[Tuple[float, float]]:
    return [(r.latitude, r.longitude) for r in registros]
