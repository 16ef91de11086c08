from collections import Counter

import pytest

from src.vehicle_hotspots.application.hotspot_use_case import calcular_hotspots
from src.vehicle_hotspots.domain.coordinate_correction import sem_correcao
from src.vehicle_hotspots.domain.entities import PositionRecord
from src.vehicle_hotspots.domain.tile_calc import latlon_para_quadkey

TS = 1465149600000


def _grupo(lat, lon, n, prefixo="v"):
    return [PositionRecord(f"{prefixo}{i}", lat + i * 0.00001, lon) for i in range(n)]


def test_janela_vazia_nao_gera_registros():
    resultado = calcular_hotspots([], TS)
    assert resultado.details == []
    assert resultado.clusters == []
    assert resultado.tiled == []
    assert resultado.n_points == 0


def test_dez_pontos_e_um_outlier():
    registros = _grupo(34.05, -118.25, 10) + [PositionRecord("longe", 34.2, -118.5)]

    resultado = calcular_hotspots(registros, TS)

    assert len(resultado.clusters) == 1
    assert len(resultado.tiled) == 1
    assert len(resultado.details) == 10
    assert resultado.clusters[0].member_count == 10
    assert resultado.tiled[0].amount == 10
    assert resultado.n_points == 11
    assert resultado.n_noise == 1
    assert all(d.latitude != 34.2 for d in resultado.details)


def test_duplicados_sao_colapsados_antes_do_cluster():
    registros = _grupo(34.05, -118.25, 10) * 2
    resultado = calcular_hotspots(registros, TS)
    assert resultado.clusters[0].member_count == 10


def test_point_index_contiguo_e_member_count():
    registros = _grupo(34.05, -118.25, 6, "a") + _grupo(34.10, -118.40, 4, "b")
    resultado = calcular_hotspots(registros, TS)

    contagem = Counter(d.cluster_id for d in resultado.details)
    assert len(resultado.clusters) == 2
    for cluster in resultado.clusters:
        assert contagem[cluster.cluster_id] == cluster.member_count
        indices = sorted(d.point_index for d in resultado.details if d.cluster_id == cluster.cluster_id)
        assert indices == list(range(cluster.member_count))


def test_tile_tem_mesmo_centro_e_id_do_cluster():
    registros = _grupo(34.05, -118.25, 6, "a") + _grupo(34.10, -118.40, 4, "b")
    resultado = calcular_hotspots(registros, TS, zoom=12)

    por_id = {t.cluster_id: t for t in resultado.tiled}
    assert len({c.cluster_id for c in resultado.clusters}) == len(resultado.clusters)
    for cluster in resultado.clusters:
        tile = por_id[cluster.cluster_id]
        assert tile.center_latitude == cluster.center_latitude
        assert tile.center_longitude == cluster.center_longitude
        assert tile.amount == cluster.member_count
        assert tile.tile_key == latlon_para_quadkey(cluster.center_latitude, cluster.center_longitude, 12)
        assert len(tile.tile_key) == 12


def test_timestamp_unico_da_execucao():
    resultado = calcular_hotspots(_grupo(34.05, -118.25, 5), TS)
    stamps = {d.timestamp for d in resultado.details}
    stamps |= {c.timestamp for c in resultado.clusters}
    stamps |= {t.timestamp for t in resultado.tiled}
    assert stamps == {TS}


def test_coordenadas_invertidas_sao_corrigidas_na_saida():
    # pares chegando como (lon, lat)
    registros = [PositionRecord(f"v{i}", -118.25 + i * 0.00001, 34.05) for i in range(5)]
    resultado = calcular_hotspots(registros, TS)

    assert all(d.latitude == pytest.approx(34.05) for d in resultado.details)
    assert all(d.longitude < -118 for d in resultado.details)
    cluster = resultado.clusters[0]
    assert cluster.center_latitude == pytest.approx(34.05, abs=1e-6)
    assert cluster.center_longitude == pytest.approx(-118.24998, abs=1e-6)


def test_point_index_segue_ordem_dos_membros():
    registros = _grupo(34.05, -118.25, 5)
    resultado = calcular_hotspots(registros, TS)
    lats = [d.latitude for d in sorted(resultado.details, key=lambda d: d.point_index)]
    assert lats == sorted(r.latitude for r in registros)


def test_centroide_fora_da_projecao_falha():
    registros = [PositionRecord(f"v{i}", 89.0, 0.0 + i * 0.00001) for i in range(3)]
    with pytest.raises(ValueError):
        calcular_hotspots(registros, TS, corretor=sem_correcao)
