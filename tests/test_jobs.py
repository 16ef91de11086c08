from src.vehicle_hotspots import jobs


def _instalar(monkeypatch, executar):
    historico = []
    monkeypatch.setattr(jobs, "registrar_historico_pipeline", lambda **k: historico.append(k))
    monkeypatch.setattr(jobs, "definir_endpoint", lambda e: None)
    monkeypatch.setattr(jobs, "executar_hotspots", executar)
    return historico


def test_job_com_sucesso(monkeypatch):
    historico = _instalar(monkeypatch, lambda **k: {"run_id": 5, "n_clusters": 2})

    resultado = jobs.processar_hotspots("job-1", "db:5432", "2016-06-05 18:00:00")

    assert resultado["status"] == "done"
    assert resultado["resultado"]["run_id"] == 5
    assert [h["status"] for h in historico] == ["running", "done"]


def test_job_com_erro_registra_historico(monkeypatch):
    def falha(**k):
        raise ConnectionError("sem banco")

    historico = _instalar(monkeypatch, falha)

    resultado = jobs.processar_hotspots("job-2", "db:5432")

    assert resultado["status"] == "error"
    assert "sem banco" in resultado["erro"]
    assert [h["status"] for h in historico] == ["running", "error"]


def test_gerar_job_id():
    primeiro = jobs.gerar_job_id()
    segundo = jobs.gerar_job_id()

    assert primeiro.startswith("hotspots-")
    assert primeiro != segundo
