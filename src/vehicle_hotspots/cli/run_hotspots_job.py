#vehicle_hotspots/src/vehicle_hotspots/cli/run_hotspots_job.py

import argparse
from loguru import logger

from src.database.pipeline_history_service import registrar_historico_pipeline
from src.vehicle_hotspots.application.hotspot_use_case import parse_start_time
from src.vehicle_hotspots.config import settings
from src.vehicle_hotspots.infrastructure.queue_factory import fila_hotspots
from src.vehicle_hotspots.jobs import gerar_job_id, processar_hotspots


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Enfileira job assíncrono de hotspots de veículos"
    )
    parser.add_argument("endpoint", help="Banco de posições no formato host:porta")
    parser.add_argument("--start", default=None, help="Início da janela 'YYYY-MM-DD HH:MM:SS' (padrão: agora)")
    parser.add_argument("--correcao", choices=["swap_out_of_range", "none"], default=None)
    parser.add_argument("--zoom", type=int, default=None)
    parser.add_argument("--fila", default=settings.HOTSPOT_QUEUE, help="Nome da fila Redis")

    args = parser.parse_args(argv)

    # valida antes de enfileirar; o job recebe a string original
    parse_start_time(args.start)

    job_id = gerar_job_id()
    queue = fila_hotspots(args.fila)

    logger.info(f"🚀 Enfileirando job de hotspots | endpoint={args.endpoint} | start={args.start or 'agora'}")

    registrar_historico_pipeline(
        job_id, "hotspots",
        status="queued", mensagem=f"Hotspots enfileirados ({args.start or 'agora'})",
    )

    job = queue.enqueue(
        processar_hotspots,
        job_id, args.endpoint, args.start, args.correcao, args.zoom,
        job_timeout=settings.JOB_TIMEOUT,
    )

    logger.info("✅ Job enfileirado com sucesso!")
    logger.info(f"🧠 Job ID Redis: {job.id}")
    logger.info(f"📊 Job ID lógico: {job_id}")
    logger.info(f"🕓 Fila: {args.fila}")
    return job_id, job.id


if __name__ == "__main__":
    main()
