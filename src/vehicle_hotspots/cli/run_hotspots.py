#vehicle_hotspots/src/vehicle_hotspots/cli/run_hotspots.py

# ============================================================
# 📦 src/vehicle_hotspots/cli/run_hotspots.py
# ============================================================

import argparse
import json
import sys
from loguru import logger

from src.database.db_connection import definir_endpoint
from src.vehicle_hotspots.config import settings
from src.vehicle_hotspots.application.hotspot_use_case import executar_hotspots


def configurar_logs(nivel: str = settings.LOG_LEVEL):
    logger.remove()
    logger.add(
        sys.stdout,
        level=nivel,
        colorize=True,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Cálculo de hotspots de veículos (janela de 1 hora)"
    )
    parser.add_argument("endpoint", help="Banco de posições no formato host:porta")
    parser.add_argument(
        "start_time",
        nargs="?",
        default=None,
        help="Início da janela 'YYYY-MM-DD HH:MM:SS' (padrão: agora)",
    )
    parser.add_argument(
        "--correcao",
        choices=["swap_out_of_range", "none"],
        default=None,
        help="Correção de lat/lon por região (padrão: HOTSPOT_COORD_CORRECTION)",
    )
    parser.add_argument("--zoom", type=int, default=None, help="Nível do quadkey (padrão: HOTSPOT_TILE_ZOOM)")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    configurar_logs()

    definir_endpoint(args.endpoint)

    logger.info("==============================================")
    logger.info("🚀 Iniciando hotspots via CLI")
    logger.info("==============================================")
    logger.info(f"🔌 endpoint   = {args.endpoint}")
    logger.info(f"🕐 start_time = {args.start_time or 'agora'}")
    logger.info(f"🔀 correção   = {args.correcao or settings.COORD_CORRECTION}")
    logger.info(f"🗺️ zoom       = {args.zoom if args.zoom is not None else settings.TILE_ZOOM}")

    result = executar_hotspots(
        start_time=args.start_time,
        correcao=args.correcao,
        zoom=args.zoom,
    )

    # linha JSON única: lida pelo job assíncrono
    print(json.dumps(result, ensure_ascii=False))
    return result


if __name__ == "__main__":
    main()
