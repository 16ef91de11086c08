#vehicle_hotspots/src/vehicle_hotspots/infrastructure/queue_factory.py

from rq import Queue
from redis import Redis

from src.vehicle_hotspots.config import settings


def fila_hotspots(nome: str | None = None) -> Queue:
    redis_conn = Redis.from_url(settings.REDIS_URL)
    return Queue(nome or settings.HOTSPOT_QUEUE, connection=redis_conn, default_timeout=settings.JOB_TIMEOUT)
