#vehicle_hotspots/src/vehicle_hotspots/api/hotspot_api.py

# ============================================================
# 📦 src/vehicle_hotspots/api/hotspot_api.py
# ============================================================

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from src.database.db_connection import checar_conexao_banco
from src.vehicle_hotspots.api.routes import router as hotspot_router

# ============================================================
# 🚀 App
# ============================================================

app = FastAPI(
    title="Vehicle Hotspots API",
    description="Hotspots de veículos por janela de 1 hora, indexados por tile",
    version="1.0.0",
    openapi_url="/openapi.json",
    docs_url="/docs",
)

# ============================================================
# 🌍 CORS
# ============================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(
    hotspot_router,
    prefix="/hotspots",
    tags=["Hotspots"]
)

# ============================================================
# 🩺 Health local
# ============================================================

@app.get("/")
def root():
    return {"status": "Vehicle Hotspots API online 🚀"}


@app.get("/health/db")
def health_db():
    return {"database": "ok" if checar_conexao_banco() else "unavailable"}

# ============================================================
# 🚀 Execução standalone (dev)
# ============================================================

if __name__ == "__main__":
    uvicorn.run(
        "src.vehicle_hotspots.api.hotspot_api:app",
        host="0.0.0.0",
        port=8010,
        reload=True
    )
