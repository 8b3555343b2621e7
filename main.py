import logging
import os

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from routers.simulacao import router as simulacao_router

# Podem ser sobrescritos via variáveis de ambiente
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173").split(",")
    if origin.strip()
]
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))


def nivel_log(nome: str) -> int:
    """Numeric logging level for ``nome``; unknown names fall back to INFO."""
    nivel = logging.getLevelName(nome.upper())
    return nivel if isinstance(nivel, int) else logging.INFO


logging.basicConfig(
    level=nivel_log(LOG_LEVEL),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

app = FastAPI(
    title="Planejamento Tributário - Backend",
    description="Simulação de Simples Nacional, Lucro Presumido, Lucro Real e Reforma Tributária (IBS/CBS)",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(simulacao_router)


@app.get("/health")
async def health():
    return {"status": "ok", "service": "Planejamento Tributário Backend"}


def run():
    uvicorn.run(app, host=HOST, port=PORT, log_level=logging.getLevelName(nivel_log(LOG_LEVEL)).lower())


if __name__ == "__main__":
    run()
