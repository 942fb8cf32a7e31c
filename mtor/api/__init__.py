"""
HTTP API routers, mounted under /api/v1 by mtor.app.create_app.
"""
from fastapi import APIRouter

from .avaliacoes import router as avaliacoes_router
from .clientes import router as clientes_router
from .exames import router as exames_router
from .protocolos import router as protocolos_router

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(clientes_router)
api_router.include_router(avaliacoes_router)
api_router.include_router(exames_router)
api_router.include_router(protocolos_router)

__all__ = ["api_router"]
