"""Lab exam routes."""
from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, File, Query, Response, UploadFile
from starlette.concurrency import run_in_threadpool

from mtor.core.analysis import DirecaoDesejada
from mtor.models import ArquivoExame, Exame, Laboratorio, Page, StatusExame, TipoExame
from mtor.services import Services
from .deps import Pagination, get_services, pagination
from .schemas import StatusExameRequest

router = APIRouter(prefix="/exames", tags=["Exames"])

STATUS_FILTRO = "^(TODOS|" + "|".join(s.value for s in StatusExame) + ")$"


@router.get("", response_model=Page[Exame])
def list_exames(
    cliente_id: Optional[str] = None,
    search: Optional[str] = None,
    status: Optional[str] = Query(None, pattern=STATUS_FILTRO, description="Exam status or TODOS"),
    categoria: Optional[str] = Query(None, description="Category name or TODAS"),
    data_inicio: Optional[datetime] = None,
    data_fim: Optional[datetime] = None,
    pg: Pagination = Depends(pagination),
    services: Services = Depends(get_services),
):
    return services.exames.listar(
        pg.page, pg.size,
        cliente_id=cliente_id,
        search=search,
        status=status,
        categoria=categoria,
        data_inicio=data_inicio,
        data_fim=data_fim,
    )


@router.get("/stats")
def exames_stats(services: Services = Depends(get_services)):
    return services.exames.stats()


@router.get("/tipos", response_model=List[TipoExame])
def list_tipos(services: Services = Depends(get_services)):
    return services.exames.listar_tipos()


@router.get("/laboratorios", response_model=List[Laboratorio])
def list_laboratorios(services: Services = Depends(get_services)):
    return services.exames.listar_laboratorios()


@router.get("/comparativo")
def compare_exames(
    atual: str = Query(..., description="Current exam id"),
    anterior: str = Query(..., description="Previous exam id"),
    maior_melhor: List[str] = Query(
        [], description="Parameters for which a rise counts as an improvement"
    ),
    services: Services = Depends(get_services),
):
    direcoes = {p: DirecaoDesejada.MAIOR_MELHOR for p in maior_melhor}
    return services.exames.comparar(atual, anterior, direcoes).to_dict()


@router.get("/historico/{cliente_id}", response_model=List[Exame])
def historico(
    cliente_id: str,
    tipo_exame: Optional[str] = None,
    services: Services = Depends(get_services),
):
    return services.exames.historico(cliente_id, tipo_exame)


@router.get("/{exame_id}", response_model=Exame)
def get_exame(exame_id: str, services: Services = Depends(get_services)):
    return services.exames.obter(exame_id)


@router.get("/{exame_id}/relatorio")
def relatorio_exame(exame_id: str, services: Services = Depends(get_services)):
    return services.exames.relatorio(exame_id).to_dict()


@router.post("/{exame_id}/arquivos", response_model=ArquivoExame, status_code=201)
async def upload_arquivo(
    exame_id: str,
    arquivo: UploadFile = File(...),
    services: Services = Depends(get_services),
):
    conteudo = await arquivo.read()
    return await run_in_threadpool(
        services.exames.anexar_arquivo, exame_id, arquivo.filename or "arquivo", conteudo
    )


@router.post("", response_model=Exame, status_code=201)
def create_exame(payload: Exame, services: Services = Depends(get_services)):
    return services.exames.criar(payload)


@router.put("/{exame_id}", response_model=Exame)
def update_exame(
    exame_id: str,
    changes: Dict[str, Any] = Body(...),
    expected_version: Optional[int] = Query(None),
    services: Services = Depends(get_services),
):
    return services.exames.atualizar(exame_id, changes, expected_version)


@router.patch("/{exame_id}/status", response_model=Exame)
def update_exame_status(
    exame_id: str,
    payload: StatusExameRequest,
    services: Services = Depends(get_services),
):
    return services.exames.atualizar_status(exame_id, payload.status)


@router.delete("/{exame_id}", status_code=204)
def delete_exame(exame_id: str, services: Services = Depends(get_services)):
    services.exames.excluir(exame_id)
    return Response(status_code=204)
