"""Request/response bodies that are not entity models."""
from typing import Optional

from pydantic import BaseModel, Field

from mtor.models import (
    ClassificacaoGordura,
    ClassificacaoIMC,
    Genero,
    StatusCliente,
    StatusExame,
    StatusProtocolo,
)


class HealthResponse(BaseModel):
    status: str
    version: str
    timestamp: str
    uptime_seconds: float


class StatusClienteRequest(BaseModel):
    status: StatusCliente


class StatusExameRequest(BaseModel):
    status: StatusExame


class StatusProtocoloRequest(BaseModel):
    status: StatusProtocolo


class CopiaProtocoloRequest(BaseModel):
    nome: str = Field(..., min_length=1)


class CalculoImcRequest(BaseModel):
    peso: float
    altura: float
    percentual_gordura: Optional[float] = None
    genero: Optional[Genero] = None


class CalculoImcResponse(BaseModel):
    imc: float
    classificacao_imc: ClassificacaoIMC
    classificacao_gordura: Optional[ClassificacaoGordura] = None
