"""Training protocol (Protocolo) record."""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from .common import EntityBase, new_id


class TipoProtocolo(str, Enum):
    PRE_DEFINIDO = "PRE_DEFINIDO"
    PERSONALIZADO = "PERSONALIZADO"


class NivelProtocolo(str, Enum):
    INICIANTE = "INICIANTE"
    INTERMEDIARIO = "INTERMEDIARIO"
    AVANCADO = "AVANCADO"


class StatusProtocolo(str, Enum):
    ATIVO = "ATIVO"
    INATIVO = "INATIVO"


class Exercicio(BaseModel):
    id: str = Field(default_factory=new_id)
    nome: str
    grupo_muscular: str
    series: int
    repeticoes: str           # e.g. "8-12"
    carga: Optional[float] = None  # kg
    descanso: int = 60        # seconds
    observacoes: Optional[str] = None


class Protocolo(EntityBase):
    nome: str
    descricao: str = ""
    tipo: TipoProtocolo = TipoProtocolo.PERSONALIZADO
    nivel: NivelProtocolo = NivelProtocolo.INICIANTE
    duracao_semanas: int = 4
    objetivo: str = ""
    observacoes: Optional[str] = None
    exercicios: List[Exercicio] = Field(default_factory=list)
    anexos: List[str] = Field(default_factory=list)
    links: List[str] = Field(default_factory=list)
    status: StatusProtocolo = StatusProtocolo.ATIVO
