"""Lab exam (Exame) record and its catalog entries."""
from datetime import datetime
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from .common import ClienteResumo, EntityBase, as_utc, new_id


class StatusExame(str, Enum):
    SOLICITADO = "SOLICITADO"
    AGENDADO = "AGENDADO"
    COLETADO = "COLETADO"
    PROCESSANDO = "PROCESSANDO"
    CONCLUIDO = "CONCLUIDO"
    CANCELADO = "CANCELADO"
    REAGENDADO = "REAGENDADO"


class PrioridadeExame(str, Enum):
    BAIXA = "BAIXA"
    NORMAL = "NORMAL"
    ALTA = "ALTA"
    URGENTE = "URGENTE"


class StatusResultado(str, Enum):
    NORMAL = "NORMAL"
    ALTERADO = "ALTERADO"
    CRITICO = "CRITICO"


class TipoArquivo(str, Enum):
    PDF = "PDF"
    IMAGEM = "IMAGEM"
    DICOM = "DICOM"
    DOCUMENTO = "DOCUMENTO"


class TipoExame(BaseModel):
    id: str
    nome: str
    codigo: str
    categoria: str
    descricao: str = ""
    preparacao: Optional[str] = None
    jejum: Optional[int] = None  # hours
    restricoes: List[str] = Field(default_factory=list)


class CategoriaExame(BaseModel):
    id: str
    nome: str
    cor: str = ""
    icone: str = ""
    descricao: str = ""


class Laboratorio(BaseModel):
    id: str
    nome: str
    cnpj: str = ""
    endereco: str = ""
    telefone: str = ""
    email: str = ""
    website: Optional[str] = None
    credenciamento: List[str] = Field(default_factory=list)
    especialidades: List[str] = Field(default_factory=list)
    tempo_medio_resultado: Optional[int] = None  # hours


class ResultadoExame(BaseModel):
    id: str = Field(default_factory=new_id)
    parametro: str
    valor: Union[float, str]
    unidade: str = ""
    valor_referencia: str = ""
    status: StatusResultado = StatusResultado.NORMAL
    observacao: Optional[str] = None


class ArquivoExame(BaseModel):
    id: str = Field(default_factory=new_id)
    nome: str
    tipo: TipoArquivo = TipoArquivo.DOCUMENTO
    url: str
    tamanho: int
    data_upload: datetime
    checksum: str
    # No at-rest encryption is performed by this service, so this stays False
    criptografado: bool = False


class AlertaExame(BaseModel):
    id: str = Field(default_factory=new_id)
    tipo: StatusResultado
    parametro: str
    valor: Union[float, str]
    mensagem: str
    data_alerta: datetime
    visualizado: bool = False
    acao: Optional[str] = None


class Exame(EntityBase):
    cliente_id: str
    cliente: Optional[ClienteResumo] = None
    tipo_exame: TipoExame
    categoria: Optional[CategoriaExame] = None
    laboratorio: Laboratorio
    medico_solicitante: str = ""
    data_coleta: datetime
    data_resultado: Optional[datetime] = None
    status: StatusExame = StatusExame.SOLICITADO
    prioridade: PrioridadeExame = PrioridadeExame.NORMAL
    resultados: List[ResultadoExame] = Field(default_factory=list)
    arquivos: List[ArquivoExame] = Field(default_factory=list)
    # Derived from resultados on every save
    alertas: List[AlertaExame] = Field(default_factory=list)
    observacoes: Optional[str] = None
    observacoes_medicas: Optional[str] = None
    proximo_exame: Optional[datetime] = None

    @field_validator("data_coleta", "data_resultado", "proximo_exame")
    @classmethod
    def _utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)
