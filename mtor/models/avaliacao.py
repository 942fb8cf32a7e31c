"""
Physical assessment (AvaliacaoFisica) record.

Optional sub-records are None when not recorded; nothing is zero-filled,
so averages over stored assessments never include fake measurements.
"""
from datetime import date
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .common import ClienteResumo, EntityBase


class TipoAvaliacao(str, Enum):
    INICIAL = "INICIAL"
    REAVALIACAO = "REAVALIACAO"
    CONTROLE = "CONTROLE"


class StatusAvaliacao(str, Enum):
    AGENDADA = "AGENDADA"
    REALIZADA = "REALIZADA"
    CANCELADA = "CANCELADA"


class ClassificacaoIMC(str, Enum):
    """Body-mass-index bands, lowest first."""
    ABAIXO_PESO = "ABAIXO_PESO"
    PESO_NORMAL = "PESO_NORMAL"
    SOBREPESO = "SOBREPESO"
    OBESIDADE_I = "OBESIDADE_I"
    OBESIDADE_II = "OBESIDADE_II"
    OBESIDADE_III = "OBESIDADE_III"


class ClassificacaoGordura(str, Enum):
    MUITO_BAIXO = "MUITO_BAIXO"
    BAIXO = "BAIXO"
    NORMAL = "NORMAL"
    ALTO = "ALTO"
    MUITO_ALTO = "MUITO_ALTO"


class NivelAtividade(str, Enum):
    SEDENTARIO = "SEDENTARIO"
    LEVE = "LEVE"
    MODERADO = "MODERADO"
    INTENSO = "INTENSO"
    MUITO_INTENSO = "MUITO_INTENSO"


class ComposicaoCorporal(BaseModel):
    percentual_gordura: float
    massa_magra: float                       # kg
    massa_gorda: Optional[float] = None      # kg
    massa_muscular: Optional[float] = None   # kg
    agua_corporal: Optional[float] = None    # %
    massa_ossea: Optional[float] = None      # kg
    taxa_metabolica: Optional[float] = None  # kcal/day


class DobrasCutaneas(BaseModel):
    """Skinfolds in mm."""
    triceps: float
    biceps: float
    subescapular: float
    suprailiaca: float
    abdominal: float
    coxa: float
    panturrilha: float


class Flexibilidade(BaseModel):
    sentar_alcancar: Optional[float] = None  # cm
    flexao_ombro: Optional[float] = None     # degrees
    observacoes: Optional[str] = None


class Forca(BaseModel):
    preensao_manual_direita: Optional[float] = None   # kg
    preensao_manual_esquerda: Optional[float] = None  # kg
    flexao_braco: Optional[int] = None                # reps
    abdominal: Optional[int] = None                   # reps
    observacoes: Optional[str] = None


class Resistencia(BaseModel):
    vo2_max: Optional[float] = None                     # ml/kg/min
    frequencia_cardiaca_repouso: Optional[int] = None   # bpm
    frequencia_cardiaca_maxima: Optional[int] = None    # bpm
    teste_cooper: Optional[float] = None                # metres
    observacoes: Optional[str] = None


class TestesFisicos(BaseModel):
    flexibilidade: Flexibilidade = Field(default_factory=Flexibilidade)
    forca: Forca = Field(default_factory=Forca)
    resistencia: Resistencia = Field(default_factory=Resistencia)


class PressaoArterial(BaseModel):
    sistolica: int
    diastolica: int
    frequencia_cardiaca: Optional[int] = None


class Anamnese(BaseModel):
    objetivo_principal: str = ""
    historico_lesoes: str = ""
    medicamentos: str = ""
    restricoes_medicas: str = ""
    nivel_atividade: Optional[NivelAtividade] = None
    frequencia_exercicio: Optional[int] = None  # sessions per week
    tempo_exercicio: Optional[int] = None       # minutes per session
    modalidades_preferidas: List[str] = Field(default_factory=list)
    observacoes_gerais: str = ""


class Fotos(BaseModel):
    frente: Optional[str] = None
    perfil_direito: Optional[str] = None
    perfil_esquerdo: Optional[str] = None
    costas: Optional[str] = None
    observacoes: Optional[str] = None


class ResultadosAvaliacao(BaseModel):
    # Both classifications are recomputed on every save
    classificacao_imc: Optional[ClassificacaoIMC] = None
    classificacao_gordura: Optional[ClassificacaoGordura] = None
    pontos_fortes: List[str] = Field(default_factory=list)
    pontos_melhoria: List[str] = Field(default_factory=list)
    recomendacoes: List[str] = Field(default_factory=list)


class AvaliacaoFisica(EntityBase):
    cliente_id: str
    cliente: Optional[ClienteResumo] = None
    data_avaliacao: date
    tipo: TipoAvaliacao = TipoAvaliacao.INICIAL
    status: StatusAvaliacao = StatusAvaliacao.AGENDADA

    peso: float    # kg
    altura: float  # m
    imc: Optional[float] = None

    # Ordered site -> girth in cm
    circunferencias: Dict[str, float] = Field(default_factory=dict)
    composicao_corporal: ComposicaoCorporal
    dobras_cutaneas: Optional[DobrasCutaneas] = None
    testes_fisicos: TestesFisicos = Field(default_factory=TestesFisicos)
    pressao_arterial: Optional[PressaoArterial] = None
    anamnese: Optional[Anamnese] = None
    fotos: Fotos = Field(default_factory=Fotos)
    resultados: ResultadosAvaliacao = Field(default_factory=ResultadosAvaliacao)

    observacoes: Optional[str] = None
    proxima_avaliacao: Optional[date] = None
