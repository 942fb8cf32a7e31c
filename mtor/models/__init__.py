"""
Domain Models

pydantic records persisted by the repositories and exchanged over the API.
"""
from .common import ClienteResumo, EntityBase, Genero, Page, as_utc, new_id, parse_enum
from .cliente import Cliente, StatusCliente
from .avaliacao import (
    Anamnese,
    AvaliacaoFisica,
    ClassificacaoGordura,
    ClassificacaoIMC,
    ComposicaoCorporal,
    DobrasCutaneas,
    Fotos,
    NivelAtividade,
    PressaoArterial,
    ResultadosAvaliacao,
    StatusAvaliacao,
    TestesFisicos,
    TipoAvaliacao,
)
from .exame import (
    AlertaExame,
    ArquivoExame,
    CategoriaExame,
    Exame,
    Laboratorio,
    PrioridadeExame,
    ResultadoExame,
    StatusExame,
    StatusResultado,
    TipoArquivo,
    TipoExame,
)
from .protocolo import (
    Exercicio,
    NivelProtocolo,
    Protocolo,
    StatusProtocolo,
    TipoProtocolo,
)

__all__ = [
    "ClienteResumo", "EntityBase", "Genero", "Page", "as_utc", "new_id", "parse_enum",
    "Cliente", "StatusCliente",
    "Anamnese", "AvaliacaoFisica", "ClassificacaoGordura", "ClassificacaoIMC",
    "ComposicaoCorporal", "DobrasCutaneas", "Fotos", "NivelAtividade",
    "PressaoArterial", "ResultadosAvaliacao", "StatusAvaliacao", "TestesFisicos",
    "TipoAvaliacao",
    "AlertaExame", "ArquivoExame", "CategoriaExame", "Exame", "Laboratorio",
    "PrioridadeExame", "ResultadoExame", "StatusExame", "StatusResultado",
    "TipoArquivo", "TipoExame",
    "Exercicio", "NivelProtocolo", "Protocolo", "StatusProtocolo", "TipoProtocolo",
]
