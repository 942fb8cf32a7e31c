"""
Assessment Comparison

Compares two physical assessments of the same client and produces field
deltas plus an evolution verdict.

Scoring rule (weight loss alone earns nothing):
    +2  body-fat percentage decreased
    +2  lean mass increased
    +1  absolute weight change <= 2 kg (stability)

    score >= 3 -> POSITIVA
    score <= 1 -> NEGATIVA
    otherwise  -> ESTAVEL
"""
from __future__ import annotations

from mtor.core.metrics import calcular_imc
from mtor.models import AvaliacaoFisica
from mtor.utils import IncompatibleRecordsError, InvalidComparisonError, get_logger
from .base import ComparativoAvaliacoes, DiferencasAvaliacao, Evolucao

logger = get_logger(__name__)

PONTOS_REDUCAO_GORDURA = 2
PONTOS_GANHO_MASSA_MAGRA = 2
PONTOS_PESO_ESTAVEL = 1
LIMITE_PESO_ESTAVEL_KG = 2.0

PONTUACAO_POSITIVA = 3   # at or above
PONTUACAO_NEGATIVA = 1   # at or below


def _imc(avaliacao: AvaliacaoFisica) -> float:
    if avaliacao.imc is not None:
        return avaliacao.imc
    return calcular_imc(avaliacao.peso, avaliacao.altura)


def calcular_diferencas(atual: AvaliacaoFisica, anterior: AvaliacaoFisica) -> DiferencasAvaliacao:
    """
    Field-wise ``atual - anterior``.

    Raises:
        IncompatibleRecordsError: circumference site sets differ
    """
    chaves_atual = set(atual.circunferencias)
    chaves_anterior = set(anterior.circunferencias)
    if chaves_atual != chaves_anterior:
        raise IncompatibleRecordsError(
            "Assessments do not record the same circumference sites",
            only_current=list(chaves_atual - chaves_anterior),
            only_previous=list(chaves_anterior - chaves_atual),
        )

    return DiferencasAvaliacao(
        peso=atual.peso - anterior.peso,
        percentual_gordura=(
            atual.composicao_corporal.percentual_gordura
            - anterior.composicao_corporal.percentual_gordura
        ),
        massa_magra=(
            atual.composicao_corporal.massa_magra
            - anterior.composicao_corporal.massa_magra
        ),
        imc=_imc(atual) - _imc(anterior),
        # keyed and ordered like the current record
        circunferencias={
            local: valor - anterior.circunferencias[local]
            for local, valor in atual.circunferencias.items()
        },
    )


def pontuar_evolucao(diferencas: DiferencasAvaliacao) -> int:
    pontuacao = 0
    if diferencas.percentual_gordura < 0:
        pontuacao += PONTOS_REDUCAO_GORDURA
    if diferencas.massa_magra > 0:
        pontuacao += PONTOS_GANHO_MASSA_MAGRA
    if abs(diferencas.peso) <= LIMITE_PESO_ESTAVEL_KG:
        pontuacao += PONTOS_PESO_ESTAVEL
    return pontuacao


def classificar_evolucao(pontuacao: int) -> Evolucao:
    if pontuacao >= PONTUACAO_POSITIVA:
        return Evolucao.POSITIVA
    if pontuacao <= PONTUACAO_NEGATIVA:
        return Evolucao.NEGATIVA
    return Evolucao.ESTAVEL


def comparar_avaliacoes(atual: AvaliacaoFisica, anterior: AvaliacaoFisica) -> ComparativoAvaliacoes:
    """
    Compare ``atual`` against the earlier ``anterior`` assessment.

    Pure function: the same two records always give the same result.

    Raises:
        InvalidComparisonError: different clients, or anterior is not
            strictly earlier than atual
        IncompatibleRecordsError: circumference site sets differ
    """
    if atual.cliente_id != anterior.cliente_id:
        raise InvalidComparisonError(
            "Assessments belong to different clients",
            details={"atual": atual.cliente_id, "anterior": anterior.cliente_id},
        )
    if not anterior.data_avaliacao < atual.data_avaliacao:
        raise InvalidComparisonError(
            "Previous assessment must be dated strictly before the current one",
            details={
                "atual": atual.data_avaliacao.isoformat(),
                "anterior": anterior.data_avaliacao.isoformat(),
            },
        )

    diferencas = calcular_diferencas(atual, anterior)
    pontuacao = pontuar_evolucao(diferencas)
    evolucao = classificar_evolucao(pontuacao)

    logger.debug(
        f"comparar_avaliacoes [{atual.cliente_id}]: {anterior.id} -> {atual.id} "
        f"score={pontuacao} ({evolucao.value})"
    )
    return ComparativoAvaliacoes(
        avaliacao_anterior=anterior,
        avaliacao_atual=atual,
        diferencas=diferencas,
        pontuacao=pontuacao,
        evolucao=evolucao,
    )
