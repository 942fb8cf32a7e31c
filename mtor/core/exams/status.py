"""
Exam status machine.

    SOLICITADO -> AGENDADO -> COLETADO -> PROCESSANDO -> CONCLUIDO
    CANCELADO and REAGENDADO are reachable from any non-terminal state.

Forward moves may skip stages. Backward moves are rejected, except a move
to REAGENDADO (which ranks with AGENDADO) and the confirmation of a
rescheduled exam (REAGENDADO -> AGENDADO). Re-applying the current state
is a no-op. CONCLUIDO and CANCELADO are terminal.
"""
from mtor.models import StatusExame, parse_enum
from mtor.utils import InvalidStatusTransitionError

TERMINAIS = frozenset({StatusExame.CONCLUIDO, StatusExame.CANCELADO})

ORDEM = {
    StatusExame.SOLICITADO: 0,
    StatusExame.AGENDADO: 1,
    StatusExame.REAGENDADO: 1,
    StatusExame.COLETADO: 2,
    StatusExame.PROCESSANDO: 3,
    StatusExame.CONCLUIDO: 4,
}


def transicao_permitida(atual: StatusExame, novo: StatusExame) -> bool:
    atual, novo = parse_enum(StatusExame, atual), parse_enum(StatusExame, novo)
    if atual == novo:
        return True
    if atual in TERMINAIS:
        return False
    if novo in (StatusExame.CANCELADO, StatusExame.REAGENDADO):
        return True
    if (atual, novo) == (StatusExame.REAGENDADO, StatusExame.AGENDADO):
        return True
    return ORDEM[novo] > ORDEM[atual]


def validar_transicao(atual: StatusExame, novo: StatusExame) -> None:
    """Raise InvalidStatusTransitionError when ``atual -> novo`` is not allowed."""
    if not transicao_permitida(atual, novo):
        raise InvalidStatusTransitionError(StatusExame(atual).value, StatusExame(novo).value)
