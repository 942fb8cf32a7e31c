"""
Exam alert derivation.

An exam carries exactly one alert per result whose status is not NORMAL.
Alerts are rebuilt from the results on every save; an alert that survives
a rebuild (same parameter, same status and value) keeps its id, timestamp,
visualizado flag and acao.
"""
from datetime import datetime, timezone
from typing import List

from mtor.models import AlertaExame, Exame, ResultadoExame, StatusResultado

ACOES_PADRAO = {
    StatusResultado.ALTERADO: "Acompanhar evolução",
    StatusResultado.CRITICO: "Encaminhar para avaliação médica imediata",
}


def _mensagem(resultado: ResultadoExame) -> str:
    if resultado.status == StatusResultado.CRITICO:
        return f"{resultado.parametro} em nível crítico"
    referencia = f" ({resultado.valor_referencia})" if resultado.valor_referencia else ""
    return f"{resultado.parametro} fora do valor de referência{referencia}"


def derivar_alertas(exame: Exame) -> List[AlertaExame]:
    anteriores = {(a.parametro, a.tipo): a for a in exame.alertas}
    agora = datetime.now(timezone.utc)

    alertas = []
    for resultado in exame.resultados:
        if resultado.status == StatusResultado.NORMAL:
            continue
        previo = anteriores.get((resultado.parametro, resultado.status))
        if previo is not None and previo.valor == resultado.valor:
            alertas.append(previo)
            continue
        alertas.append(AlertaExame(
            tipo=resultado.status,
            parametro=resultado.parametro,
            valor=resultado.valor,
            mensagem=_mensagem(resultado),
            data_alerta=agora,
            acao=ACOES_PADRAO.get(resultado.status),
        ))
    return alertas


def normalizar_exame(exame: Exame) -> Exame:
    """Repository normalizer: recompute the derived alert list."""
    return exame.model_copy(update={"alertas": derivar_alertas(exame)})
