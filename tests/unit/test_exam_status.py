"""
Unit Tests for Exam Lifecycle Rules

Status machine and derived alert list.
"""
from datetime import datetime, timezone

import pytest

from mtor.core.exams import TERMINAIS, derivar_alertas, transicao_permitida, validar_transicao
from mtor.models import ResultadoExame, StatusExame, StatusResultado
from mtor.utils import InvalidStatusTransitionError, InvalidValueError

S = StatusExame


class TestTransicoes:

    @pytest.mark.parametrize("atual,novo", [
        (S.SOLICITADO, S.AGENDADO),
        (S.AGENDADO, S.COLETADO),
        (S.COLETADO, S.PROCESSANDO),
        (S.PROCESSANDO, S.CONCLUIDO),
        (S.SOLICITADO, S.CONCLUIDO),
        (S.AGENDADO, S.PROCESSANDO),
        (S.REAGENDADO, S.COLETADO),
        (S.COLETADO, S.REAGENDADO),
        (S.PROCESSANDO, S.CANCELADO),
        (S.SOLICITADO, S.CANCELADO),
        (S.REAGENDADO, S.AGENDADO),
    ])
    def test_allowed(self, atual, novo):
        assert transicao_permitida(atual, novo)
        validar_transicao(atual, novo)

    @pytest.mark.parametrize("atual,novo", [
        (S.COLETADO, S.AGENDADO),
        (S.PROCESSANDO, S.SOLICITADO),
        (S.REAGENDADO, S.SOLICITADO),
        (S.CONCLUIDO, S.PROCESSANDO),
        (S.CONCLUIDO, S.REAGENDADO),
        (S.CONCLUIDO, S.CANCELADO),
        (S.CANCELADO, S.SOLICITADO),
        (S.CANCELADO, S.REAGENDADO),
    ])
    def test_rejected(self, atual, novo):
        assert not transicao_permitida(atual, novo)
        with pytest.raises(InvalidStatusTransitionError) as exc_info:
            validar_transicao(atual, novo)
        assert exc_info.value.details == {"current": atual.value, "requested": novo.value}
        assert exc_info.value.http_status == 409

    @pytest.mark.parametrize("status", list(S))
    def test_same_state_is_noop(self, status):
        assert transicao_permitida(status, status)

    def test_terminal_states(self):
        assert TERMINAIS == {S.CONCLUIDO, S.CANCELADO}

    def test_accepts_plain_strings(self):
        assert transicao_permitida("SOLICITADO", "AGENDADO")

    def test_unknown_status_is_invalid_value(self):
        with pytest.raises(InvalidValueError) as exc_info:
            validar_transicao(S.SOLICITADO, "FOO")
        assert exc_info.value.http_status == 422
        assert exc_info.value.details["value"] == "FOO"
        assert "AGENDADO" in exc_info.value.details["allowed"]


class TestAlertas:

    def test_one_alert_per_abnormal_result(self, make_exame):
        exame = make_exame("c1", datetime(2024, 12, 15, tzinfo=timezone.utc), [
            ("Hemoglobina", 14.2, StatusResultado.NORMAL),
            ("Leucócitos", 12500, StatusResultado.ALTERADO),
            ("Plaquetas", 40000, StatusResultado.CRITICO),
        ])
        alertas = derivar_alertas(exame)
        assert [(a.parametro, a.tipo) for a in alertas] == [
            ("Leucócitos", StatusResultado.ALTERADO),
            ("Plaquetas", StatusResultado.CRITICO),
        ]
        assert all(a.acao for a in alertas)
        assert not any(a.visualizado for a in alertas)

    def test_all_normal_means_no_alerts(self, make_exame):
        exame = make_exame("c1", datetime(2024, 12, 15, tzinfo=timezone.utc), [
            ("Hemoglobina", 14.2, StatusResultado.NORMAL),
        ])
        assert derivar_alertas(exame) == []

    def test_matching_alert_is_preserved(self, make_exame):
        exame = make_exame("c1", datetime(2024, 12, 15, tzinfo=timezone.utc), [
            ("Leucócitos", 12500, StatusResultado.ALTERADO),
        ])
        [primeiro] = derivar_alertas(exame)
        lido = primeiro.model_copy(update={"visualizado": True, "acao": "Repetir em 30 dias"})

        [mantido] = derivar_alertas(exame.model_copy(update={"alertas": [lido]}))
        assert mantido.id == primeiro.id
        assert mantido.visualizado
        assert mantido.acao == "Repetir em 30 dias"

    def test_changed_value_replaces_alert(self, make_exame):
        exame = make_exame("c1", datetime(2024, 12, 15, tzinfo=timezone.utc), [
            ("Leucócitos", 12500, StatusResultado.ALTERADO),
        ])
        [antigo] = derivar_alertas(exame)
        novo_resultado = ResultadoExame(
            parametro="Leucócitos", valor=13800, status=StatusResultado.ALTERADO
        )
        atualizado = exame.model_copy(update={"resultados": [novo_resultado], "alertas": [antigo]})
        [novo] = derivar_alertas(atualizado)
        assert novo.id != antigo.id
        assert novo.valor == 13800
