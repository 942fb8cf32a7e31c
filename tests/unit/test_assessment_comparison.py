"""
Unit Tests for Assessment Comparison

Deltas, evolution score and the precondition checks.
"""
from datetime import date

import pytest

from mtor.core.analysis import (
    Evolucao,
    classificar_evolucao,
    comparar_avaliacoes,
    pontuar_evolucao,
)
from mtor.utils import IncompatibleRecordsError, InvalidComparisonError


@pytest.fixture
def anterior(make_avaliacao):
    return make_avaliacao(
        "c1", date(2024, 1, 10),
        peso=80.0, percentual_gordura=20.0, massa_magra=60.0,
        circunferencias={"cintura": 90.0, "quadril": 100.0},
    )


class TestComparacao:

    def test_full_score_is_positive(self, make_avaliacao, anterior):
        atual = make_avaliacao(
            "c1", date(2024, 4, 10),
            peso=79.0, percentual_gordura=18.0, massa_magra=62.0,
            circunferencias={"cintura": 87.5, "quadril": 99.0},
        )
        result = comparar_avaliacoes(atual, anterior)

        assert result.pontuacao == 5
        assert result.evolucao == Evolucao.POSITIVA
        assert result.diferencas.peso == pytest.approx(-1.0)
        assert result.diferencas.percentual_gordura == pytest.approx(-2.0)
        assert result.diferencas.massa_magra == pytest.approx(2.0)
        assert result.diferencas.circunferencias == pytest.approx(
            {"cintura": -2.5, "quadril": -1.0}
        )
        assert result.avaliacao_atual is atual
        assert result.avaliacao_anterior is anterior

    def test_imc_delta_uses_computed_values(self, make_avaliacao, anterior):
        atual = make_avaliacao("c1", date(2024, 4, 10), peso=80.0,
                               circunferencias={"cintura": 90.0, "quadril": 100.0})
        result = comparar_avaliacoes(atual, anterior)
        assert result.diferencas.imc == pytest.approx(0.0)

    def test_fat_up_lean_down_big_weight_change_is_negative(self, make_avaliacao, anterior):
        atual = make_avaliacao(
            "c1", date(2024, 4, 10),
            peso=85.0, percentual_gordura=23.0, massa_magra=58.0,
            circunferencias={"cintura": 95.0, "quadril": 104.0},
        )
        result = comparar_avaliacoes(atual, anterior)
        assert result.pontuacao == 0
        assert result.evolucao == Evolucao.NEGATIVA

    def test_fat_down_only_is_stable(self, make_avaliacao, anterior):
        atual = make_avaliacao(
            "c1", date(2024, 4, 10),
            peso=77.0, percentual_gordura=19.0, massa_magra=60.0,
            circunferencias={"cintura": 89.0, "quadril": 100.0},
        )
        result = comparar_avaliacoes(atual, anterior)
        assert result.pontuacao == 2
        assert result.evolucao == Evolucao.ESTAVEL

    def test_weight_exactly_two_kg_counts_as_stable(self, make_avaliacao, anterior):
        atual = make_avaliacao(
            "c1", date(2024, 4, 10),
            peso=82.0, percentual_gordura=20.0, massa_magra=60.0,
            circunferencias={"cintura": 90.0, "quadril": 100.0},
        )
        assert comparar_avaliacoes(atual, anterior).pontuacao == 1

    def test_is_pure(self, make_avaliacao, anterior):
        atual = make_avaliacao("c1", date(2024, 4, 10), peso=79.0,
                               circunferencias={"cintura": 88.0, "quadril": 99.0})
        first = comparar_avaliacoes(atual, anterior)
        second = comparar_avaliacoes(atual, anterior)
        assert first.to_dict() == second.to_dict()

    def test_to_dict_is_json_ready(self, make_avaliacao, anterior):
        atual = make_avaliacao("c1", date(2024, 4, 10), peso=79.0,
                               circunferencias={"cintura": 88.0, "quadril": 99.0})
        data = comparar_avaliacoes(atual, anterior).to_dict()
        assert data["evolucao"] in {"POSITIVA", "NEGATIVA", "ESTAVEL"}
        assert data["avaliacao_atual"]["data_avaliacao"] == "2024-04-10"
        assert set(data["diferencas"]["circunferencias"]) == {"cintura", "quadril"}


class TestPreconditions:

    def test_different_clients_rejected(self, make_avaliacao, anterior):
        atual = make_avaliacao("c2", date(2024, 4, 10),
                               circunferencias={"cintura": 90.0, "quadril": 100.0})
        with pytest.raises(InvalidComparisonError):
            comparar_avaliacoes(atual, anterior)

    def test_same_date_rejected(self, make_avaliacao, anterior):
        atual = make_avaliacao("c1", date(2024, 1, 10),
                               circunferencias={"cintura": 90.0, "quadril": 100.0})
        with pytest.raises(InvalidComparisonError):
            comparar_avaliacoes(atual, anterior)

    def test_reversed_order_rejected(self, make_avaliacao, anterior):
        atual = make_avaliacao("c1", date(2023, 12, 1),
                               circunferencias={"cintura": 90.0, "quadril": 100.0})
        with pytest.raises(InvalidComparisonError):
            comparar_avaliacoes(atual, anterior)

    def test_different_circumference_sites_rejected(self, make_avaliacao, anterior):
        atual = make_avaliacao("c1", date(2024, 4, 10),
                               circunferencias={"cintura": 90.0, "braco_direito": 35.0})
        with pytest.raises(IncompatibleRecordsError) as exc_info:
            comparar_avaliacoes(atual, anterior)
        assert exc_info.value.details == {
            "only_current": ["braco_direito"],
            "only_previous": ["quadril"],
        }


class TestScoring:

    @pytest.mark.parametrize("score,expected", [
        (0, Evolucao.NEGATIVA),
        (1, Evolucao.NEGATIVA),
        (2, Evolucao.ESTAVEL),
        (3, Evolucao.POSITIVA),
        (4, Evolucao.POSITIVA),
        (5, Evolucao.POSITIVA),
    ])
    def test_verdict_thresholds(self, score, expected):
        assert classificar_evolucao(score) == expected

    def test_lean_gain_with_stable_weight_is_three(self, make_avaliacao, anterior):
        atual = make_avaliacao(
            "c1", date(2024, 4, 10),
            peso=81.0, percentual_gordura=20.0, massa_magra=61.0,
            circunferencias={"cintura": 90.0, "quadril": 100.0},
        )
        result = comparar_avaliacoes(atual, anterior)
        assert pontuar_evolucao(result.diferencas) == 3
        assert result.evolucao == Evolucao.POSITIVA
