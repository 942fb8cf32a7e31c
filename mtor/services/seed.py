"""
Exam catalogs and demo data.

The exam-type and laboratory catalogs are reference data and always
loaded. Demo records go into empty collections only, when
settings.seed_demo_data is set.
"""
from datetime import date, datetime, timezone
from typing import TYPE_CHECKING

from mtor.models import (
    AlertaExame,
    Anamnese,
    AvaliacaoFisica,
    CategoriaExame,
    Cliente,
    ComposicaoCorporal,
    DobrasCutaneas,
    Exame,
    Exercicio,
    Fotos,
    Genero,
    Laboratorio,
    NivelAtividade,
    NivelProtocolo,
    PressaoArterial,
    Protocolo,
    ResultadoExame,
    ResultadosAvaliacao,
    StatusAvaliacao,
    StatusExame,
    StatusResultado,
    TipoAvaliacao,
    TipoExame,
    TipoProtocolo,
)
from mtor.models.avaliacao import Flexibilidade, Forca, Resistencia, TestesFisicos
from mtor.utils import get_logger

if TYPE_CHECKING:
    from . import Services

logger = get_logger(__name__)


TIPOS_EXAME = [
    TipoExame(
        id="1",
        nome="Hemograma Completo",
        codigo="HEM001",
        categoria="Hematologia",
        descricao="Análise completa dos elementos sanguíneos",
        preparacao="Jejum de 8 horas",
        jejum=8,
        restricoes=["Não consumir álcool 24h antes"],
    ),
    TipoExame(
        id="2",
        nome="Glicemia de Jejum",
        codigo="BIO001",
        categoria="Bioquímica",
        descricao="Dosagem de glicose no sangue",
        preparacao="Jejum de 12 horas",
        jejum=12,
        restricoes=["Não consumir açúcar 24h antes"],
    ),
    TipoExame(
        id="3",
        nome="Perfil Lipídico",
        codigo="BIO002",
        categoria="Bioquímica",
        descricao="Análise de colesterol e triglicérides",
        preparacao="Jejum de 12 horas",
        jejum=12,
        restricoes=["Dieta leve no dia anterior"],
    ),
]

LABORATORIOS = [
    Laboratorio(
        id="1",
        nome="Laboratório Central",
        cnpj="12.345.678/0001-90",
        endereco="Rua das Análises, 123",
        telefone="(11) 3333-4444",
        email="contato@labcentral.com.br",
        website="https://labcentral.com.br",
        credenciamento=["ANVISA", "SBPC"],
        especialidades=["Hematologia", "Bioquímica", "Microbiologia"],
        tempo_medio_resultado=24,
    ),
    Laboratorio(
        id="2",
        nome="Lab Express",
        cnpj="98.765.432/0001-10",
        endereco="Av. Rápida, 456",
        telefone="(11) 5555-6666",
        email="contato@labexpress.com.br",
        credenciamento=["ANVISA"],
        especialidades=["Bioquímica", "Hormônios"],
        tempo_medio_resultado=12,
    ),
]

HEMATOLOGIA = CategoriaExame(
    id="1",
    nome="Hematologia",
    cor="#ef4444",
    icone="droplet",
    descricao="Exames relacionados ao sangue",
)


def _clientes():
    dados = [
        ("João Silva", "joao.silva@email.com", "(11) 99999-1111", date(1990, 5, 15),
         Genero.MASCULINO, "Musculação", "Ganho de massa muscular"),
        ("Maria Santos", "maria.santos@email.com", "(11) 99999-2222", date(1985, 8, 22),
         Genero.FEMININO, "Crossfit", "Perda de peso e condicionamento"),
        ("Pedro Oliveira", "pedro.oliveira@email.com", "(11) 99999-3333", date(1992, 12, 10),
         Genero.MASCULINO, "Natação", "Melhora da resistência cardiovascular"),
        ("Ana Costa", "ana.costa@email.com", "(11) 99999-4444", date(1988, 3, 18),
         Genero.FEMININO, "Pilates", "Fortalecimento do core e flexibilidade"),
        ("Carlos Mendes", "carlos.mendes@email.com", "(11) 99999-5555", date(1995, 11, 7),
         Genero.MASCULINO, "Funcional", "Condicionamento geral"),
    ]
    return [
        Cliente(nome=n, email=e, telefone=t, data_nascimento=d, genero=g, modalidade=m, objetivo=o)
        for n, e, t, d, g, m, o in dados
    ]


def _avaliacao_inicial(cliente_id: str) -> AvaliacaoFisica:
    return AvaliacaoFisica(
        cliente_id=cliente_id,
        data_avaliacao=date(2024, 12, 15),
        tipo=TipoAvaliacao.INICIAL,
        status=StatusAvaliacao.REALIZADA,
        peso=85.5,
        altura=1.78,
        circunferencias={
            "pescoco": 38, "ombro": 118, "braco_relaxado": 32, "braco_contraido": 35,
            "antebraco": 28, "punho": 17, "peitoral": 102, "cintura": 88, "abdomen": 92,
            "quadril": 98, "coxa_proximal": 58, "coxa_medial": 55, "coxa_distal": 52,
            "panturrilha": 38, "tornozelo": 23,
        },
        composicao_corporal=ComposicaoCorporal(
            percentual_gordura=18.5, massa_gorda=15.8, massa_magra=69.7,
            massa_muscular=66.2, agua_corporal=58.2, massa_ossea=3.5, taxa_metabolica=1850,
        ),
        dobras_cutaneas=DobrasCutaneas(
            triceps=12, biceps=8, subescapular=15, suprailiaca=18,
            abdominal=22, coxa=14, panturrilha=10,
        ),
        testes_fisicos=TestesFisicos(
            flexibilidade=Flexibilidade(
                sentar_alcancar=25, flexao_ombro=170, observacoes="Boa flexibilidade geral"
            ),
            forca=Forca(
                preensao_manual_direita=45, preensao_manual_esquerda=42, flexao_braco=25,
                abdominal=35, observacoes="Força adequada para o nível",
            ),
            resistencia=Resistencia(
                vo2_max=42, frequencia_cardiaca_repouso=68, frequencia_cardiaca_maxima=185,
                teste_cooper=2800, observacoes="Bom condicionamento cardiovascular",
            ),
        ),
        pressao_arterial=PressaoArterial(sistolica=125, diastolica=80, frequencia_cardiaca=68),
        anamnese=Anamnese(
            objetivo_principal="Ganho de massa muscular e redução do percentual de gordura",
            historico_lesoes="Lesão no joelho direito em 2020, totalmente recuperado",
            medicamentos="Nenhum",
            restricoes_medicas="Nenhuma",
            nivel_atividade=NivelAtividade.MODERADO,
            frequencia_exercicio=4,
            tempo_exercicio=60,
            modalidades_preferidas=["Musculação", "Corrida"],
            observacoes_gerais="Motivado e disciplinado",
        ),
        fotos=Fotos(
            frente="https://example.com/foto1.jpg",
            perfil_direito="https://example.com/foto2.jpg",
            perfil_esquerdo="https://example.com/foto3.jpg",
            costas="https://example.com/foto4.jpg",
        ),
        resultados=ResultadosAvaliacao(
            pontos_fortes=["Boa massa muscular", "Excelente motivação", "Sem restrições médicas"],
            pontos_melhoria=["Reduzir percentual de gordura", "Melhorar flexibilidade posterior"],
            recomendacoes=["Treino de força 4x/semana", "Cardio 2x/semana", "Dieta hipocalórica"],
        ),
        observacoes="Cliente apresenta bom potencial para atingir seus objetivos",
        proxima_avaliacao=date(2025, 1, 15),
    )


def _hemograma(cliente_id: str) -> Exame:
    return Exame(
        cliente_id=cliente_id,
        tipo_exame=TIPOS_EXAME[0],
        categoria=HEMATOLOGIA,
        laboratorio=LABORATORIOS[0],
        medico_solicitante="Dr. Carlos Medeiros - CRM 123456",
        data_coleta=datetime(2024, 12, 15, 8, 0, tzinfo=timezone.utc),
        data_resultado=datetime(2024, 12, 16, 14, 30, tzinfo=timezone.utc),
        status=StatusExame.CONCLUIDO,
        resultados=[
            ResultadoExame(parametro="Hemoglobina", valor=14.2, unidade="g/dL",
                           valor_referencia="12.0 - 16.0"),
            ResultadoExame(parametro="Hematócrito", valor=42.5, unidade="%",
                           valor_referencia="36.0 - 48.0"),
            ResultadoExame(parametro="Leucócitos", valor=12500, unidade="/mm³",
                           valor_referencia="4000 - 11000", status=StatusResultado.ALTERADO,
                           observacao="Valor ligeiramente elevado"),
        ],
        # Kept by the alert rebuild since it matches the ALTERADO result
        alertas=[
            AlertaExame(
                tipo=StatusResultado.ALTERADO,
                parametro="Leucócitos",
                valor=12500,
                mensagem="Leucócitos acima do valor de referência",
                data_alerta=datetime(2024, 12, 16, 14, 30, tzinfo=timezone.utc),
                acao="Acompanhar evolução",
            ),
        ],
        observacoes="Paciente em acompanhamento pós-cirúrgico",
        observacoes_medicas="Leucocitose leve, compatível com processo inflamatório pós-operatório",
        proximo_exame=datetime(2025, 1, 15, tzinfo=timezone.utc),
    )


def _protocolos():
    return [
        Protocolo(
            nome="Treino Iniciante - Corpo Inteiro",
            descricao="Protocolo completo para iniciantes focado em movimentos básicos "
                      "e desenvolvimento de força base.",
            tipo=TipoProtocolo.PRE_DEFINIDO,
            nivel=NivelProtocolo.INICIANTE,
            duracao_semanas=8,
            objetivo="Condicionamento geral e aprendizado de movimentos",
            observacoes="Foque na execução correta dos movimentos",
            exercicios=[
                Exercicio(nome="Agachamento", grupo_muscular="PERNAS", series=3,
                          repeticoes="12-15", carga=0, descanso=60,
                          observacoes="Mantenha o core contraído"),
                Exercicio(nome="Flexão de braço", grupo_muscular="PEITO", series=3,
                          repeticoes="8-12", carga=0, descanso=60,
                          observacoes="Pode fazer apoiado nos joelhos se necessário"),
            ],
            links=["https://youtube.com/watch?v=exemplo"],
        ),
        Protocolo(
            nome="Hipertrofia Intermediária",
            descricao="Programa de hipertrofia com divisão por grupos musculares para "
                      "praticantes intermediários.",
            tipo=TipoProtocolo.PRE_DEFINIDO,
            nivel=NivelProtocolo.INTERMEDIARIO,
            duracao_semanas=12,
            objetivo="Ganho de massa muscular",
            observacoes="Aumente a carga progressivamente",
            exercicios=[
                Exercicio(nome="Supino reto", grupo_muscular="PEITO", series=4,
                          repeticoes="8-10", carga=60, descanso=90,
                          observacoes="Controle a descida"),
                Exercicio(nome="Agachamento livre", grupo_muscular="PERNAS", series=4,
                          repeticoes="10-12", carga=80, descanso=120,
                          observacoes="Desça até 90 graus"),
            ],
        ),
    ]


def seed_demo_data(services: "Services") -> None:
    """Load demo records into whichever collections are still empty."""
    if services.clientes.repo.count() == 0:
        for cliente in _clientes():
            services.clientes.criar(cliente)

    joao = services.clientes.buscar_por_email("joao.silva@email.com")
    if joao is not None:
        if services.avaliacoes.repo.count() == 0:
            services.avaliacoes.criar(_avaliacao_inicial(joao.id))
        if services.exames.repo.count() == 0:
            services.exames.criar(_hemograma(joao.id))

    if services.protocolos.repo.count() == 0:
        for protocolo in _protocolos():
            services.protocolos.criar(protocolo)

    logger.info("Demo data loaded")
