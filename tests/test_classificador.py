"""Testes da classificação de linhas e do resumo financeiro."""

import pytest

from models.schemas import LinhaDRE
from services.classificador_service import (
    classificar_linhas,
    inferir_tag,
    resumir_linhas,
    somar_ajustes_lalur,
)


@pytest.fixture
def linhas_brutas():
    return [
        LinhaDRE(description="RECEITA OPERACIONAL", value=1_000_000, isTotal=True),
        LinhaDRE(description="Receita bruta de serviços", value=1_000_000, level=1),
        LinhaDRE(description="Cancelamentos", value=-20_000, level=1),
        LinhaDRE(description="ISS sobre faturamento", value=-50_000, level=1),
        LinhaDRE(description="IRPJ corrente", value=-30_000, level=1),
        LinhaDRE(description="Salários e ordenados", value=-150_000, level=1),
        LinhaDRE(description="CMV - mercadorias", value=-300_000, level=1),
        LinhaDRE(description="Aluguel", value=-60_000, level=1),
        LinhaDRE(description="Receita financeira", value=10_000, level=1),
        LinhaDRE(description="Juros passivos", value=-5_000, level=1),
        LinhaDRE(description="Despesas operacionais", value=-65_000, isTotal=True),
        LinhaDRE(description="Receita não classificada", value=999, level=1),
    ]


class TestInferirTag:
    """Keyword-based tagging."""

    @pytest.mark.parametrize("descricao,valor,esperado", [
        ("RECEITA BRUTA DE VENDAS", 100.0, "RECEITA"),
        ("Serviços prestados", 100.0, "RECEITA"),
        ("Abatimentos concedidos", -10.0, "DEDUCAO"),
        ("COFINS a recolher", -10.0, "IMPOSTO_VENDA"),
        ("Simples Nacional", -10.0, "IMPOSTO_VENDA"),
        ("Imposto de renda", -10.0, "IRPJ_CSLL"),
        ("CSLL", -10.0, "IRPJ_CSLL"),
        ("Pró-labore", -10.0, "FOLHA"),
        ("CSP", -10.0, "CUSTO"),
        ("Rendimentos de aplicação financeira", 10.0, "REC_FIN"),
        ("Despesa financeira", -10.0, "DESP_FIN"),
        ("Energia elétrica", -10.0, "DESPESA"),
        ("Outros créditos", 10.0, "OUTROS"),
    ])
    def test_palavras_chave(self, descricao, valor, esperado):
        assert inferir_tag(LinhaDRE(description=descricao, value=valor)) == esperado

    @pytest.mark.parametrize("descricao,valor,esperado", [
        ("Devoluções de vendas", -20.0, "DEDUCAO"),
        ("Devoluções de vendas", 20.0, "DEDUCAO"),
        ("Cancelamento de serviços prestados", -5.0, "DEDUCAO"),
        ("ICMS sobre vendas", -18.0, "IMPOSTO_VENDA"),
        ("(-) Impostos sobre vendas", -18.0, "IMPOSTO_VENDA"),
        ("Despesas com vendas", -7.0, "DESPESA"),
        ("Vendas de mercadorias", 100.0, "RECEITA"),
    ])
    def test_termos_de_venda_em_outras_contas(self, descricao, valor, esperado):
        assert inferir_tag(LinhaDRE(description=descricao, value=valor)) == esperado

    def test_case_insensitive(self):
        assert inferir_tag(LinhaDRE(description="receita bruta", value=1.0)) == "RECEITA"

    def test_total_negativo_nao_vira_despesa(self):
        linha = LinhaDRE(description="Total geral", value=-100.0, isTotal=True)
        assert inferir_tag(linha) == "OUTROS"


class TestClassificarLinhas:
    """Line classification."""

    def test_infere_tipo_pela_flag_de_total(self, linhas_brutas):
        linhas = classificar_linhas(linhas_brutas)
        assert linhas[0].lineType == "SYNTHETIC"
        assert linhas[1].lineType == "ANALYTICAL"

    def test_preserva_tag_explicita(self):
        linha = LinhaDRE(description="Vendas de sucata", value=500.0, tag="IGNORE")
        assert classificar_linhas([linha])[0].tag == "IGNORE"

    def test_reclassifica_tag_outros(self):
        linha = LinhaDRE(description="Vendas", value=500.0, tag="OUTROS")
        assert classificar_linhas([linha])[0].tag == "RECEITA"

    def test_nao_altera_linhas_originais(self, linhas_brutas):
        classificar_linhas(linhas_brutas)
        assert linhas_brutas[1].tag is None
        assert linhas_brutas[1].lineType is None

    def test_idempotente(self, linhas_brutas):
        uma_vez = classificar_linhas(linhas_brutas)
        duas_vezes = classificar_linhas(uma_vez)
        assert uma_vez == duas_vezes

    def test_credito_reforma_padrao_zero(self, linhas_brutas):
        linhas = classificar_linhas(linhas_brutas)
        assert all(l.reformCreditRate == 0 for l in linhas)

    def test_mantem_credito_reforma_informado(self):
        linha = LinhaDRE(description="Aluguel", value=-100.0, reformCreditRate=40)
        assert classificar_linhas([linha])[0].reformCreditRate == 40


class TestResumirLinhas:
    """Aggregation into the financial summary."""

    def test_totais_por_tag(self, linhas_brutas):
        resumo = resumir_linhas(classificar_linhas(linhas_brutas))

        assert resumo.revenueAnnual == 1_000_000
        assert resumo.deductions == 20_000
        assert resumo.taxesOnSales == 50_000
        assert resumo.taxesIncome == 30_000
        assert resumo.payrollBase == 150_000
        assert resumo.cogs == 300_000
        assert resumo.expenses == 60_000
        assert resumo.financialRevenues == 10_000
        assert resumo.financialExpenses == 5_000
        assert resumo.revenueCurrent == pytest.approx(1_000_000 / 12)

    def test_linhas_sinteticas_nao_somam(self):
        linhas = classificar_linhas([
            LinhaDRE(description="RECEITA BRUTA", value=5_000_000, isTotal=True),
            LinhaDRE(description="Vendas de mercadorias", value=100_000),
        ])
        assert resumir_linhas(linhas).revenueAnnual == 100_000

    def test_tags_ignore_e_outros_nao_somam(self):
        linhas = classificar_linhas([
            LinhaDRE(description="Vendas", value=100_000),
            LinhaDRE(description="Vendas duplicadas", value=100_000, tag="IGNORE"),
            LinhaDRE(description="Outros créditos", value=50_000),
        ])
        assert resumir_linhas(linhas).revenueAnnual == 100_000

    def test_independente_da_ordem(self, linhas_brutas):
        direto = resumir_linhas(classificar_linhas(linhas_brutas))
        invertido = resumir_linhas(classificar_linhas(list(reversed(linhas_brutas))))
        assert direto.model_dump(exclude={"composition"}) == invertido.model_dump(exclude={"composition"})

    def test_composicao(self, linhas_brutas):
        resumo = resumir_linhas(classificar_linhas(linhas_brutas))
        assert [(i.accountName, i.value) for i in resumo.composition.revenue] == [
            ("Receita bruta de serviços", 1_000_000)
        ]
        assert [i.accountName for i in resumo.composition.expenses] == ["Aluguel"]

    def test_base_credito_sem_marcacao_fica_vazia(self, linhas_brutas):
        resumo = resumir_linhas(classificar_linhas(linhas_brutas))
        assert resumo.realCreditBase is None

    def test_base_credito_soma_custos_e_despesas_marcados(self):
        linhas = classificar_linhas([
            LinhaDRE(description="CMV", value=-100_000, useForCredit=True),
            LinhaDRE(description="Energia", value=-50_000, useForCredit=True),
            LinhaDRE(description="Aluguel", value=-30_000, useForCredit=False),
            LinhaDRE(description="Custos", value=-999_000, isTotal=True, useForCredit=True),
            LinhaDRE(description="Vendas", value=500_000, useForCredit=True),
        ])
        assert resumir_linhas(linhas).realCreditBase == 150_000

    def test_base_credito_ignora_marcacao_fora_de_custos(self):
        linhas = classificar_linhas([
            LinhaDRE(description="Vendas", value=1_000_000, useForCredit=False),
            LinhaDRE(description="Custos", value=-300_000, isTotal=True, useForCredit=False),
            LinhaDRE(description="CMV", value=-300_000),
        ])
        resumo = resumir_linhas(linhas)
        assert resumo.realCreditBase is None
        assert resumo.cogs == 300_000

    def test_deducoes_e_impostos_nao_inflam_a_receita(self):
        resumo = resumir_linhas(classificar_linhas([
            LinhaDRE(description="Receita bruta de vendas", value=1_000_000),
            LinhaDRE(description="Devoluções de vendas", value=-20_000),
            LinhaDRE(description="ICMS sobre vendas", value=-180_000),
            LinhaDRE(description="Despesas com vendas", value=-40_000),
        ]))
        assert resumo.revenueAnnual == 1_000_000
        assert resumo.deductions == 20_000
        assert resumo.taxesOnSales == 180_000
        assert resumo.expenses == 40_000


class TestAjustesLalur:

    def test_soma_adicoes_e_exclusoes(self):
        linhas = classificar_linhas([
            LinhaDRE(description="Multas indedutíveis", value=-10_000, lalurAdjustment="ADDITION"),
            LinhaDRE(description="Brindes", value=-2_000, lalurAdjustment="ADDITION"),
            LinhaDRE(description="Equivalência patrimonial", value=4_000, lalurAdjustment="EXCLUSION"),
            LinhaDRE(description="Grupo", value=-50_000, isTotal=True, lalurAdjustment="ADDITION"),
        ])
        ajustes = somar_ajustes_lalur(linhas)
        assert ajustes.additions == 12_000
        assert ajustes.exclusions == 4_000

    def test_sem_ajustes(self):
        ajustes = somar_ajustes_lalur([LinhaDRE(description="Aluguel", value=-1.0)])
        assert ajustes.additions == 0
        assert ajustes.exclusions == 0
