"""
Classificação das linhas do balancete/DRE e agregação do resumo financeiro.

Só linhas ANALÍTICAS (contas que recebem lançamento) entram nas somas;
linhas SINTÉTICAS (grupos/subtotais) são apenas estruturais.
"""

import logging
from typing import List, Optional

from models.schemas import (
    AjustesLalur,
    Composicao,
    ItemComposicao,
    LinhaDRE,
    ResumoFinanceiro,
)

logger = logging.getLogger(__name__)

# ── Regras de classificação por palavra-chave ───────────────────────────────
#
# Avaliadas em ordem; a primeira regra que casa define a tag. Deduções e
# impostos vêm antes da receita ("Devoluções de vendas", "ICMS sobre
# vendas"), e a receita só casa com saldo positivo. Contas financeiras
# dependem do sinal do saldo e são tratadas à parte.
#
REGRAS_TAG = [
    ("DEDUCAO",       ("DEVOLU", "CANCELAMENTO", "ABATIMENTO")),
    ("IMPOSTO_VENDA", ("SIMPLES", "PIS", "COFINS", "ICMS", "ISS", "IMPOSTOS SOBRE")),
    ("RECEITA",       ("RECEITA BRUTA", "VENDAS", "SERVIÇOS PRESTADOS")),
    ("IRPJ_CSLL",     ("IMPOSTO DE RENDA", "IRPJ", "CSLL")),
    ("FOLHA",         ("FOLHA", "SALÁRIOS", "PRÓ-LABORE")),
    ("CUSTO",         ("CUSTO", "CMV", "CSP")),
]
TERMOS_FINANCEIROS = ("FINANCEIRA", "JUROS")

# tag → (campo do ResumoFinanceiro, campo da Composicao)
CAMPOS_RESUMO = {
    "RECEITA":       ("revenueAnnual",     "revenue"),
    "DEDUCAO":       ("deductions",        "deductions"),
    "IMPOSTO_VENDA": ("taxesOnSales",      None),
    "IRPJ_CSLL":     ("taxesIncome",       None),
    "FOLHA":         ("payrollBase",       "payroll"),
    "CUSTO":         ("cogs",              "cogs"),
    "DESPESA":       ("expenses",          "expenses"),
    "REC_FIN":       ("financialRevenues", "financialRevenues"),
    "DESP_FIN":      ("financialExpenses", "financialExpenses"),
}


def inferir_tag(linha: LinhaDRE) -> str:
    """Best-effort tag from the description (case-insensitive substring match)."""
    desc = linha.description.upper()

    for tag, termos in REGRAS_TAG:
        if tag == "RECEITA" and linha.value <= 0:
            continue
        if any(termo in desc for termo in termos):
            return tag

    if any(termo in desc for termo in TERMOS_FINANCEIROS):
        return "REC_FIN" if linha.value > 0 else "DESP_FIN"

    if linha.value < 0 and not linha.isTotal:
        return "DESPESA"

    return "OUTROS"


def tipo_linha(linha: LinhaDRE) -> str:
    return linha.lineType or ("SYNTHETIC" if linha.isTotal else "ANALYTICAL")


def _analiticas(linhas: List[LinhaDRE]) -> List[LinhaDRE]:
    return [l for l in linhas if tipo_linha(l) == "ANALYTICAL"]


def classificar_linhas(linhas: List[LinhaDRE]) -> List[LinhaDRE]:
    """
    Returns a new list of lines with lineType and tag filled in.

    Lines already carrying a tag other than OUTROS keep it, so running this
    over an already-classified set is a no-op.
    """
    resultado = []
    for linha in linhas:
        line_type = tipo_linha(linha)
        tag = linha.tag
        if tag is None or tag == "OUTROS":
            tag = inferir_tag(linha)

        resultado.append(
            linha.model_copy(update={
                "lineType": line_type,
                "tag": tag,
                "reformCreditRate": linha.reformCreditRate or 0.0,
            })
        )

    logger.debug(
        "Classificadas %d linhas (%d analíticas)",
        len(resultado), len(_analiticas(resultado)),
    )
    return resultado


def _soma_por_tag(linhas: List[LinhaDRE], tag: str) -> float:
    return sum(abs(l.value) for l in linhas if l.tag == tag)


def calcular_base_credito_real(linhas: List[LinhaDRE]) -> Optional[float]:
    """
    Sum of CUSTO/DESPESA lines flagged for PIS/COFINS credit.

    None when no cost or expense line has an explicit flag, so Lucro Real
    falls back to its default base.
    """
    elegiveis = [l for l in _analiticas(linhas) if l.tag in ("CUSTO", "DESPESA")]
    if all(l.useForCredit is None for l in elegiveis):
        return None
    return sum(abs(l.value) for l in elegiveis if l.useForCredit)


def resumir_linhas(linhas: List[LinhaDRE]) -> ResumoFinanceiro:
    """Aggregates ANALYTICAL lines into the financial summary fed to the calculators."""
    analiticas = _analiticas(linhas)

    totais = {
        campo: _soma_por_tag(analiticas, tag)
        for tag, (campo, _) in CAMPOS_RESUMO.items()
    }

    composicao = {}
    for tag, (_, campo_comp) in CAMPOS_RESUMO.items():
        if campo_comp is None:
            continue
        composicao[campo_comp] = [
            ItemComposicao(accountName=l.description, value=abs(l.value))
            for l in analiticas if l.tag == tag
        ]

    return ResumoFinanceiro(
        **totais,
        revenueCurrent=totais["revenueAnnual"] / 12,
        realCreditBase=calcular_base_credito_real(linhas),
        composition=Composicao(**composicao),
    )


def somar_ajustes_lalur(linhas: List[LinhaDRE]) -> AjustesLalur:
    additions = exclusions = 0.0
    for l in _analiticas(linhas):
        if l.lalurAdjustment == "ADDITION":
            additions += abs(l.value)
        elif l.lalurAdjustment == "EXCLUSION":
            exclusions += abs(l.value)
    return AjustesLalur(additions=additions, exclusions=exclusions)
