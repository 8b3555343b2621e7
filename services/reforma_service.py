"""
Reforma Tributária — IVA Dual (IBS + CBS) e Imposto Seletivo (IS).

Débitos sobre a receita líquida de deduções; créditos amplos sobre as
linhas de CUSTO/DESPESA conforme o percentual de crédito informado em cada
linha. IRPJ/CSLL e encargos sobre a folha não mudam com a reforma do
consumo e são herdados do melhor cenário vigente.
"""

import logging
from typing import List

from models.schemas import (
    ConfigReforma,
    LinhaDetalhe,
    LinhaDRE,
    ResultadoReforma,
    ResultadoSimulacao,
    ResumoFinanceiro,
    TaxBreakdown,
    TaxDetailed,
)
from services.classificador_service import tipo_linha
from services.tributos_comuns import aliquota_efetiva

logger = logging.getLogger(__name__)


def linha_gera_credito(linha: LinhaDRE) -> bool:
    return (
        tipo_linha(linha) == "ANALYTICAL"
        and linha.tag in ("CUSTO", "DESPESA")
        and (linha.reformCreditRate or 0) > 0
    )


def calcular_creditos(linhas: List[LinhaDRE], config: ConfigReforma) -> tuple:
    """Returns (crédito IBS, crédito CBS) summed over the credit-eligible lines."""
    credito_ibs = credito_cbs = 0.0
    for linha in linhas:
        if not linha_gera_credito(linha):
            continue
        base_elegivel = abs(linha.value) * (linha.reformCreditRate / 100)
        credito_ibs += base_elegivel * (config.ibsRate / 100)
        credito_cbs += base_elegivel * (config.cbsRate / 100)
    return credito_ibs, credito_cbs


def calcular_reforma(
    resumo: ResumoFinanceiro,
    linhas: List[LinhaDRE],
    config: ConfigReforma,
    melhor_atual: ResultadoSimulacao,
) -> ResultadoReforma:
    base = max(0.0, resumo.revenueAnnual - resumo.deductions)

    debito_ibs = base * (config.ibsRate / 100)
    debito_cbs = base * (config.cbsRate / 100)
    imposto_seletivo = base * (config.selectiveTaxRate / 100)

    credito_ibs, credito_cbs = calcular_creditos(linhas, config)

    ibs = max(0.0, debito_ibs - credito_ibs)
    cbs = max(0.0, debito_cbs - credito_cbs)
    total_iva = ibs + cbs + imposto_seletivo

    # Tributação da renda e da folha herdada do cenário vigente
    herdado = melhor_atual.breakdown
    total = total_iva + herdado.taxIncome + herdado.taxPayroll + herdado.charges

    logger.debug(
        "Reforma: IBS %.2f, CBS %.2f, créditos %.2f, base herdada de %s",
        ibs, cbs, credito_ibs + credito_cbs, melhor_atual.regime,
    )

    return ResultadoReforma(
        regime="Reforma Tributária",
        totalTax=total,
        effectiveRate=aliquota_efetiva(total, resumo.revenueAnnual),
        breakdown=TaxBreakdown(
            taxSales=total_iva,
            taxIncome=herdado.taxIncome,
            taxPayroll=herdado.taxPayroll,
            charges=herdado.charges,
        ),
        detailed=TaxDetailed(ibs=ibs, cbs=cbs, selectiveTax=imposto_seletivo),
        details=[
            LinhaDetalhe(label="IBS a Pagar", value=ibs),
            LinhaDetalhe(label="CBS a Pagar", value=cbs),
            LinhaDetalhe(label="Imposto Seletivo", value=imposto_seletivo),
            LinhaDetalhe(label="Créditos Tomados", value=credito_ibs + credito_cbs),
            LinhaDetalhe(label="IRPJ/CSLL (Estimado)", value=herdado.taxIncome),
        ],
        notes=[f"IRPJ/CSLL e encargos sobre a folha herdados de {melhor_atual.regime}"],
        totalCredits=credito_ibs + credito_cbs,
        debitIBS=debito_ibs,
        debitCBS=debito_cbs,
        creditIBS=credito_ibs,
        creditCBS=credito_cbs,
    )


def aplicar_credito_padrao(linhas: List[LinhaDRE], config: ConfigReforma) -> List[LinhaDRE]:
    """
    Fills the default credit rate on every ANALYTICAL CUSTO/DESPESA line that
    has none yet. Lines with an explicit rate are kept as they are.
    """
    resultado = []
    for linha in linhas:
        if (
            tipo_linha(linha) == "ANALYTICAL"
            and linha.tag in ("CUSTO", "DESPESA")
            and not linha.reformCreditRate
        ):
            linha = linha.model_copy(update={"reformCreditRate": config.standardCreditRate})
        resultado.append(linha)
    return resultado
