"""
Lucro Real.

  - PIS/COFINS não-cumulativos: débito sobre a receita líquida de deduções,
    crédito sobre a base de insumos; cada tributo é apurado separadamente
    e nunca fica negativo.
  - PIS/COFINS sobre receitas financeiras com alíquotas próprias, sem
    crédito, abatidos do resultado financeiro.
  - IRPJ/CSLL sobre o lucro contábil ajustado pelo LALUR (adições e
    exclusões); prejuízo fiscal zera a base.
"""

import logging
from typing import Optional

from models.schemas import (
    AjustesLalur,
    ConfigAliquotas,
    LinhaDetalhe,
    ResultadoSimulacao,
    ResumoFinanceiro,
    TaxBreakdown,
    TaxDetailed,
)
from services.tributos_comuns import (
    aliquota_efetiva,
    calcular_encargos_folha,
    calcular_irpj,
    eh_comercio_industria,
    formatar_brl,
)

logger = logging.getLogger(__name__)

# Fração das despesas operacionais aceita como base de crédito em serviços
PERCENTUAL_CREDITO_DESPESAS = 0.20


def base_credito_pis_cofins(resumo: ResumoFinanceiro, atividade: str) -> float:
    """Explicit credit base if given, else COGS for goods, else 20% of expenses."""
    if resumo.realCreditBase is not None:
        return resumo.realCreditBase
    if eh_comercio_industria(atividade):
        return resumo.cogs
    return resumo.expenses * PERCENTUAL_CREDITO_DESPESAS


def calcular_real(
    resumo: ResumoFinanceiro,
    atividade: str,
    config: ConfigAliquotas,
    ajustes: Optional[AjustesLalur] = None,
) -> ResultadoSimulacao:
    ajustes = ajustes or AjustesLalur()
    encargos = calcular_encargos_folha(resumo.payrollBase, config)
    receita = resumo.revenueAnnual

    # ── PIS/COFINS não-cumulativos ───────────────────────────────────────
    base_receita = max(0.0, receita - resumo.deductions)
    debito_pis    = base_receita * (config.pis / 100)
    debito_cofins = base_receita * (config.cofins / 100)

    base_credito = base_credito_pis_cofins(resumo, atividade)
    credito_pis    = base_credito * (config.pis / 100)
    credito_cofins = base_credito * (config.cofins / 100)

    pis    = max(0.0, debito_pis - credito_pis)
    cofins = max(0.0, debito_cofins - credito_cofins)

    # ── Receitas financeiras ─────────────────────────────────────────────
    pis_financeiro    = resumo.financialRevenues * (config.pisFinancial / 100)
    cofins_financeiro = resumo.financialRevenues * (config.cofinsFinancial / 100)
    total_financeiro  = pis_financeiro + cofins_financeiro

    # ── ISS / ICMS / IPI sobre a receita bruta ───────────────────────────
    mercadorias = eh_comercio_industria(atividade)
    ipi  = receita * (config.ipi / 100)
    iss  = receita * (config.iss / 100) if not mercadorias else 0.0
    icms = receita * (config.icms / 100) if mercadorias else 0.0

    total_vendas = pis + cofins + iss + icms + ipi

    # ── Lucro antes do IR ────────────────────────────────────────────────
    receita_liquida = receita - resumo.deductions - total_vendas
    despesas_dedutiveis = (
        resumo.cogs + resumo.expenses + resumo.payrollBase + encargos["encargos"]
    )
    resultado_operacional = receita_liquida - despesas_dedutiveis
    resultado_financeiro = (
        resumo.financialRevenues - total_financeiro - resumo.financialExpenses
    )
    lucro_antes_ir = resultado_operacional + resultado_financeiro

    # ── LALUR ────────────────────────────────────────────────────────────
    lucro_real = max(0.0, lucro_antes_ir + ajustes.additions - ajustes.exclusions)

    irpj_basico, irpj_adicional = calcular_irpj(lucro_real, config)
    total_irpj = irpj_basico + irpj_adicional
    total_csll = lucro_real * (config.csll / 100)

    total = (
        total_irpj + total_csll + total_vendas + total_financeiro
        + encargos["inss"] + encargos["fgts"]
    )

    logger.debug(
        "Real: lucro antes do IR %.2f, lucro real %.2f, total %.2f",
        lucro_antes_ir, lucro_real, total,
    )

    notes = []
    if lucro_real <= 0:
        notes.append("Prejuízo Fiscal projetado")
    if ajustes.additions > 0:
        notes.append(f"Adições LALUR: +{formatar_brl(ajustes.additions)}")
    if ajustes.exclusions > 0:
        notes.append(f"Exclusões LALUR: -{formatar_brl(ajustes.exclusions)}")

    return ResultadoSimulacao(
        regime="Lucro Real",
        totalTax=total,
        effectiveRate=aliquota_efetiva(total, receita),
        breakdown=TaxBreakdown(
            taxSales=total_vendas,
            taxIncome=total_irpj + total_csll,
            taxPayroll=encargos["inss"],
            charges=encargos["encargos"],
        ),
        detailed=TaxDetailed(
            pis=pis,
            cofins=cofins,
            irpj=irpj_basico,
            irpjAdicional=irpj_adicional,
            csll=total_csll,
            ipi=ipi,
            iss=iss,
            icms=icms,
            cpp=encargos["cpp"],
            rat=encargos["rat"],
            inssTerceiros=encargos["inssTerceiros"],
            fgts=encargos["fgts"],
            pisFinancial=pis_financeiro,
            cofinsFinancial=cofins_financeiro,
        ),
        details=[
            LinhaDetalhe(label="PIS/COFINS (Liq)", value=pis + cofins),
            LinhaDetalhe(label="PIS/COFINS (Fin)", value=total_financeiro),
            LinhaDetalhe(label="IRPJ/CSLL", value=total_irpj + total_csll),
            LinhaDetalhe(label="ISS/ICMS", value=iss + icms),
            LinhaDetalhe(label="INSS Patronal", value=encargos["inss"]),
            LinhaDetalhe(label="FGTS", value=encargos["fgts"]),
        ],
        notes=notes,
    )
