"""
Simples Nacional — guia única (DAS) por faixa de faturamento.

O DAS já embute PIS/COFINS/IRPJ/CSLL/ISS/ICMS e, exceto no Anexo IV, o
INSS patronal (CPP). Ficam fora da guia:
  - FGTS (8% da folha), em todos os anexos
  - CPP (27,8% da folha), apenas no Anexo IV
"""

import logging

from models.schemas import (
    LinhaDetalhe,
    ResultadoSimulacao,
    ResumoFinanceiro,
    TaxBreakdown,
    TaxDetailed,
)
from services.tabelas_simples import (
    ANEXO_I,
    ANEXO_II,
    ANEXO_III,
    ANEXO_IV,
    ANEXO_V,
    SIMPLES_LIMIT,
    localizar_faixa,
)
from services.tributos_comuns import aliquota_efetiva, formatar_brl

logger = logging.getLogger(__name__)

REGIME = "Simples Nacional"

# Encargos trabalhistas estimados sobre a folha, usados só no Fator R
ENCARGOS_FOLHA_FATOR_R = 0.1911
FATOR_R_MINIMO = 0.28
FGTS_ALIQ = 0.08
CPP_ANEXO_IV_ALIQ = 0.278

ANEXO_POR_ATIVIDADE = {
    "COMERCIO": ANEXO_I,
    "INDUSTRIA": ANEXO_II,
    "SERVICO_ANEXO_III": ANEXO_III,
    "SERVICO_ANEXO_IV": ANEXO_IV,
}


def calcular_fator_r(resumo: ResumoFinanceiro) -> float:
    """Payroll (with estimated labour charges) over the trailing 12-month revenue."""
    if resumo.revenueAnnual <= 0:
        return 0.0
    folha_total = resumo.payrollBase * (1 + ENCARGOS_FOLHA_FATOR_R)
    return folha_total / resumo.revenueAnnual


def escolher_anexo(resumo: ResumoFinanceiro, atividade: str) -> tuple:
    """Returns (anexo, fator_r). Fator R only applies to SERVICO_ANEXO_V."""
    if atividade != "SERVICO_ANEXO_V":
        return ANEXO_POR_ATIVIDADE[atividade], 0.0
    fator_r = calcular_fator_r(resumo)
    return (ANEXO_III if fator_r >= FATOR_R_MINIMO else ANEXO_V), fator_r


def aliquota_efetiva_faixa(rbt12: float, aliquota_nominal: float, deducao: float) -> float:
    """(RBT12 × alíquota − parcela a deduzir) / RBT12, never below zero."""
    if rbt12 <= 0:
        return 0.0
    return max((rbt12 * (aliquota_nominal / 100) - deducao) / rbt12, 0.0)


def _resultado_bloqueado(resumo: ResumoFinanceiro) -> ResultadoSimulacao:
    logger.info(
        "Simples bloqueado: faturamento %.2f acima do limite %.2f",
        resumo.revenueAnnual, SIMPLES_LIMIT,
    )
    return ResultadoSimulacao(
        regime=REGIME,
        totalTax=0.0,
        effectiveRate=0.0,
        breakdown=TaxBreakdown(),
        detailed=TaxDetailed(),
        details=[],
        isBlocked=True,
        notes=[
            f"Faturamento de {formatar_brl(resumo.revenueAnnual)} excede limite "
            f"de {formatar_brl(SIMPLES_LIMIT)}."
        ],
    )


def calcular_simples(resumo: ResumoFinanceiro, atividade: str) -> ResultadoSimulacao:
    if resumo.revenueAnnual > SIMPLES_LIMIT:
        return _resultado_bloqueado(resumo)

    anexo, fator_r = escolher_anexo(resumo, atividade)
    rbt12 = resumo.revenueAnnual
    _, aliquota_nominal, deducao = localizar_faixa(anexo, rbt12)
    aliq_eff = aliquota_efetiva_faixa(rbt12, aliquota_nominal, deducao)

    das = resumo.revenueAnnual * aliq_eff
    fgts = resumo.payrollBase * FGTS_ALIQ
    cpp = resumo.payrollBase * CPP_ANEXO_IV_ALIQ if atividade == "SERVICO_ANEXO_IV" else 0.0
    total = das + cpp + fgts

    logger.debug(
        "Simples: %s (fator R %.4f), alíquota nominal %.2f%%, efetiva %.4f, DAS %.2f",
        anexo["nome"], fator_r, aliquota_nominal, aliq_eff, das,
    )

    notes = []
    if atividade == "SERVICO_ANEXO_V" and anexo is ANEXO_III:
        notes.append("Enquadrado no Anexo III pelo Fator R")

    return ResultadoSimulacao(
        regime=REGIME,
        totalTax=total,
        effectiveRate=aliquota_efetiva(total, resumo.revenueAnnual),
        breakdown=TaxBreakdown(
            taxSales=das,
            taxIncome=0.0,
            taxPayroll=cpp,
            charges=fgts + cpp,
        ),
        detailed=TaxDetailed(simplesDAS=das, cpp=cpp, fgts=fgts),
        details=[
            LinhaDetalhe(label=f"Anexo: {anexo['nome']}", value=0.0),
            LinhaDetalhe(label="DAS (Guia Única)", value=das),
            LinhaDetalhe(label="FGTS", value=fgts),
            LinhaDetalhe(label="INSS Patronal (Externo ao DAS)", value=cpp)
            if atividade == "SERVICO_ANEXO_IV"
            else LinhaDetalhe(label="INSS Patronal (Incluso no DAS)", value=0.0),
        ],
        notes=notes,
    )
