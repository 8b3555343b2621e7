"""
Lucro Presumido.

IRPJ/CSLL incidem sobre um percentual de presunção da receita bruta
(receitas financeiras entram integralmente na base). PIS/COFINS são
cumulativos, sem crédito.
"""

import logging

from models.schemas import (
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
)

logger = logging.getLogger(__name__)


def calcular_presumido(
    resumo: ResumoFinanceiro,
    atividade: str,
    config: ConfigAliquotas,
) -> ResultadoSimulacao:
    encargos = calcular_encargos_folha(resumo.payrollBase, config)

    receita = resumo.revenueAnnual
    base_irpj = receita * (config.presuncaoIRPJ / 100) + resumo.financialRevenues
    base_csll = receita * (config.presuncaoCSLL / 100) + resumo.financialRevenues

    irpj_basico, irpj_adicional = calcular_irpj(base_irpj, config)
    total_irpj = irpj_basico + irpj_adicional
    total_csll = base_csll * (config.csll / 100)

    pis    = receita * (config.pis / 100)
    cofins = receita * (config.cofins / 100)
    ipi    = receita * (config.ipi / 100)
    mercadorias = eh_comercio_industria(atividade)
    iss  = receita * (config.iss / 100) if not mercadorias else 0.0
    icms = receita * (config.icms / 100) if mercadorias else 0.0

    total_vendas = pis + cofins + iss + icms + ipi
    total = total_irpj + total_csll + total_vendas + encargos["inss"] + encargos["fgts"]

    logger.debug(
        "Presumido: base IRPJ %.2f, base CSLL %.2f, total %.2f",
        base_irpj, base_csll, total,
    )

    return ResultadoSimulacao(
        regime="Lucro Presumido",
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
        ),
        details=[
            LinhaDetalhe(label="PIS/COFINS", value=pis + cofins),
            LinhaDetalhe(label="IRPJ/CSLL", value=total_irpj + total_csll),
            LinhaDetalhe(label="ISS/ICMS/IPI", value=iss + icms + ipi),
            LinhaDetalhe(label="INSS Patronal", value=encargos["inss"]),
            LinhaDetalhe(label="FGTS", value=encargos["fgts"]),
        ],
    )
