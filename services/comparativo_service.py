"""
Comparativo entre regimes.

Fluxo: linhas → classificação → resumo → Simples / Presumido / Real →
escolha do melhor cenário vigente → Reforma (herda IRPJ/CSLL e folha do
melhor cenário).
"""

import logging
from typing import List, Optional

from models.schemas import (
    ComparativoResultado,
    ConfigAliquotas,
    ConfigReforma,
    ImpactoReforma,
    LinhaDRE,
    ResultadoSimulacao,
)
from services.classificador_service import (
    classificar_linhas,
    resumir_linhas,
    somar_ajustes_lalur,
)
from services.configuracoes import (
    DEFAULT_PRESUMIDO_CONFIG,
    DEFAULT_REAL_CONFIG,
    DEFAULT_REFORM_CONFIG,
)
from services.presumido_service import calcular_presumido
from services.real_service import calcular_real
from services.reforma_service import calcular_reforma
from services.simples_service import calcular_simples

logger = logging.getLogger(__name__)


def escolher_melhor_regime(
    resultados: List[ResultadoSimulacao],
    fallback: ResultadoSimulacao,
) -> ResultadoSimulacao:
    """
    Lowest totalTax among the non-blocked results; on ties the first one wins.
    Returns `fallback` (the Lucro Real result) when every result is blocked.
    """
    melhor = None
    for resultado in resultados:
        if resultado.isBlocked:
            continue
        if melhor is None or resultado.totalTax < melhor.totalTax:
            melhor = resultado
    return melhor if melhor is not None else fallback


def calcular_impacto(atual: ResultadoSimulacao, reforma: ResultadoSimulacao) -> ImpactoReforma:
    diferenca = reforma.totalTax - atual.totalTax
    return ImpactoReforma(
        currentRegime=atual.regime,
        currentTotal=atual.totalTax,
        reformTotal=reforma.totalTax,
        difference=diferenca,
        isSaving=diferenca < 0,
    )


def simular_cenarios(
    linhas: List[LinhaDRE],
    atividade: str,
    presumido_config: Optional[ConfigAliquotas] = None,
    real_config: Optional[ConfigAliquotas] = None,
    reform_config: Optional[ConfigReforma] = None,
) -> ComparativoResultado:
    """Runs the full four-way comparison from the raw ledger lines."""
    presumido_config = presumido_config or DEFAULT_PRESUMIDO_CONFIG
    real_config = real_config or DEFAULT_REAL_CONFIG
    reform_config = reform_config or DEFAULT_REFORM_CONFIG

    classificadas = classificar_linhas(linhas)
    resumo = resumir_linhas(classificadas)
    ajustes = somar_ajustes_lalur(classificadas)

    simples = calcular_simples(resumo, atividade)
    presumido = calcular_presumido(resumo, atividade, presumido_config)
    real = calcular_real(resumo, atividade, real_config, ajustes)

    melhor = escolher_melhor_regime([simples, presumido, real], fallback=real)
    logger.info(
        "Melhor cenário vigente: %s (total %.2f)", melhor.regime, melhor.totalTax
    )

    reforma = calcular_reforma(resumo, classificadas, reform_config, melhor)

    return ComparativoResultado(
        resumo=resumo,
        ajustesLalur=ajustes,
        simples=simples,
        presumido=presumido,
        real=real,
        reforma=reforma,
        bestCurrent=melhor.regime,
        impacto=calcular_impacto(melhor, reforma),
    )
