import logging
from typing import List

from fastapi import APIRouter, HTTPException

from models.schemas import (
    CalculoResponse,
    ClassificacaoResponse,
    ClassificarRequest,
    CreditoPadraoRequest,
    LinhaDRE,
    RegimeInput,
    ReformaInput,
    ResultadoReforma,
    ResultadoSimulacao,
    SimulacaoInput,
)
from services.classificador_service import classificar_linhas, resumir_linhas, somar_ajustes_lalur
from services.comparativo_service import simular_cenarios
from services.configuracoes import DEFAULT_PRESUMIDO_CONFIG, DEFAULT_REAL_CONFIG, DEFAULT_REFORM_CONFIG
from services.presumido_service import calcular_presumido
from services.real_service import calcular_real
from services.reforma_service import aplicar_credito_padrao, calcular_reforma
from services.simples_service import calcular_simples
from services.tabelas_simples import SIMPLES_LIMIT, listar_anexos

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["simulacao"])


def _erro_interno(operacao: str, exc: Exception) -> HTTPException:
    logger.exception("Falha em %s", operacao)
    return HTTPException(status_code=500, detail=f"Erro ao {operacao}: {exc}")


@router.get("/tabelas-simples")
async def tabelas_simples():
    """Returns the Simples Nacional annex tables and the revenue ceiling."""
    return {"limite": SIMPLES_LIMIT, "anexos": listar_anexos()}


@router.get("/configuracoes-padrao")
async def configuracoes_padrao():
    return {
        "presumido": DEFAULT_PRESUMIDO_CONFIG,
        "real": DEFAULT_REAL_CONFIG,
        "reforma": DEFAULT_REFORM_CONFIG,
    }


@router.post("/classificar", response_model=ClassificacaoResponse)
async def classificar(request: ClassificarRequest):
    """
    Tags the ledger lines and recomputes the aggregated summary.
    Must be called again after any edit to a line's tag, value or flags.
    """
    try:
        linhas = classificar_linhas(request.linhas)
        return ClassificacaoResponse(
            linhas=linhas,
            resumo=resumir_linhas(linhas),
            ajustesLalur=somar_ajustes_lalur(linhas),
        )
    except Exception as e:
        raise _erro_interno("classificar linhas", e)


@router.post("/credito-padrao", response_model=List[LinhaDRE])
async def credito_padrao(request: CreditoPadraoRequest):
    """Applies the default reform credit rate to cost/expense lines without one."""
    try:
        return aplicar_credito_padrao(request.linhas, request.config or DEFAULT_REFORM_CONFIG)
    except Exception as e:
        raise _erro_interno("aplicar crédito padrão", e)


@router.post("/simular", response_model=CalculoResponse)
async def simular(entrada: SimulacaoInput):
    """
    Full comparison: Simples, Presumido and Real from the ledger lines, the
    cheapest applicable one as baseline, and the IBS/CBS reform projection.
    """
    try:
        comparativo = simular_cenarios(
            entrada.linhas,
            entrada.atividade,
            entrada.presumidoConfig,
            entrada.realConfig,
            entrada.reformConfig,
        )
        return CalculoResponse(success=True, data=comparativo.model_dump())
    except Exception as e:
        raise _erro_interno("simular cenários", e)


@router.post("/simular/simples", response_model=ResultadoSimulacao)
async def simular_simples(entrada: RegimeInput):
    try:
        return calcular_simples(entrada.resumo, entrada.atividade)
    except Exception as e:
        raise _erro_interno("calcular Simples Nacional", e)


@router.post("/simular/presumido", response_model=ResultadoSimulacao)
async def simular_presumido(entrada: RegimeInput):
    try:
        return calcular_presumido(
            entrada.resumo, entrada.atividade, entrada.config or DEFAULT_PRESUMIDO_CONFIG
        )
    except Exception as e:
        raise _erro_interno("calcular Lucro Presumido", e)


@router.post("/simular/real", response_model=ResultadoSimulacao)
async def simular_real(entrada: RegimeInput):
    try:
        return calcular_real(
            entrada.resumo,
            entrada.atividade,
            entrada.config or DEFAULT_REAL_CONFIG,
            entrada.ajustesLalur,
        )
    except Exception as e:
        raise _erro_interno("calcular Lucro Real", e)


@router.post("/simular/reforma", response_model=ResultadoReforma)
async def simular_reforma(entrada: ReformaInput):
    try:
        return calcular_reforma(
            entrada.resumo,
            entrada.linhas,
            entrada.config or DEFAULT_REFORM_CONFIG,
            entrada.melhorAtual,
        )
    except Exception as e:
        raise _erro_interno("calcular Reforma Tributária", e)
