"""Regras compartilhadas entre os calculadores de regime."""

# Parcela anual da base de IRPJ isenta do adicional (R$ 20 mil/mês)
THRESHOLD_ADICIONAL_IRPJ = 240_000.0


def formatar_brl(valor: float) -> str:
    return f"R$ {valor:,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")


def eh_comercio_industria(atividade: str) -> bool:
    return atividade in ("COMERCIO", "INDUSTRIA")


def aliquota_efetiva(total: float, receita: float) -> float:
    """total / receita, or 0 when there is no positive revenue."""
    if receita <= 0:
        return 0.0
    return total / receita


def calcular_encargos_folha(folha: float, config) -> dict:
    """
    Employer charges on the payroll base.

    'inss' is the INSS patronal group (CPP + RAT + Terceiros), reported as
    payroll tax; FGTS stays outside it and is only added to 'charges'.
    """
    cpp       = folha * (config.cpp / 100)
    rat       = folha * (config.rat / 100)
    terceiros = folha * (config.inssTerceiros / 100)
    fgts      = folha * (config.fgts / 100)
    inss      = cpp + rat + terceiros
    return {
        "cpp": cpp,
        "rat": rat,
        "inssTerceiros": terceiros,
        "fgts": fgts,
        "inss": inss,
        "encargos": inss + fgts,
    }


def calcular_irpj(base: float, config) -> tuple:
    """Returns (IRPJ básico, adicional) for an annual taxable base."""
    basico = base * (config.irpj / 100)
    adicional = max(0.0, base - THRESHOLD_ADICIONAL_IRPJ) * (config.irpjAdicional / 100)
    return basico, adicional
