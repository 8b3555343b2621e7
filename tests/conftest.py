import pytest

from models.schemas import ResumoFinanceiro


@pytest.fixture
def resumo_servicos():
    """R$ 1 mi de receita, CMV 300k, despesas 200k, folha 150k."""
    return ResumoFinanceiro(
        revenueAnnual=1_000_000,
        deductions=0,
        cogs=300_000,
        expenses=200_000,
        payrollBase=150_000,
    )
