"""
Configurações padrão de alíquotas (em %) para cada regime.

Podem ser sobrescritas pelo cliente a cada simulação; estes valores só são
usados quando a requisição não traz a configuração correspondente.
"""

from models.schemas import ConfigAliquotas, ConfigReforma

DEFAULT_PRESUMIDO_CONFIG = ConfigAliquotas(
    pis=0.65, cofins=3.00, irpj=15.00, irpjAdicional=10.00, csll=9.00,
    ipi=0.00, iss=5.00, icms=18.00, rat=2.00, cpp=20.00, inssTerceiros=5.80, fgts=8.00,
    presuncaoIRPJ=32.00, presuncaoCSLL=32.00,
    pisFinancial=0.0, cofinsFinancial=0.0,
)

DEFAULT_REAL_CONFIG = ConfigAliquotas(
    pis=1.65, cofins=7.60, irpj=15.00, irpjAdicional=10.00, csll=9.00,
    ipi=0.00, iss=5.00, icms=18.00, rat=2.00, cpp=20.00, inssTerceiros=5.80, fgts=8.00,
    presuncaoIRPJ=0.0, presuncaoCSLL=0.0,
    pisFinancial=0.65, cofinsFinancial=4.00,
)

DEFAULT_REFORM_CONFIG = ConfigReforma(
    ibsRate=17.5,          # estimativa Estados/Municípios
    cbsRate=9.0,           # estimativa Federal
    selectiveTaxRate=0.0,
    standardCreditRate=100.0,
)
