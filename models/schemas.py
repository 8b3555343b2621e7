from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Any, Literal


LineTag = Literal[
    "RECEITA", "DEDUCAO", "IMPOSTO_VENDA", "IRPJ_CSLL", "FOLHA", "CUSTO",
    "DESPESA", "REC_FIN", "DESP_FIN", "OUTROS", "IGNORE",
]
LineType = Literal["ANALYTICAL", "SYNTHETIC"]
LalurAdjustment = Literal["ADDITION", "EXCLUSION"]
Secao = Literal["DRE", "BALANCO", "EBITDA"]

ActivityType = Literal[
    "COMERCIO",
    "INDUSTRIA",
    "SERVICO_ANEXO_III",
    "SERVICO_ANEXO_IV",
    "SERVICO_ANEXO_V",
]

Regime = Literal["Simples Nacional", "Lucro Presumido", "Lucro Real", "Reforma Tributária"]


class LinhaDRE(BaseModel):
    """Uma linha do balancete/DRE. Imutável: edições geram um novo registro."""
    model_config = ConfigDict(frozen=True)

    description: str
    value: float
    isTotal: bool = False
    section: Secao = "DRE"
    level: int = 0
    tag: Optional[LineTag] = None
    lineType: Optional[LineType] = None        # inferido de isTotal se ausente
    useForCredit: Optional[bool] = None        # crédito PIS/COFINS (Lucro Real)
    reformCreditRate: Optional[float] = Field(default=None, ge=0, le=100)  # % crédito IBS/CBS
    lalurAdjustment: Optional[LalurAdjustment] = None


class ItemComposicao(BaseModel):
    accountName: str
    value: float


class Composicao(BaseModel):
    revenue:           List[ItemComposicao] = []
    deductions:        List[ItemComposicao] = []
    cogs:              List[ItemComposicao] = []
    payroll:           List[ItemComposicao] = []
    expenses:          List[ItemComposicao] = []
    financialRevenues: List[ItemComposicao] = []
    financialExpenses: List[ItemComposicao] = []


class ResumoFinanceiro(BaseModel):
    """Totais agregados a partir das linhas analíticas — entrada dos calculadores."""
    revenueAnnual:     float = 0
    revenueCurrent:    float = 0  # receita média mensal
    deductions:        float = 0
    taxesOnSales:      float = 0  # impostos sobre vendas contabilizados
    taxesIncome:       float = 0  # IRPJ/CSLL contabilizados
    payrollBase:       float = 0
    cogs:              float = 0
    expenses:          float = 0
    financialRevenues: float = 0
    financialExpenses: float = 0
    realCreditBase:    Optional[float] = None  # override da base de crédito (Lucro Real)
    composition:       Composicao = Field(default_factory=Composicao)


class AjustesLalur(BaseModel):
    additions:  float = 0
    exclusions: float = 0


class ConfigAliquotas(BaseModel):
    """Alíquotas em percentual (ex.: 15.0 = 15%)."""
    model_config = ConfigDict(frozen=True)

    pis:             float = Field(ge=0)
    cofins:          float = Field(ge=0)
    irpj:            float = Field(ge=0)
    irpjAdicional:   float = Field(ge=0)
    csll:            float = Field(ge=0)
    ipi:             float = Field(ge=0)
    iss:             float = Field(ge=0)
    icms:            float = Field(ge=0)
    rat:             float = Field(ge=0)
    cpp:             float = Field(ge=0)
    inssTerceiros:   float = Field(ge=0)
    fgts:            float = Field(ge=0)
    presuncaoIRPJ:   float = Field(ge=0)
    presuncaoCSLL:   float = Field(ge=0)
    pisFinancial:    float = Field(default=0, ge=0)
    cofinsFinancial: float = Field(default=0, ge=0)


class ConfigReforma(BaseModel):
    model_config = ConfigDict(frozen=True)

    ibsRate:            float = Field(ge=0)  # Estados/Municípios
    cbsRate:            float = Field(ge=0)  # Federal
    selectiveTaxRate:   float = Field(default=0, ge=0)
    standardCreditRate: float = Field(default=100, ge=0, le=100)


class TaxBreakdown(BaseModel):
    taxSales:   float = 0
    taxIncome:  float = 0
    taxPayroll: float = 0
    charges:    float = 0


class TaxDetailed(BaseModel):
    pis:             float = 0
    cofins:          float = 0
    irpj:            float = 0
    irpjAdicional:   float = 0
    csll:            float = 0
    ipi:             float = 0
    iss:             float = 0
    icms:            float = 0
    rat:             float = 0
    cpp:             float = 0
    inssTerceiros:   float = 0
    fgts:            float = 0
    simplesDAS:      float = 0
    pisFinancial:    float = 0
    cofinsFinancial: float = 0
    # Reforma
    ibs:          Optional[float] = None
    cbs:          Optional[float] = None
    selectiveTax: Optional[float] = None


class LinhaDetalhe(BaseModel):
    label: str
    value: float


class ResultadoSimulacao(BaseModel):
    regime: Regime
    totalTax: float
    effectiveRate: float  # fração: totalTax / revenueAnnual
    breakdown: TaxBreakdown
    detailed: TaxDetailed
    details: List[LinhaDetalhe] = []
    notes: List[str] = []
    isBlocked: bool = False


class ResultadoReforma(ResultadoSimulacao):
    totalCredits: float
    debitIBS:  float
    debitCBS:  float
    creditIBS: float
    creditCBS: float


class ImpactoReforma(BaseModel):
    currentRegime: Regime
    currentTotal: float
    reformTotal: float
    difference: float  # reforma - cenário vigente
    isSaving: bool


class ComparativoResultado(BaseModel):
    resumo: ResumoFinanceiro
    ajustesLalur: AjustesLalur
    simples: ResultadoSimulacao
    presumido: ResultadoSimulacao
    real: ResultadoSimulacao
    reforma: ResultadoReforma
    bestCurrent: Regime
    impacto: ImpactoReforma


# ── Requests / responses da API ─────────────────────────────────────────────

class ClassificarRequest(BaseModel):
    linhas: List[LinhaDRE]


class ClassificacaoResponse(BaseModel):
    linhas: List[LinhaDRE]
    resumo: ResumoFinanceiro
    ajustesLalur: AjustesLalur


class SimulacaoInput(BaseModel):
    linhas: List[LinhaDRE]
    atividade: ActivityType = "SERVICO_ANEXO_III"
    presumidoConfig: Optional[ConfigAliquotas] = None  # padrão se ausente
    realConfig:      Optional[ConfigAliquotas] = None
    reformConfig:    Optional[ConfigReforma] = None


class RegimeInput(BaseModel):
    resumo: ResumoFinanceiro
    atividade: ActivityType = "SERVICO_ANEXO_III"
    config: Optional[ConfigAliquotas] = None
    ajustesLalur: Optional[AjustesLalur] = None  # apenas Lucro Real


class ReformaInput(BaseModel):
    resumo: ResumoFinanceiro
    linhas: List[LinhaDRE]
    melhorAtual: ResultadoSimulacao
    config: Optional[ConfigReforma] = None


class CreditoPadraoRequest(BaseModel):
    linhas: List[LinhaDRE]
    config: Optional[ConfigReforma] = None


class CalculoResponse(BaseModel):
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
