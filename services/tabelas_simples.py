"""
Tabelas do Simples Nacional (LC 123/2006, vigentes 2024/2025).

Cada anexo é uma sequência de faixas em ordem crescente de limite:
  (limite RBT12, alíquota nominal %, parcela a deduzir R$)

A última faixa termina no teto do regime (R$ 4,8 milhões); acima dele o
Simples não se aplica.
"""

SIMPLES_LIMIT = 4_800_000.0

ANEXO_I = {
    "nome": "Anexo I - Comércio",
    "faixas": (
        (180_000.0,    4.0,        0.0),
        (360_000.0,    7.3,    5_940.0),
        (720_000.0,    9.5,   13_860.0),
        (1_800_000.0, 10.7,   22_500.0),
        (3_600_000.0, 14.3,   87_300.0),
        (4_800_000.0, 19.0,  378_000.0),
    ),
}

ANEXO_II = {
    "nome": "Anexo II - Indústria",
    "faixas": (
        (180_000.0,    4.5,        0.0),
        (360_000.0,    7.8,    5_940.0),
        (720_000.0,   10.0,   13_860.0),
        (1_800_000.0, 11.2,   22_500.0),
        (3_600_000.0, 14.7,   85_500.0),
        (4_800_000.0, 30.0,  720_000.0),
    ),
}

ANEXO_III = {
    "nome": "Anexo III - Serviços (Geral)",
    "faixas": (
        (180_000.0,    6.0,        0.0),
        (360_000.0,   11.2,    9_360.0),
        (720_000.0,   13.5,   17_640.0),
        (1_800_000.0, 16.0,   35_640.0),
        (3_600_000.0, 21.0,  125_640.0),
        (4_800_000.0, 33.0,  648_000.0),
    ),
}

ANEXO_IV = {
    "nome": "Anexo IV - Serviços (Limpeza, Advocacia, Obras)",
    "faixas": (
        (180_000.0,    4.5,        0.0),
        (360_000.0,    9.0,    8_100.0),
        (720_000.0,   10.2,   12_420.0),
        (1_800_000.0, 14.0,   39_780.0),
        (3_600_000.0, 22.0,  183_780.0),
        (4_800_000.0, 33.0,  828_000.0),
    ),
}

ANEXO_V = {
    "nome": "Anexo V - Serviços (Intelectuais, Tecnologia)",
    "faixas": (
        (180_000.0,   15.5,        0.0),
        (360_000.0,   18.0,    4_500.0),
        (720_000.0,   19.5,    9_900.0),
        (1_800_000.0, 20.5,   17_100.0),
        (3_600_000.0, 23.0,   62_100.0),
        (4_800_000.0, 30.5,  540_000.0),
    ),
}

ALL_ANEXOS = [ANEXO_I, ANEXO_II, ANEXO_III, ANEXO_IV, ANEXO_V]


def localizar_faixa(anexo: dict, rbt12: float) -> tuple:
    """Returns the first bracket whose limit is >= rbt12 (last bracket if none)."""
    for faixa in anexo["faixas"]:
        if rbt12 <= faixa[0]:
            return faixa
    return anexo["faixas"][-1]


def listar_anexos() -> list:
    return [
        {
            "nome": anexo["nome"],
            "faixas": [
                {"limite": limite, "aliquota": aliquota, "deducao": deducao}
                for limite, aliquota, deducao in anexo["faixas"]
            ],
        }
        for anexo in ALL_ANEXOS
    ]
