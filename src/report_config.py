# src/report_config.py
"""
Report configuration: the literal period snapshot, brand palettes, chart
display options and narrative copy, keyed by locale and theme.

Every report variant is built from these tables instead of being a separate
copy of the report code.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass, field

from errors import InvalidInput
from records import PeriodRecord, records_from_rows

DEFAULT_LOCALE = "en"
DEFAULT_THEME = "bringoz"

# Maximum characters per line for chart category labels
LABEL_MAX_WIDTH = 16

# Completion rate target used by the traffic-light callouts
COMPLETION_TARGET = 75.0


# ----------------------------
# Palettes
# ----------------------------
PALETTES = {
    "bringoz": {
        "primary": "#002D42",     # dark navy
        "secondary": "#00A9E0",   # blue
        "warning": "#F58220",     # orange
        "error": "#E53935",
        "success": "#4CAF50",
        "background": "#F7F9FA",
        "text": "#231F20",
        "text_secondary": "#555555",
    },
    "pmz": {
        "primary": "#1B3A6B",
        "secondary": "#2E86DE",
        "warning": "#F39C12",
        "error": "#C0392B",
        "success": "#27AE60",
        "background": "#FAFAFA",
        "text": "#222222",
        "text_secondary": "#666666",
    },
}


# ----------------------------
# Chart display options (handed to the renderer as-is)
# ----------------------------
CHART_OPTIONS = {
    "engagement": {
        "legend": None,
        "y_min": 0,
        "y_max": 100,
        "percent_ticks": True,
        "x_grid": False,
        "y_grid": True,
        "stacked": False,
    },
    "completion": {
        "legend": "top",
        "y_min": 0,
        "y_max": 100,
        "percent_ticks": True,
        "x_grid": False,
        "y_grid": True,
        "stacked": False,
    },
    "quality": {
        "legend": "top",
        "y_min": 0,
        "y_max": None,
        "percent_ticks": False,
        "x_grid": False,
        "y_grid": True,
        "stacked": True,
    },
}


# ----------------------------
# Literal data snapshot (per locale, period labels differ)
# ----------------------------
_MONTHLY_COUNTS = [
    (1051, 6907, 13121),
    (2630, 8594, 12150),
    (7569, 14123, 5094),
    (5698, 14453, 6464),
    (4044, 11449, 9227),
    (4228, 9430, 11140),
    (3952, 6418, 12040),
    (5710, 9057, 10468),
    (5294, 5759, 7848),
]

_MONTH_LABELS = {
    "en": ["Dec/24", "Jan/25", "Feb/25", "Mar/25", "Apr/25", "May/25", "Jun/25", "Jul/25", "Aug/25"],
    "pt": ["Dez/24", "Jan/25", "Fev/25", "Mar/25", "Abr/25", "Mai/25", "Jun/25", "Jul/25", "Ago/25"],
}

# Published completion rates that do not follow the formula
COMPLETION_OVERRIDES = {
    "en": {},
    "pt": {"Fev/25": 83.3, "Jun/25": 50.0},
}

ENGAGEMENT_RATES = [38.6, 75, 90]


def monthly_rows(locale: str) -> list[dict]:
    labels = _MONTH_LABELS[locale]
    return [
        {"month": m, "onTime": on_time, "delayed": delayed, "incomplete": incomplete}
        for m, (on_time, delayed, incomplete) in zip(labels, _MONTHLY_COUNTS)
    ]


# ----------------------------
# Narrative copy
# ----------------------------
COPY = {
    "en": {
        "title": "PMZ Operational Performance Report - Manaus",
        "subtitle": "The Story of the Operational Turnaround: Before and After",
        "series_names": {
            "on_time": "On Time",
            "delayed": "Delayed/Incorrect",
            "incomplete": "Incomplete",
            "completion_rate": "Completion Rate (%)",
            "engagement": "Engagement Rate",
        },
        "engagement_labels": ["Baseline (Dec)", "Key Stores", "Benchmark Store 82"],
        "sections": {
            "summary": "Executive Summary",
            "numbers": "The Transformation in Numbers",
            "engagement_chart": "Engagement Rate Growth",
            "monthly": "Detailed Monthly Analysis",
            "completion_chart": "Evolution of Completion Rate",
            "quality_chart": "Delivery Quality Analysis",
            "breakdown": "Monthly Breakdown",
            "lineage": "Data Lineage - How Metrics Are Calculated",
            "callouts": "Highlights",
            "situation": "Initial Situation (December Baseline)",
            "actions": "Actions Taken",
            "plan": "Action Plan",
            "support": "Support Needed from PMZ",
        },
        "executive_summary": (
            "This report details the significant operational turnaround in Manaus, driven by focused "
            "strategic initiatives. We started from an engagement rate of just <b>38%</b> and a bloated, "
            "inactive driver base. Through focused actions, including the appointment of operational "
            "owners and a thorough data cleanup, we have successfully increased the engagement rate to "
            "over <b>75% in key stores</b>, with our benchmark store reaching <b>90%</b>."
        ),
        "completion_note": (
            "The chart below illustrates the monthly evolution of the completion rate (on-time + delayed "
            "deliveries), showing the recovery from the December baseline."
        ),
        "quality_note": (
            "The detailed breakdown shows each month's composition, highlighting that the main challenge "
            "lies in the high rate of delayed or incorrectly logged deliveries."
        ),
        "info_cards": [
            {"title": "Initial Engagement", "value": "38%", "color": "error"},
            {"title": "Driver Base Reduction", "value": ">1000 to <200", "color": "primary"},
            {"title": "Dedicated Focal Points", "value": "2", "color": "success"},
        ],
        "situation": [
            ("Low Engagement", "Only a 38% driver engagement rate across all stores."),
            ("Inactive Driver Base", "Over 1,000 drivers in the system, the vast majority being inactive."),
            ("Lack of Ownership", "No centralized ownership of delivery operations within PMZ."),
        ],
        "actions": [
            "Nominated 2 focal points to manage and oversee operations.",
            "Selected 5 key stores for focus and Store 82 as a benchmark.",
            "Removed inactive drivers (base reduced to <200).",
            "Onboarded and trained the focal points.",
            "Daily monitoring of store and driver performance.",
            "Created customized reports for management.",
            "Activated Geofencing to ensure task completion at the correct location.",
        ],
        "plan": [
            {
                "title": "KPI Monitoring",
                "description": "A daily report was created to monitor the geofence's impact and quantitatively prove the technology's value.",
                "completed": True,
                "in_progress": False,
            },
            {
                "title": "Communication & Training",
                "description": "Feedback sessions were held with drivers and cashiers to identify difficulties and reinforce benefits.",
                "completed": True,
                "in_progress": False,
            },
            {
                "title": "Process Audit",
                "description": "The focal points are auditing the process daily to institutionalize what worked during the peak performance period.",
                "completed": False,
                "in_progress": True,
            },
        ],
        "status_words": {"completed": "Completed", "in_progress": "In Progress", "pending": "Planned"},
        "support": [
            "Consistent daily oversight by the nominated focal points.",
            "Store-level accountability for hitting targets.",
            "Continued driver discipline and monitoring.",
        ],
        "footer": "Report generated on August 26, 2025.",
    },
    "pt": {
        "title": "Relatório de Desempenho Operacional PMZ - Manaus",
        "subtitle": "A História da Virada Operacional: Antes e Depois",
        "series_names": {
            "on_time": "No Prazo",
            "delayed": "Atrasado/Incorreto",
            "incomplete": "Incompleto",
            "completion_rate": "Taxa de Conclusão (%)",
            "engagement": "Taxa de Engajamento",
        },
        "engagement_labels": ["Linha de Base (Dez)", "Lojas-Chave", "Loja Referência 82"],
        "sections": {
            "summary": "Resumo Executivo",
            "numbers": "A Transformação em Números",
            "engagement_chart": "Crescimento da Taxa de Engajamento",
            "monthly": "Análise Mensal Detalhada",
            "completion_chart": "Evolução da Taxa de Conclusão",
            "quality_chart": "Análise da Qualidade das Entregas",
            "breakdown": "Detalhamento Mensal",
            "lineage": "Linhagem dos Dados - Como as Métricas São Calculadas",
            "callouts": "Destaques",
            "situation": "Situação Inicial (Linha de Base de Dezembro)",
            "actions": "Ações Realizadas",
            "plan": "Plano de Ação",
            "support": "Apoio Necessário da PMZ",
        },
        "executive_summary": (
            "Este relatório detalha a virada operacional significativa em Manaus, impulsionada por "
            "iniciativas estratégicas focadas. Partimos de uma taxa de engajamento de apenas <b>38%</b> e "
            "de uma base de motoristas inchada e inativa. Com ações focadas, incluindo a nomeação de "
            "responsáveis operacionais e uma limpeza completa dos dados, elevamos a taxa de engajamento "
            "para mais de <b>75% nas lojas-chave</b>, com a loja referência atingindo <b>90%</b>."
        ),
        "completion_note": (
            "O gráfico abaixo mostra a evolução mensal da taxa de conclusão (entregas no prazo + "
            "atrasadas), evidenciando a recuperação desde a linha de base de dezembro."
        ),
        "quality_note": (
            "O detalhamento mostra a composição de cada mês, destacando que o principal desafio está na "
            "alta taxa de entregas atrasadas ou registradas incorretamente."
        ),
        "info_cards": [
            {"title": "Engajamento Inicial", "value": "38%", "color": "error"},
            {"title": "Redução da Base de Motoristas", "value": ">1000 para <200", "color": "primary"},
            {"title": "Pontos Focais Dedicados", "value": "2", "color": "success"},
        ],
        "situation": [
            ("Baixo Engajamento", "Apenas 38% de engajamento dos motoristas em todas as lojas."),
            ("Base de Motoristas Inativa", "Mais de 1.000 motoristas no sistema, a grande maioria inativa."),
            ("Falta de Responsabilidade", "Nenhuma gestão centralizada das operações de entrega na PMZ."),
        ],
        "actions": [
            "Nomeação de 2 pontos focais para gerenciar e supervisionar as operações.",
            "Seleção de 5 lojas-chave e da Loja 82 como referência.",
            "Remoção de motoristas inativos (base reduzida para <200).",
            "Integração e treinamento dos pontos focais.",
            "Monitoramento diário do desempenho das lojas e dos motoristas.",
            "Criação de relatórios personalizados para a gestão.",
            "Ativação do Geofencing para garantir a conclusão das tarefas no local correto.",
        ],
        "plan": [
            {
                "title": "Monitoramento de KPIs",
                "description": "Um relatório diário foi criado para monitorar o impacto do geofence e comprovar quantitativamente o valor da tecnologia.",
                "completed": True,
                "in_progress": False,
            },
            {
                "title": "Comunicação e Treinamento",
                "description": "Sessões de feedback com motoristas e operadores de caixa para identificar dificuldades e reforçar os benefícios.",
                "completed": True,
                "in_progress": False,
            },
            {
                "title": "Auditoria do Processo",
                "description": "Os pontos focais auditam o processo diariamente para institucionalizar o que funcionou no período de melhor desempenho.",
                "completed": False,
                "in_progress": True,
            },
        ],
        "status_words": {"completed": "Concluído", "in_progress": "Em Andamento", "pending": "Planejado"},
        "support": [
            "Supervisão diária consistente pelos pontos focais nomeados.",
            "Responsabilização das lojas pelo cumprimento das metas.",
            "Disciplina e monitoramento contínuos dos motoristas.",
        ],
        "footer": "Relatório gerado em 26 de agosto de 2025.",
    },
}


@dataclass(frozen=True)
class ReportVariant:
    locale: str
    theme: str
    records: list[PeriodRecord]
    engagement_labels: list[str]
    engagement_rates: list[float]
    overrides: dict[str, float]
    palette: dict[str, str]
    copy: dict
    chart_options: dict = field(default_factory=lambda: copy.deepcopy(CHART_OPTIONS))
    label_max_width: int = LABEL_MAX_WIDTH
    completion_target: float = COMPLETION_TARGET


def available_locales() -> list[str]:
    return sorted(COPY)


def available_themes() -> list[str]:
    return sorted(PALETTES)


def get_variant(locale: str = DEFAULT_LOCALE, theme: str = DEFAULT_THEME) -> ReportVariant:
    """Fresh report variant for one locale/theme pair."""
    if locale not in COPY:
        raise InvalidInput(f"Unknown locale {locale!r}; expected one of {', '.join(available_locales())}")
    if theme not in PALETTES:
        raise InvalidInput(f"Unknown theme {theme!r}; expected one of {', '.join(available_themes())}")

    text = copy.deepcopy(COPY[locale])
    return ReportVariant(
        locale=locale,
        theme=theme,
        records=records_from_rows(monthly_rows(locale)),
        engagement_labels=list(text["engagement_labels"]),
        engagement_rates=list(ENGAGEMENT_RATES),
        overrides=dict(COMPLETION_OVERRIDES[locale]),
        palette=dict(PALETTES[theme]),
        copy=text,
    )
