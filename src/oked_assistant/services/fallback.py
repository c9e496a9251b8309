"""Offline answers for when no provider is configured.

The user text is lower-cased and matched against keyword sets in a fixed
priority order; the first set with any keyword contained in the text wins.
No network, no randomness.
"""

import json
from dataclasses import dataclass, field
from typing import Any

from oked_assistant.dto import FallbackResult

FALLBACK_WARNINGS = (
    "Система работает без подключения к AI",
    "Рекомендуется настроить ANTHROPIC_API_KEY для полной функциональности",
)


@dataclass(frozen=True)
class FallbackRule:
    """Canned answer selected by keyword.

    Attributes:
        keywords: Lower-case substrings, any of which selects the rule
        template: Response text; ``{query}`` is replaced with the user text
        codes: OKED codes returned with the answer
        suggestions: Follow-up queries
    """

    keywords: tuple[str, ...]
    template: str
    codes: tuple[dict[str, str], ...] = ()
    suggestions: tuple[str, ...] = ()

    def matches(self, text: str) -> bool:
        return any(keyword in text for keyword in self.keywords)


# Order matters: earlier rules win when several match.
FALLBACK_RULES = (
    FallbackRule(
        keywords=("ресторан", "кафе", "питание", "restaurant"),
        template=(
            'По запросу "{query}" найдены коды, связанные с общественным питанием. '
            'Рестораны и кафе классифицируются в секции I "Предоставление услуг по проживанию и питанию".'
        ),
        codes=(
            {
                "code": "56100",
                "name": "Деятельность ресторанов и кафе",
                "level": "Подкласс",
                "explanation": "Основная деятельность ресторанов",
            },
        ),
        suggestions=(
            "Различия между ресторанами и кафе",
            "Классификация предприятий общественного питания",
        ),
    ),
    FallbackRule(
        keywords=("магазин", "торговля", "продажа"),
        template=(
            'По запросу "{query}" найдены коды розничной торговли. '
            'Торговые предприятия классифицируются в секции G "Оптовая и розничная торговля".'
        ),
        codes=(
            {
                "code": "47111",
                "name": "Розничная торговля в неспециализированных магазинах",
                "level": "Подкласс",
                "explanation": "Основная розничная торговля",
            },
        ),
        suggestions=(
            "Различия между оптовой и розничной торговлей",
            "Классификация торговых точек",
        ),
    ),
    FallbackRule(
        keywords=("программирование", "софт", "it"),
        template=(
            'По запросу "{query}" найдены коды IT-деятельности. '
            'Разработка программного обеспечения классифицируется в секции J "Информация и связь".'
        ),
        codes=(
            {
                "code": "62010",
                "name": "Разработка программного обеспечения",
                "level": "Подкласс",
                "explanation": "Основная IT-деятельность",
            },
        ),
        suggestions=("IT-консалтинг", "Веб-разработка", "Системная интеграция"),
    ),
)

OFFLINE_RULE = FallbackRule(
    keywords=(),
    template=(
        'По запросу "{query}" система работает в режиме офлайн. '
        "Для получения точной информации по классификации ОКЭД рекомендуется "
        "настроить подключение к Anthropic API."
    ),
    suggestions=(
        "Попробуйте более конкретные термины",
        "Обратитесь к специалисту по ОКЭД",
        "Настройте API ключ для расширенной функциональности",
    ),
)


def match_rule(user_query: str) -> FallbackRule:
    """Return the first rule whose keywords occur in the query."""
    text = user_query.lower()
    for rule in FALLBACK_RULES:
        if rule.matches(text):
            return rule
    return OFFLINE_RULE


def generate_fallback(user_query: str) -> dict[str, Any]:
    """Build the offline response payload for a user query.

    Args:
        user_query: Raw text of the first user message

    Returns:
        FallbackResult payload whose ``content`` is a JSON-encoded answer
    """
    rule = match_rule(user_query)
    answer = {
        "response": rule.template.format(query=user_query),
        "codes": [dict(code) for code in rule.codes],
        "suggestions": list(rule.suggestions),
        "confidence": "low",
        "warnings": list(FALLBACK_WARNINGS),
        "fallback": True,
    }
    content = json.dumps(answer, ensure_ascii=False, separators=(",", ":"))
    return FallbackResult(content=content).to_payload()
