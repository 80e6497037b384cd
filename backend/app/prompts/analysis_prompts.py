"""
Externalized prompts for the AI narrative and air-quality advisor.

Prompts are kept in Russian (the language of the audience in the East
Kazakhstan region) but variable names and documentation are in English for
code consistency.

Example:
    from app.prompts import build_tender_messages

    system, user = build_tender_messages(tender, now)
"""

import json
from datetime import datetime
from typing import Any, Optional

from analyzers.tender_risk_engine import Tender, format_amount

# =============================================================================
# TENDER NARRATIVE
# =============================================================================

TENDER_SYSTEM_PROMPT = """Ты - эксперт по анализу государственных закупок Казахстана. Твоя задача - оценить риски тендера и дать рекомендации.

КОНТЕКСТ:
- Текущая дата: {today}
- Регион: Восточно-Казахстанская область
- Климат: резко континентальный, зимы холодные (до -40°C)

ФАКТОРЫ РИСКА ДЛЯ АНАЛИЗА:
1. Сезонность: строительные работы в зимний период (ноябрь-март) имеют высокий риск срыва
2. Сумма контракта: чем больше сумма, тем выше риски
3. Сроки: нереалистичные сроки выполнения
4. Категория работ: строительство и ремонт дорог зимой особенно рискованны

ФОРМАТ ОТВЕТА:
- Кратко (3-5 предложений)
- Конкретные риски
- Практичные рекомендации
- Без лишних вступлений"""

TENDER_USER_PROMPT = """Проанализируй этот тендер:

Название: {title}
Категория: {category}
Сумма: {amount}
Организация: {organization}
Срок подачи заявок: до {deadline}
Период выполнения: {execution_start} - {execution_end}
Описание: {description}

Оцени риски и дай рекомендации."""


# =============================================================================
# AIR QUALITY ADVISOR
# =============================================================================

AIR_QUALITY_SYSTEM_PROMPT = """Ты - специалист по экологии, который информирует жителей Усть-Каменогорска о состоянии воздуха.

СТИЛЬ:
- Пиши информативно, но доступным языком
- Тон: деловой, но не сухой - как профессиональный консультант
- НЕ используй эмодзи
- НЕ используй обращения типа "Привет", "сосед", "друзья"
- Сразу переходи к сути

ТЕРМИНОЛОГИЯ:
- Вместо PM2.5 → "мелкодисперсная пыль"
- Вместо PM10 → "крупная пыль"
- Вместо NO2 → "диоксид азота (выхлопы транспорта)"
- Вместо SO2 → "диоксид серы (промышленные выбросы)"
- Вместо CO → "угарный газ"
- AQI можно использовать с пояснением "индекс качества воздуха"

СТРУКТУРА:
1. Общая оценка ситуации
2. Ситуация по районам (где безопасно, где нет)
3. Основные загрязнители сегодня
4. Рекомендации (прогулки, проветривание, маски, спорт)
5. Группы риска

Используй markdown: **жирный** для важного, ### для заголовков разделов."""

AIR_QUALITY_ANALYZE_QUESTION = """Расскажи простым языком как сейчас с воздухом в городе.
Можно ли гулять? Нужна ли маска? В каких районах лучше не находиться?
Дай короткий понятный ответ для обычного жителя."""


# =============================================================================
# BUILDERS
# =============================================================================


def _ru_date(moment: datetime) -> str:
    return moment.strftime("%d.%m.%Y")


def build_tender_messages(tender: Tender, now: datetime) -> tuple[str, str]:
    """Return (system, user) prompt texts for a tender narrative."""
    system = TENDER_SYSTEM_PROMPT.format(today=_ru_date(now))
    user = TENDER_USER_PROMPT.format(
        title=tender.title,
        category=tender.category_name or tender.category,
        amount=format_amount(tender.amount),
        organization=tender.organization,
        deadline=_ru_date(tender.deadline),
        execution_start=_ru_date(tender.execution_start),
        execution_end=_ru_date(tender.execution_end),
        description=tender.description,
    )
    return system, user


def build_air_quality_question(question: str, air_quality_context: Optional[Any]) -> str:
    """Embed the serialized station data (if any) ahead of the user's question."""
    if not air_quality_context:
        return question

    context_json = json.dumps(air_quality_context, ensure_ascii=False, indent=2, default=str)
    return f"Текущие данные о качестве воздуха:\n{context_json}\n\nВопрос пользователя: {question}"
