"""Daily and weekly nutrition plan generation."""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from nutriai.domain.plans import WEEKDAYS, DayOfWeek, NutritionPlan, WeeklyPlan
from nutriai.domain.profile import UserData
from nutriai.localization import (
    ACTIVITY_LABELS,
    DIETARY_LABELS,
    GENDER_LABELS,
    GOAL_PHRASES,
)
from nutriai.services.generation import GenerativeClient, parse_json_response

logger = logging.getLogger(__name__)

_MEAL_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "description": {"type": "string"},
        "calories": {"type": "number"},
        "protein": {"type": "number"},
        "carbs": {"type": "number"},
        "fat": {"type": "number"},
    },
    "required": ["name", "description", "calories", "protein", "carbs", "fat"],
    "additionalProperties": False,
}

NUTRITION_PLAN_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "totalCalories": {"type": "number"},
        "macros": {
            "type": "object",
            "properties": {
                "protein": {"type": "number"},
                "carbs": {"type": "number"},
                "fat": {"type": "number"},
            },
            "required": ["protein", "carbs", "fat"],
            "additionalProperties": False,
        },
        "meals": {
            "type": "object",
            "properties": {
                "breakfast": _MEAL_SCHEMA,
                "lunch": _MEAL_SCHEMA,
                "dinner": _MEAL_SCHEMA,
                "snacks": _MEAL_SCHEMA,
            },
            "required": ["breakfast", "lunch", "dinner", "snacks"],
            "additionalProperties": False,
        },
    },
    "required": ["totalCalories", "macros", "meals"],
    "additionalProperties": False,
}

FIRST_DAY_CONTEXT = (
    "Este é o primeiro dia do plano semanal. Cria um plano inicial variado."
)

DayCallback = Callable[[DayOfWeek], None]


def build_plan_prompt(user_data: UserData, weekly_context: str | None = None) -> str:
    """Render the daily plan prompt for a user's biometrics."""
    preference = DIETARY_LABELS[user_data.dietary_preference]
    base = (
        "Crie um plano nutricional detalhado para um dia, em português de "
        "Portugal, para uma pessoa com as seguintes características:\n"
        f"- Idade: {user_data.age}\n"
        f"- Sexo: {GENDER_LABELS[user_data.gender]}\n"
        f"- Peso: {user_data.weight:g} kg\n"
        f"- Altura: {user_data.height:g} cm\n"
        f"- Nível de Atividade: {ACTIVITY_LABELS[user_data.activity_level]}\n"
        f"- Objetivo: {GOAL_PHRASES[user_data.goal]}\n"
        f"- Preferência Alimentar: {preference}\n\n"
        "O plano deve incluir o total de calorias e a distribuição de "
        "macronutrientes (proteínas, hidratos de carbono, gorduras).\n"
        "Deve detalhar 4 refeições: pequeno-almoço, almoço, jantar e snacks.\n"
        "Para cada refeição, forneça o nome do prato, uma breve descrição, e a "
        "estimativa de calorias, proteínas, hidratos de carbono e gorduras."
    )
    closing = (
        "Responda apenas com o objeto JSON formatado de acordo com o schema "
        "fornecido."
    )
    if weekly_context:
        return f"{base}\n\nContexto semanal: {weekly_context}\n\n{closing}"
    return f"{base}\n\n{closing}"


def previous_day_context(plan: NutritionPlan) -> str:
    """Summarize a day's meals so the next day avoids repeating them."""
    names = ", ".join(plan.meal_names())
    return (
        f"As refeições do dia anterior foram: {names}. Para o dia seguinte, "
        "cria um plano com refeições diferentes para garantir variedade."
    )


@dataclass
class PlanService:
    """Generates nutrition plans via the generative client."""

    client: GenerativeClient
    model: str

    async def generate_plan(
        self, user_data: UserData, weekly_context: str | None = None
    ) -> NutritionPlan:
        """Generate a single daily plan."""
        raw = await self.client.generate(
            model=self.model,
            prompt=build_plan_prompt(user_data, weekly_context),
            schema=NUTRITION_PLAN_SCHEMA,
            schema_name="nutrition_plan",
        )
        return NutritionPlan.model_validate(parse_json_response(raw))

    async def generate_weekly_plan(
        self, user_data: UserData, on_day: DayCallback | None = None
    ) -> WeeklyPlan:
        """Generate Monday to Sunday sequentially, threading the previous day.

        Any failing day propagates and no partial week is returned.
        """
        days: dict[DayOfWeek, NutritionPlan] = {}
        context = FIRST_DAY_CONTEXT
        for day in WEEKDAYS:
            if on_day is not None:
                on_day(day)
            logger.info("Generating weekly plan day", extra={"day": day})
            plan = await self.generate_plan(user_data, context)
            days[day] = plan
            context = previous_day_context(plan)
        return WeeklyPlan(**days)
