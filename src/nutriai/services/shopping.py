"""Shopping list derivation from a weekly plan."""

import json
from dataclasses import dataclass

from pydantic import TypeAdapter

from nutriai.domain.plans import WeeklyPlan
from nutriai.domain.shopping import ShoppingListItem
from nutriai.services.generation import GenerativeClient, parse_json_response

CATEGORIES = (
    "Frutas e Legumes",
    "Carne e Peixe",
    "Laticínios e Ovos",
    "Padaria e Cereais",
    "Despensa (ex: enlatados, azeite, especiarias)",
    "Outros",
)

_ITEMS = TypeAdapter(list[ShoppingListItem])


def summarize_weekly_plan(weekly_plan: WeeklyPlan) -> dict[str, dict[str, str]]:
    """Reduce a weekly plan to meal descriptions per day."""
    return {
        day: {key: meal.description for key, meal in plan.meals.items()}
        for day, plan in weekly_plan.days()
    }


def build_shopping_prompt(weekly_plan: WeeklyPlan) -> str:
    summary = json.dumps(summarize_weekly_plan(weekly_plan), ensure_ascii=False)
    return (
        "Com base no seguinte resumo de um plano nutricional semanal, crie uma "
        "lista de compras agregada e organizada por categorias. Some as "
        "quantidades de ingredientes idênticos necessários para toda a semana. "
        "Comunique em português de Portugal.\n\n"
        f"Plano Semanal (resumo):\n{summary}\n\n"
        f"Categorias sugeridas: {', '.join(CATEGORIES)}.\n"
        "Para cada item, forneça o nome (name), a quantidade total para a "
        "semana com unidade (quantity), a categoria (category) e o estado "
        "'completed' como 'false'.\n"
        "Responda apenas com o array de objetos JSON."
    )


@dataclass
class ShoppingListService:
    """Delegates ingredient aggregation to the generative client."""

    client: GenerativeClient
    model: str

    async def generate(self, weekly_plan: WeeklyPlan) -> list[ShoppingListItem]:
        """Return a categorized shopping list for the whole week."""
        raw = await self.client.generate(
            model=self.model, prompt=build_shopping_prompt(weekly_plan)
        )
        return _ITEMS.validate_python(parse_json_response(raw))
