"""User-facing strings (Portuguese, Portugal)."""

from nutriai.domain.plans import DayOfWeek
from nutriai.domain.profile import ActivityLevel, DietaryPreference, Gender, Goal

DAY_LABELS: dict[DayOfWeek, str] = {
    "monday": "Segunda-feira",
    "tuesday": "Terça-feira",
    "wednesday": "Quarta-feira",
    "thursday": "Quinta-feira",
    "friday": "Sexta-feira",
    "saturday": "Sábado",
    "sunday": "Domingo",
}

GENDER_LABELS: dict[Gender, str] = {"male": "Masculino", "female": "Feminino"}

# Phrases used inside generation prompts ("Objetivo: perder peso").
GOAL_PHRASES: dict[Goal, str] = {
    "lose_weight": "perder peso",
    "maintain_weight": "manter o peso",
    "gain_muscle": "ganhar massa muscular",
}

# Noun forms used in the assistant's system instruction.
GOAL_NOUNS: dict[Goal, str] = {
    "lose_weight": "perda de peso",
    "maintain_weight": "manutenção de peso",
    "gain_muscle": "ganho de massa muscular",
}

ACTIVITY_LABELS: dict[ActivityLevel, str] = {
    "sedentary": "Sedentário (pouco ou nenhum exercício)",
    "light": "Levemente Ativo (exercício leve 1-3 dias/semana)",
    "moderate": "Moderadamente Ativo (exercício moderado 3-5 dias/semana)",
    "active": "Muito Ativo (exercício intenso 6-7 dias/semana)",
    "very_active": "Extremamente Ativo (trabalho físico + exercício intenso)",
}

DIETARY_LABELS: dict[DietaryPreference, str] = {
    "none": "Nenhuma",
    "vegetarian": "Vegetariano",
    "vegan": "Vegan",
    "gluten_free": "Sem Glúten",
}

LOADING_DAILY_PLAN = "A gerar o seu plano diário..."
LOADING_SHOPPING_LIST = "A criar a sua lista de compras..."
LOADING_ANALYSIS = "A analisar as suas refeições..."


def loading_weekly_day(day: DayOfWeek) -> str:
    return f"A gerar o plano para {DAY_LABELS[day]}..."


ACTION_DAILY_PLAN = "gerar o plano"
ACTION_WEEKLY_PLAN = "gerar o plano semanal"
ACTION_SHOPPING_LIST = "gerar a lista de compras"
ACTION_ANALYSIS = "analisar a imagem"
ACTION_LOGIN = "fazer login"
ACTION_SIGNUP = "criar a conta"
ACTION_LOAD_PROFILE = "carregar o perfil"
ACTION_SAVE_PROFILE = "guardar os dados"
ACTION_LOGOUT = "terminar a sessão"

INVALID_API_KEY = (
    "A sua chave de API parece ser inválida. Por favor, verifique o seu "
    "ficheiro .env e certifique-se de que a OPENAI_API_KEY está correta."
)
INVALID_CREDENTIALS = "Email ou password inválidos."
NOT_AUTHENTICATED = "Sessão inválida ou expirada. Por favor, entre novamente."
REQUEST_IN_PROGRESS = "Já existe um pedido em curso. Por favor, aguarde."
NO_WEEKLY_PLAN = "Nenhum plano semanal encontrado."
NO_PLAN_HISTORY_ITEM = "Plano não encontrado no histórico."
NO_IMAGES = "Por favor, selecione pelo menos uma imagem."
CHAT_ERROR = "Desculpe, ocorreu um erro. Por favor, tente novamente."
CHAT_GREETING = "Olá!"


def generic_error(action: str, detail: str | None = None) -> str:
    """Return the generic failure message for an action."""
    if detail:
        return f"Ocorreu um erro ao {action}: {detail}"
    return f"Ocorreu um erro ao {action}. Por favor, tente novamente."
