"""Meal photo analysis using a multimodal model."""

import base64
from collections.abc import Sequence
from dataclasses import dataclass

from pydantic import TypeAdapter

from nutriai.domain.vision import MealAnalysis
from nutriai.services.generation import GenerativeClient, parse_json_response

ANALYSIS_PROMPT = (
    "Analise a(s) imagem(s) de refeição fornecida(s). Para cada imagem, "
    "identifique a refeição, forneça uma breve descrição dos alimentos "
    "visíveis, e faça uma estimativa das calorias totais e da distribuição de "
    "macronutrientes (proteínas, hidratos de carbono, gorduras) em gramas. "
    "Comunique em português de Portugal. Retorne uma lista de objetos JSON, um "
    "para cada imagem, com os campos mealName, description, calories e macros "
    "(protein, carbs, fat). Se houver apenas uma imagem, retorne uma lista com "
    "um único objeto."
)

_ANALYSES = TypeAdapter(list[MealAnalysis])


@dataclass
class MealAnalysisService:
    """Prepares meal photos for the model and validates its estimates."""

    client: GenerativeClient
    model: str

    async def analyze(self, images: Sequence[bytes]) -> list[MealAnalysis]:
        """Return one estimate per image, in the order the model returns them."""
        if not images:
            raise ValueError("At least one image is required")
        raw = await self.client.generate(
            model=self.model,
            prompt=ANALYSIS_PROMPT,
            image_data_urls=[_to_data_url(image) for image in images],
        )
        return _ANALYSES.validate_python(parse_json_response(raw))


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    if image_bytes[:6] in {b"GIF87a", b"GIF89a"}:
        return "image/gif"
    return "image/jpeg"
