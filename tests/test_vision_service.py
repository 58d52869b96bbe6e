"""Tests for meal image analysis."""

import asyncio
import json

import pytest

from nutriai.services.vision import MealAnalysisService, _to_data_url
from tests.conftest import FakeGenerativeClient

_ANALYSES = [
    {
        "mealName": "Bitoque",
        "description": "Bife com ovo estrelado e batatas fritas",
        "calories": 850,
        "macros": {"protein": 45, "carbs": 60, "fat": 42},
    },
    {
        "mealName": "Salada de atum",
        "description": "Alface, tomate, atum e grão",
        "calories": 420,
        "macros": {"protein": 30, "carbs": 25, "fat": 18},
    },
]


def test_analyze_returns_estimates_in_order() -> None:
    client = FakeGenerativeClient(
        responses=[f"```json\n{json.dumps(_ANALYSES)}\n```"]
    )
    service = MealAnalysisService(client=client, model="test-model")
    png = b"\x89PNG\r\n\x1a\n" + b"rest"

    result = asyncio.run(service.analyze([b"\xff\xd8\xffjpeg", png]))

    assert [analysis.meal_name for analysis in result] == [
        "Bitoque",
        "Salada de atum",
    ]
    assert result[0].macros.protein == 45
    urls = client.calls[0]["image_data_urls"]
    assert urls[0].startswith("data:image/jpeg;base64,")
    assert urls[1].startswith("data:image/png;base64,")
    assert client.calls[0]["schema"] is None


def test_analyze_does_not_check_result_count() -> None:
    client = FakeGenerativeClient(responses=[json.dumps(_ANALYSES[:1])])
    service = MealAnalysisService(client=client, model="test-model")

    result = asyncio.run(service.analyze([b"one", b"two", b"three"]))

    assert len(result) == 1


def test_analyze_requires_images() -> None:
    client = FakeGenerativeClient()
    service = MealAnalysisService(client=client, model="test-model")

    with pytest.raises(ValueError):
        asyncio.run(service.analyze([]))

    assert client.calls == []


def test_analyze_propagates_malformed_json() -> None:
    client = FakeGenerativeClient(responses=["Não consegui identificar."])
    service = MealAnalysisService(client=client, model="test-model")

    with pytest.raises(json.JSONDecodeError):
        asyncio.run(service.analyze([b"image"]))


def test_to_data_url_uses_png_header() -> None:
    data = b"\x89PNG\r\n\x1a\n" + b"rest"
    url = _to_data_url(data)

    assert url.startswith("data:image/png;base64,")


def test_to_data_url_detects_webp_and_gif() -> None:
    assert _to_data_url(b"RIFF\x00\x00\x00\x00WEBPVP8 ").startswith(
        "data:image/webp;base64,"
    )
    assert _to_data_url(b"GIF89a...").startswith("data:image/gif;base64,")


def test_to_data_url_defaults_to_jpeg() -> None:
    data = b"unknown"
    url = _to_data_url(data)

    assert url.startswith("data:image/jpeg;base64,")
