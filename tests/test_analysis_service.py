"""Tests for meal analysis service."""

import asyncio

from energy_balance.services.analysis import MealAnalysisService, _to_data_url
from tests.conftest import FakeMealAnalyzerClient


def _service(client: FakeMealAnalyzerClient) -> MealAnalysisService:
    return MealAnalysisService(
        client=client,
        model="gpt-5.2",
        reasoning_effort="high",
        store=False,
    )


def test_analyze_text_returns_first_estimate() -> None:
    client = FakeMealAnalyzerClient()

    estimate = asyncio.run(_service(client).analyze_text("  oatmeal with banana "))

    assert estimate is not None
    assert estimate.name == "Oatmeal with banana"
    assert estimate.calories == 350
    assert client.prompts[0].endswith("Meal: oatmeal with banana")
    assert client.image_urls == [None]


def test_analyze_image_sends_data_url() -> None:
    client = FakeMealAnalyzerClient()

    estimate = asyncio.run(_service(client).analyze_image(b"\xff\xd8\xffjpeg"))

    assert estimate is not None
    assert client.image_urls[0].startswith("data:image/jpeg;base64,")


def test_analyze_returns_none_for_empty_items() -> None:
    client = FakeMealAnalyzerClient(payload={"items": []})

    assert asyncio.run(_service(client).analyze_text("nothing")) is None


def test_analyze_returns_none_for_invalid_payload() -> None:
    client = FakeMealAnalyzerClient(
        payload={"items": [{"name": "Soup", "calories": -5}]}
    )

    assert asyncio.run(_service(client).analyze_text("soup")) is None


def test_to_data_url_uses_png_header() -> None:
    data = b"\x89PNG\r\n\x1a\n" + b"rest"
    url = _to_data_url(data)

    assert url.startswith("data:image/png;base64,")


def test_to_data_url_defaults_to_jpeg() -> None:
    url = _to_data_url(b"unknown")

    assert url.startswith("data:image/jpeg;base64,")
