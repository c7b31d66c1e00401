import httpx
import openai
import pytest
from types import SimpleNamespace
from unittest.mock import AsyncMock

from landing_builder.core.exceptions import AIGenerationError, ConfigurationError
from landing_builder.services.ai.client import AIClient


def test_missing_key_raises(mocker, settings):
    mocker.patch("landing_builder.services.ai.client.get_settings", return_value=settings)
    with pytest.raises(ConfigurationError):
        AIClient()


@pytest.mark.asyncio
async def test_complete_returns_first_choice():
    client = AIClient(api_key="sk-test", text_model="gpt-4")
    response = SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content="Hello"))])
    client._client.chat.completions.create = AsyncMock(return_value=response)

    text = await client.complete([{"role": "user", "content": "hi"}], temperature=0.3, max_tokens=50)

    assert text == "Hello"
    _, kwargs = client._client.chat.completions.create.call_args
    assert kwargs["model"] == "gpt-4"
    assert kwargs["temperature"] == 0.3
    assert kwargs["max_tokens"] == 50


@pytest.mark.asyncio
async def test_sdk_errors_become_generation_errors():
    client = AIClient(api_key="sk-test")
    client._client.chat.completions.create = AsyncMock(
        side_effect=openai.APIConnectionError(request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions"))
    )

    with pytest.raises(AIGenerationError):
        await client.complete([{"role": "user", "content": "hi"}])


@pytest.mark.asyncio
async def test_generate_image_returns_url():
    client = AIClient(api_key="sk-test", image_model="dall-e-3")
    client._client.images.generate = AsyncMock(
        return_value=SimpleNamespace(data=[SimpleNamespace(url="https://img.example.com/1.png")])
    )

    assert await client.generate_image("a red widget") == "https://img.example.com/1.png"
