import logging
from typing import Dict, List, Optional

import openai
from openai import AsyncOpenAI

from landing_builder.core.config import get_settings
from landing_builder.core.exceptions import AIGenerationError, ConfigurationError

logger = logging.getLogger(__name__)


class AIClient:
    """
    Async wrapper around an OpenAI-compatible endpoint.

    Exposes the two calls the generation service needs (chat completion and
    image generation). SDK errors are re-raised as AIGenerationError so callers
    only deal with one exception type.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        text_model: Optional[str] = None,
        image_model: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        settings = get_settings()
        self.api_key = api_key or settings.AI_API_KEY
        if not self.api_key:
            raise ConfigurationError("AI API key not configured")

        self.text_model = text_model or settings.AI_TEXT_MODEL
        self.image_model = image_model or settings.AI_IMAGE_MODEL
        self._client = AsyncOpenAI(
            api_key=self.api_key,
            base_url=base_url or settings.AI_BASE_URL,
            timeout=timeout or settings.HTTP_TIMEOUT,
            max_retries=0,
        )

    async def complete(
        self,
        messages: List[Dict[str, str]],
        temperature: float = 0.7,
        max_tokens: int = 2000,
    ) -> str:
        """Single chat completion; returns the first choice's text."""
        logger.debug(f"Chat completion with {self.text_model}, {len(messages)} messages")
        try:
            response = await self._client.chat.completions.create(
                model=self.text_model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except openai.OpenAIError as e:
            logger.error(f"AI completion failed: {e}")
            raise AIGenerationError(f"AI API error: {e}")

        if not response.choices:
            raise AIGenerationError("AI API returned no choices")
        return response.choices[0].message.content or ""

    async def generate_image(self, prompt: str, size: str = "1024x1024", quality: str = "standard") -> str:
        """Returns the URL of the first generated image."""
        logger.debug(f"Image generation with {self.image_model}")
        try:
            response = await self._client.images.generate(
                model=self.image_model,
                prompt=prompt,
                n=1,
                size=size,
                quality=quality,
            )
        except openai.OpenAIError as e:
            logger.error(f"AI image generation failed: {e}")
            raise AIGenerationError(f"AI Image API error: {e}")

        if not response.data or not response.data[0].url:
            raise AIGenerationError("AI Image API returned no image URL")
        return response.data[0].url
