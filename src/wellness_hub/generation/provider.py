"""Chat-completion provider for plan generation."""

import logging

from openai import AsyncOpenAI, OpenAIError

from ..config import Settings
from ..errors import GenerationFailed, ProviderUnavailable
from .prompts import PromptPair

logger = logging.getLogger(__name__)

WORKOUT_MAX_TOKENS = 2048
NUTRITION_MAX_TOKENS = 3072


class PlanProvider:
    """Sends prompts to an OpenAI-compatible chat completion endpoint.

    The client is created once at startup and handed in; ``client=None``
    means no credential was configured and callers should fall back to the
    demo plans.
    """

    def __init__(self, client: AsyncOpenAI | None, model: str, temperature: float = 0.3):
        self.client = client
        self.model = model
        self.temperature = temperature

    @property
    def available(self) -> bool:
        return self.client is not None

    async def complete(self, prompt: PromptPair, max_tokens: int) -> str:
        """Run one JSON-mode completion and return the reply text.

        Raises:
            ProviderUnavailable: no client configured
            GenerationFailed: the request errored or the reply was empty
        """
        if self.client is None:
            raise ProviderUnavailable()

        try:
            completion = await self.client.chat.completions.create(
                messages=prompt.to_messages(),
                model=self.model,
                temperature=self.temperature,
                max_tokens=max_tokens,
                response_format={"type": "json_object"},
                stream=False,
            )
        except OpenAIError as e:
            logger.exception("Generation request failed")
            raise GenerationFailed(f"Failed to generate plan: {e}") from e

        content = completion.choices[0].message.content if completion.choices else None
        if not content or not content.strip():
            logger.error("Generation provider returned an empty reply")
            raise GenerationFailed("No response from the generation provider")

        return content


def create_provider(settings: Settings) -> PlanProvider:
    """Build the process-wide provider from settings."""
    client = None
    if settings.demo_mode:
        logger.warning("No provider API key configured; running in demo mode")
    else:
        client = AsyncOpenAI(api_key=settings.groq_api_key, base_url=settings.groq_base_url)
        logger.info("Generation provider configured (model %s)", settings.model)

    return PlanProvider(client, model=settings.model, temperature=settings.temperature)
