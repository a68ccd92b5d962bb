"""
LiteLLM advisor provider.

Talks to a local Ollama server or any OpenAI-compatible runtime
(llama-server, LM Studio, ...) through LiteLLM. Availability is probed
with plain HTTP requests via httpx.
"""

from typing import Any

import httpx
import litellm

from dayplan.core.exceptions import AdvisorError
from dayplan.core.logger import logger
from dayplan.interfaces.advisor_provider import IAdvisorProvider
from dayplan.models.advisor import AdvisorConfig, AdvisorStatus, ChatMessage

PROBE_TIMEOUT_SECONDS = 3.0


class LiteLLMAdvisorProvider(IAdvisorProvider):
    """Advisor backed by LiteLLM with an explicit endpoint configuration."""

    def __init__(self, config: AdvisorConfig):
        """
        Initialize the provider.

        Args:
            config: Endpoint, model identifier and timeout.
                    Ollama models use the "ollama/" prefix; anything else is
                    treated as an OpenAI-compatible endpoint.
        """
        self._config = config

    @property
    def config(self) -> AdvisorConfig:
        return self._config

    @property
    def is_ollama(self) -> bool:
        return self._config.model.startswith("ollama/")

    def get_model_name(self) -> str:
        """Get human-readable model name."""
        return f"LiteLLM ({self._config.model} @ {self._config.endpoint})"

    async def send_chat_turn(self, messages: list[ChatMessage]) -> str:
        """Send one chat turn and return the trimmed reply text."""
        kwargs: dict[str, Any] = {
            "model": self._config.model,
            "messages": [message.model_dump() for message in messages],
            "api_base": self._config.endpoint,
            "temperature": self._config.temperature,
            "timeout": self._config.timeout_seconds,
            "stream": False,
        }
        if self._config.api_key:
            kwargs["api_key"] = self._config.api_key

        try:
            logger.debug(f"Calling advisor model: {self._config.model}")
            response = await litellm.acompletion(**kwargs)
        except Exception as e:
            raise AdvisorError(f"Advisor request failed: {e}") from e

        content = response.choices[0].message.content if response.choices else ""
        text = (content or "").strip()
        if not text:
            raise AdvisorError("Advisor returned an empty response")
        return text

    async def get_status(self) -> AdvisorStatus:
        """Probe the endpoint. Never raises."""
        if self.is_ollama:
            return await self._ollama_status()
        return await self._health_status()

    async def _ollama_status(self) -> AdvisorStatus:
        model_id = self._config.model.removeprefix("ollama/")
        url = f"{self._config.endpoint.rstrip('/')}/api/tags"
        try:
            async with httpx.AsyncClient(timeout=PROBE_TIMEOUT_SECONDS) as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            return self._unreachable("ollama", f"{type(e).__name__}: {e}")

        if response.status_code != 200:
            return self._unreachable("ollama", f"Ollama responded with {response.status_code}")

        try:
            models = response.json().get("models") or []
        except ValueError:
            models = []
        installed = any(
            isinstance(item, dict) and model_id in (item.get("name"), item.get("model"))
            for item in models
        )
        message = (
            "Using local Ollama model."
            if installed
            else f"Ollama reachable but model {model_id} is missing. Run: ollama pull {model_id}"
        )
        return AdvisorStatus(
            provider="ollama",
            reachable=True,
            model=self._config.model,
            endpoint=self._config.endpoint,
            model_installed=installed,
            message=message,
        )

    async def _health_status(self) -> AdvisorStatus:
        base = self._config.endpoint.rstrip("/").removesuffix("/v1")
        try:
            async with httpx.AsyncClient(timeout=PROBE_TIMEOUT_SECONDS) as client:
                response = await client.get(f"{base}/health")
        except httpx.HTTPError as e:
            return self._unreachable("openai-compatible", f"{type(e).__name__}: {e}")

        if response.status_code != 200:
            return self._unreachable(
                "openai-compatible", f"Runtime responded with {response.status_code}"
            )
        return AdvisorStatus(
            provider="openai-compatible",
            reachable=True,
            model=self._config.model,
            endpoint=self._config.endpoint,
            message="Local AI runtime is active.",
        )

    def _unreachable(self, provider: str, error: str) -> AdvisorStatus:
        logger.debug(f"Advisor probe failed: {error}")
        return AdvisorStatus(
            provider=provider,
            reachable=False,
            model=self._config.model,
            endpoint=self._config.endpoint,
            message="No local AI provider is currently available.",
            error=error,
        )
