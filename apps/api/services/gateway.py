"""Completion API gateway (Groq, OpenAI-compatible chat completions)."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Request
from openai import AsyncOpenAI, OpenAIError

from config import groq_api_key, settings
from services.errors import GatewayUnavailableError

logger = logging.getLogger(__name__)

NOT_CONFIGURED_REPLY = "Mock analysis result - Groq API key not configured"
UNAVAILABLE_REPLY = "Analysis temporarily unavailable - please try again later"
EMPTY_REPLY = "No response generated"


def get_completion_client(api_key: str) -> Optional[AsyncOpenAI]:
    """Get an async client for the Groq endpoint, or None without a key."""
    if not api_key:
        return None
    return AsyncOpenAI(api_key=api_key, base_url=settings.GROQ_BASE_URL, max_retries=0)


class CompletionGateway:
    """
    Sends one system instruction and one user prompt, returns the reply text.

    ``complete`` never raises for API problems: a missing key yields
    ``NOT_CONFIGURED_REPLY`` without touching the network, and an unreachable
    or failing API yields ``UNAVAILABLE_REPLY``.
    """

    def __init__(
        self,
        client: Optional[AsyncOpenAI],
        model: str = settings.GROQ_MODEL,
        temperature: float = settings.GROQ_TEMPERATURE,
        max_tokens: int = settings.GROQ_MAX_TOKENS,
    ):
        self._client = client
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    @classmethod
    def from_settings(cls) -> "CompletionGateway":
        return cls(get_completion_client(groq_api_key()))

    @property
    def configured(self) -> bool:
        return self._client is not None

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()

    async def complete(self, system_instruction: str, user_prompt: str) -> str:
        if self._client is None:
            return NOT_CONFIGURED_REPLY
        try:
            return await self._request(system_instruction, user_prompt)
        except GatewayUnavailableError as exc:
            logger.error("Groq API call failed: %s", exc)
            return UNAVAILABLE_REPLY

    async def _request(self, system_instruction: str, user_prompt: str) -> str:
        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_instruction},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except OpenAIError as exc:
            raise GatewayUnavailableError(str(exc)) from exc

        if not response.choices:
            return EMPTY_REPLY
        return response.choices[0].message.content or EMPTY_REPLY


def get_gateway(request: Request) -> CompletionGateway:
    """FastAPI dependency returning the gateway opened during startup."""
    gateway = getattr(request.app.state, "gateway", None)
    if gateway is None:
        gateway = CompletionGateway.from_settings()
        request.app.state.gateway = gateway
    return gateway
