from __future__ import annotations

import logging
from typing import Any

import httpx

from betledger.config import settings

logger = logging.getLogger(__name__)


class LLMUnavailableError(RuntimeError):
    pass


class LLMClient:
    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.api_url = settings.llm_api_url
        self.api_key = settings.llm_api_key
        self.model = settings.llm_model
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def complete(self, prompt: str, max_tokens: int | None = None) -> str:
        if not self.api_key:
            raise LLMUnavailableError("LLM_API_KEY is not configured")

        body: dict[str, Any] = {
            "model": self.model,
            "max_tokens": max_tokens or settings.llm_max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }
        headers = {
            "x-api-key": self.api_key,
            "anthropic-version": settings.llm_api_version,
            "content-type": "application/json",
        }
        async with httpx.AsyncClient(timeout=settings.http_timeout_seconds, transport=self._transport) as client:
            response = await client.post(self.api_url, json=body, headers=headers)
            response.raise_for_status()
            payload = response.json()

        for block in payload.get("content") or []:
            if block.get("type", "text") == "text" and block.get("text"):
                return block["text"]
        logger.warning("LLM response carried no text content: model=%s", self.model)
        return ""
