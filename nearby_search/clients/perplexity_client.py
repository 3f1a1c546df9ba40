"""
Perplexity chat completions HTTP client.

Wraps a single endpoint:
- POST /chat/completions
"""

import httpx
from loguru import logger

BASE_URL = "https://api.perplexity.ai"


class PerplexityClient:
    """Async client for the Perplexity chat completions API."""

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str = BASE_URL,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("PERPLEXITY_API_KEY is not set.")
        self.model = model
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={
                "Accept": "application/json",
                "Content-Type": "application/json",
                "Authorization": f"Bearer {api_key}",
            },
            timeout=timeout,
            transport=transport,
        )

    async def chat_completion(self, messages: list[dict]) -> list[str]:
        """Send a chat-style message list and return one text per choice."""
        body = {
            "model": self.model,
            "messages": messages,
        }

        logger.debug(f"Chat completion: model={self.model}, messages={len(messages)}")
        response = await self._client.post("/chat/completions", json=body)
        response.raise_for_status()
        choices = response.json().get("choices") or []
        answers = [choice["message"]["content"] for choice in choices]
        if not all(isinstance(answer, str) for answer in answers):
            raise ValueError("Completion choice without text content.")
        return answers

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
