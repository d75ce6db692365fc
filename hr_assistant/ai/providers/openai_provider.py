from __future__ import annotations

from typing import Optional

from openai import AsyncOpenAI


class OpenAIProvider:
    def __init__(
        self,
        model: str,
        api_key: str,
        base_url: Optional[str] = None,
        timeout_s: float = 30.0,
        max_retries: int = 0,
        temperature: float = 0.2,
    ):
        self._model = model
        self._temperature = temperature
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout_s,
            max_retries=max_retries,
        )

    async def generate_json(self, prompt: str) -> str:
        response = await self._client.chat.completions.create(
            model=self._model,
            messages=[{"role": "user", "content": prompt}],
            temperature=self._temperature,
            response_format={"type": "json_object"},
        )
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""
