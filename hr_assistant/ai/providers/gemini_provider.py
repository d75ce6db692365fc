from __future__ import annotations

from google import genai
from google.genai import types


class GeminiProvider:
    def __init__(
        self,
        model: str,
        api_key: str,
        temperature: float = 0.2,
        timeout_s: float = 60.0,
    ):
        self._model = model
        self._temperature = temperature
        self._client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=int(timeout_s * 1000)),
        )

    async def generate_json(self, prompt: str) -> str:
        response = await self._client.aio.models.generate_content(
            model=self._model,
            contents=prompt,
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                temperature=self._temperature,
            ),
        )
        return response.text or ""
