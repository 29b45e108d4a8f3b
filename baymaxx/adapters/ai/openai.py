"""
OpenAI AI adapter
Chat completions over aiohttp
"""

import asyncio

import aiohttp

from ...core.exceptions import ExternalServiceError
from ...domain.ports.ai_port import IAIProvider


class OpenAIAdapter(IAIProvider):
    """
    OpenAI AI adapter

    Generates replies with the chat completions API. Raises
    ExternalServiceError on transport or API errors; an empty completion
    is returned as "" so the caller can substitute its fallback.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4",
        timeout: int = 60,
        base_url: str = "https://api.openai.com/v1",
    ):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.base_url = base_url.rstrip("/")

    async def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """
        Generate a reply

        Args:
            prompt: composed user prompt
            system_prompt: optional system instruction
            max_tokens: optional token cap

        Returns:
            str: completion text ("" when the API returned no content)

        Raises:
            ExternalServiceError: API call failed
        """
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        request_body = {
            "model": self.model,
            "messages": messages,
        }

        if max_tokens:
            request_body["max_tokens"] = max_tokens

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        timeout = aiohttp.ClientTimeout(total=self.timeout)

        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(
                    f"{self.base_url}/chat/completions",
                    headers=headers,
                    json=request_body,
                ) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        raise ExternalServiceError(
                            f"OpenAI API error: HTTP {response.status} - {error_text}",
                            service_name="openai",
                            status_code=response.status,
                        )

                    response_data = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ExternalServiceError(f"OpenAI API unreachable: {e}", service_name="openai") from e

        return extract_completion_text(response_data)

    async def health_check(self) -> bool:
        try:
            response = await self.generate(
                "Hello",
                system_prompt="Reply with 'OK' only.",
                max_tokens=10,
            )
            return len(response) > 0
        except Exception:
            return False

    @property
    def model_name(self) -> str:
        return self.model


def extract_completion_text(response_data: dict) -> str:
    """First choice's message content, "" when missing or malformed"""
    choices = response_data.get("choices") if isinstance(response_data, dict) else None
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return ""

    message = choices[0].get("message")
    if not isinstance(message, dict):
        return ""
    content = message.get("content")
    return content if isinstance(content, str) else ""
