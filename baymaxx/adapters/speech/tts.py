"""
OpenAI text-to-speech adapter
Spoken replies for voice turns
"""

import asyncio

import aiohttp

from ...core.exceptions import ExternalServiceError
from ...domain.ports.speech_port import ISpeechSynthesizer


class OpenAISpeechSynthesizer(ISpeechSynthesizer):
    """Synthesizes a reply with the OpenAI speech endpoint (mp3)"""

    def __init__(
        self,
        api_key: str,
        model: str = "tts-1",
        voice: str = "alloy",
        timeout: int = 60,
        base_url: str = "https://api.openai.com/v1",
    ):
        self.api_key = api_key
        self.model = model
        self.voice = voice
        self.timeout = timeout
        self.base_url = base_url.rstrip("/")

    async def synthesize(self, text: str) -> bytes:
        """
        Synthesize speech

        Raises:
            ExternalServiceError: API call failed or returned no audio
        """
        if not text or not text.strip():
            raise ExternalServiceError("No text to synthesize", service_name="openai_speech")

        request_body = {
            "model": self.model,
            "voice": self.voice,
            "input": text,
            "response_format": "mp3",
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        timeout = aiohttp.ClientTimeout(total=self.timeout)

        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(
                    f"{self.base_url}/audio/speech",
                    headers=headers,
                    json=request_body,
                ) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        raise ExternalServiceError(
                            f"Speech API error: HTTP {response.status} - {error_text}",
                            service_name="openai_speech",
                            status_code=response.status,
                        )
                    audio = await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ExternalServiceError(
                f"Speech API unreachable: {e}", service_name="openai_speech"
            ) from e

        if not audio:
            raise ExternalServiceError("Speech API returned no audio", service_name="openai_speech")
        return audio
