"""
Whisper speech-to-text adapter
OpenAI audio transcription endpoint over aiohttp
"""

import asyncio

import aiohttp

from ...core.exceptions import ExternalServiceError
from ...domain.ports.speech_port import ISpeechTranscriber


class WhisperTranscriber(ISpeechTranscriber):
    """Transcribes recorded speech with the OpenAI transcription API"""

    def __init__(
        self,
        api_key: str,
        model: str = "whisper-1",
        timeout: int = 60,
        base_url: str = "https://api.openai.com/v1",
        language: str = "en",
    ):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.base_url = base_url.rstrip("/")
        self.language = language

    async def transcribe(self, audio: bytes) -> str:
        """
        Transcribe audio

        Raises:
            ExternalServiceError: API call failed
        """
        form = aiohttp.FormData()
        form.add_field("file", audio, filename="speech.wav", content_type="audio/wav")
        form.add_field("model", self.model)
        form.add_field("language", self.language)

        headers = {"Authorization": f"Bearer {self.api_key}"}
        timeout = aiohttp.ClientTimeout(total=self.timeout)

        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(
                    f"{self.base_url}/audio/transcriptions",
                    headers=headers,
                    data=form,
                ) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        raise ExternalServiceError(
                            f"Transcription error: HTTP {response.status} - {error_text}",
                            service_name="openai_transcription",
                            status_code=response.status,
                        )
                    data = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ExternalServiceError(
                f"Transcription API unreachable: {e}", service_name="openai_transcription"
            ) from e

        return str(data.get("text", "")).strip()
