"""
Speech ports
Speech-to-text and text-to-speech collaborators
"""

from abc import ABC, abstractmethod


class ISpeechTranscriber(ABC):
    """Speech-to-text collaborator"""

    @abstractmethod
    async def transcribe(self, audio: bytes) -> str:
        """
        Transcribe recorded speech

        Args:
            audio: raw audio bytes

        Returns:
            str: transcript (may be empty)
        """


class ISpeechSynthesizer(ABC):
    """Text-to-speech collaborator"""

    @abstractmethod
    async def synthesize(self, text: str) -> bytes:
        """
        Speak a reply

        Args:
            text: reply text

        Returns:
            bytes: encoded audio (mp3)
        """
