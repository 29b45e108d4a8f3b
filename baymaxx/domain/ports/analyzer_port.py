"""
Modality analyzer port
One analyzer per input channel, normalized to EmotionSample
"""

from abc import ABC, abstractmethod
from typing import Any

from ..models.emotion import EmotionSample, Modality


class IModalityAnalyzer(ABC):
    """
    Emotion analyzer for a single modality

    `analyze` must not raise: on any internal failure it returns
    `EmotionSample.unknown(self.modality)`.
    """

    @property
    @abstractmethod
    def modality(self) -> Modality:
        """Channel this analyzer handles"""

    @abstractmethod
    async def analyze(self, raw_input: Any) -> EmotionSample:
        """
        Analyze one input slice

        Args:
            raw_input: text for TEXT, bytes for VOICE / FACIAL

        Returns:
            EmotionSample: normalized judgment (UNKNOWN/0 on failure)
        """
