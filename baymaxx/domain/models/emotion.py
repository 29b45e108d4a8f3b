"""
Emotion models
Per-modality samples and the fused judgment of one turn
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Modality(Enum):
    """Input channel of a turn"""

    TEXT = "Text"
    VOICE = "Voice"
    FACIAL = "Facial"


class EmotionLabel(Enum):
    """
    Emotion labels

    UNKNOWN marks an analyzer failure and only wins fusion when every
    sample is UNKNOWN.
    """

    HAPPY = "Happy"
    SAD = "Sad"
    ANGRY = "Angry"
    FEARFUL = "Fearful"
    SURPRISED = "Surprised"
    DISGUSTED = "Disgusted"
    NEUTRAL = "Neutral"
    STRESSED = "Stressed"
    ANXIOUS = "Anxious"
    DEPRESSED = "Depressed"
    EXCITED = "Excited"
    CALM = "Calm"  # mild positive text sentiment
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: Any) -> "EmotionLabel":
        """Map a detector's label string onto the closed set (UNKNOWN if unmapped)"""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str) or not value.strip():
            return cls.UNKNOWN

        key = value.strip().lower()
        for label in cls:
            if label.value.lower() == key:
                return label
        return _LABEL_ALIASES.get(key, cls.UNKNOWN)


_LABEL_ALIASES = {
    "happiness": EmotionLabel.HAPPY,
    "joy": EmotionLabel.HAPPY,
    "sadness": EmotionLabel.SAD,
    "anger": EmotionLabel.ANGRY,
    "fear": EmotionLabel.FEARFUL,
    "surprise": EmotionLabel.SURPRISED,
    "disgust": EmotionLabel.DISGUSTED,
    "stress": EmotionLabel.STRESSED,
    "anxiety": EmotionLabel.ANXIOUS,
    "depression": EmotionLabel.DEPRESSED,
    "excitement": EmotionLabel.EXCITED,
}


def clamp_confidence(value: Any) -> float:
    """Clamp to [0, 1]; non-numeric and NaN become 0"""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if number != number:
        return 0.0
    return min(max(number, 0.0), 1.0)


@dataclass(frozen=True)
class EmotionSample:
    """One analyzer's judgment for one modality"""

    modality: Modality
    label: EmotionLabel
    confidence: float
    valence: float | None = None  # signed sentiment in [-1, 1], text only

    def __post_init__(self):
        object.__setattr__(self, "confidence", clamp_confidence(self.confidence))
        if self.valence is not None:
            object.__setattr__(self, "valence", min(max(float(self.valence), -1.0), 1.0))

    @classmethod
    def unknown(cls, modality: Modality) -> "EmotionSample":
        """Sample substituted for a failed analyzer"""
        return cls(modality=modality, label=EmotionLabel.UNKNOWN, confidence=0.0)

    def to_dict(self) -> dict[str, Any]:
        data = {
            "modality": self.modality.value,
            "label": self.label.value,
            "confidence": self.confidence,
        }
        if self.valence is not None:
            data["valence"] = self.valence
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EmotionSample":
        return cls(
            modality=Modality(data["modality"]),
            label=EmotionLabel.parse(data.get("label")),
            confidence=data.get("confidence", 0.0),
            valence=data.get("valence"),
        )


@dataclass(frozen=True)
class FusedEmotion:
    """Aggregate emotion decision of one turn"""

    label: EmotionLabel
    confidence: float

    @classmethod
    def neutral(cls) -> "FusedEmotion":
        """Result when no modality produced a sample"""
        return cls(label=EmotionLabel.NEUTRAL, confidence=0.5)

    def to_dict(self) -> dict[str, Any]:
        return {
            "label": self.label.value,
            "confidence": self.confidence,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FusedEmotion":
        return cls(
            label=EmotionLabel.parse(data.get("label", "Neutral")),
            confidence=clamp_confidence(data.get("confidence", 0.5)),
        )


NEGATIVE_EMOTIONS = {
    EmotionLabel.SAD,
    EmotionLabel.ANGRY,
    EmotionLabel.FEARFUL,
    EmotionLabel.DISGUSTED,
    EmotionLabel.STRESSED,
    EmotionLabel.ANXIOUS,
    EmotionLabel.DEPRESSED,
}

POSITIVE_EMOTIONS = {
    EmotionLabel.HAPPY,
    EmotionLabel.EXCITED,
    EmotionLabel.CALM,
}
