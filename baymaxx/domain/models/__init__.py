"""
Domain Models
"""

from .emotion import (
    EmotionLabel,
    EmotionSample,
    FusedEmotion,
    Modality,
    clamp_confidence,
)
from .interaction import (
    ConversationContext,
    Interaction,
    InteractionResult,
    InteractionType,
    MedicalDiagnosis,
    MedicalFlag,
    MoodEntry,
    TurnInput,
    UserRef,
)

__all__ = [
    # emotion
    "Modality",
    "EmotionLabel",
    "EmotionSample",
    "FusedEmotion",
    "clamp_confidence",
    # interaction
    "UserRef",
    "TurnInput",
    "InteractionType",
    "MedicalFlag",
    "MedicalDiagnosis",
    "Interaction",
    "ConversationContext",
    "MoodEntry",
    "InteractionResult",
]
