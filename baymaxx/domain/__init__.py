"""
Domain Layer
Core turn-processing logic and domain models
"""

from __future__ import annotations

from .models import (
    ConversationContext,
    EmotionLabel,
    EmotionSample,
    FusedEmotion,
    Interaction,
    InteractionResult,
    InteractionType,
    MedicalDiagnosis,
    MedicalFlag,
    Modality,
    TurnInput,
    UserRef,
)

__all__ = [
    "Modality",
    "EmotionLabel",
    "EmotionSample",
    "FusedEmotion",
    "UserRef",
    "TurnInput",
    "InteractionType",
    "MedicalFlag",
    "MedicalDiagnosis",
    "Interaction",
    "ConversationContext",
    "InteractionResult",
]
