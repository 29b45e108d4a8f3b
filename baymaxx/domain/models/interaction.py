"""
Interaction models
Turn input, persisted interaction record and the result returned to callers
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from .emotion import EmotionSample, FusedEmotion


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InteractionType(Enum):
    """Channel mix of a turn"""

    TEXT = "Text"
    VOICE = "Voice"
    MULTIMODAL = "Multimodal"


@dataclass(frozen=True)
class UserRef:
    """The user a turn belongs to"""

    id: str

    def __post_init__(self):
        if not self.id or not str(self.id).strip():
            raise ValueError("user id is required")


@dataclass
class TurnInput:
    """Raw inputs of one turn; at least one may be absent, all may be"""

    text: str | None = None
    audio: bytes | None = None
    image: bytes | None = None
    session_id: str | None = None

    def __post_init__(self):
        if self.session_id is None:
            self.session_id = str(uuid.uuid4())

    @property
    def has_text(self) -> bool:
        return bool(self.text and self.text.strip())

    @property
    def has_audio(self) -> bool:
        return bool(self.audio)

    @property
    def has_image(self) -> bool:
        return bool(self.image)

    @property
    def interaction_type(self) -> InteractionType:
        if self.has_text and not self.has_audio and not self.has_image:
            return InteractionType.TEXT
        if self.has_audio and not self.has_text and not self.has_image:
            return InteractionType.VOICE
        if not (self.has_text or self.has_audio or self.has_image):
            return InteractionType.TEXT
        return InteractionType.MULTIMODAL


@dataclass(frozen=True)
class MedicalFlag:
    """Result of the symptom keyword scan"""

    triggered: bool = False
    matched_terms: tuple[str, ...] = ()

    @classmethod
    def none(cls) -> "MedicalFlag":
        return cls()

    def to_dict(self) -> dict[str, Any]:
        return {
            "triggered": self.triggered,
            "matched_terms": list(self.matched_terms),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "MedicalFlag":
        if not data:
            return cls()
        return cls(
            triggered=bool(data.get("triggered", False)),
            matched_terms=tuple(data.get("matched_terms", [])),
        )


@dataclass(frozen=True)
class MedicalDiagnosis:
    """Candidate conditions from the diagnosis collaborator (not medical advice)"""

    diseases: tuple[str, ...] = ()
    confidences: tuple[float, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.diseases

    def summary(self) -> str:
        """One-line summary for the generation prompt"""
        if self.is_empty:
            return "no matching conditions"
        return ", ".join(
            f"{disease} ({confidence:.2f})"
            for disease, confidence in zip(self.diseases, self.confidences)
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "diseases": list(self.diseases),
            "confidences": list(self.confidences),
        }


@dataclass(frozen=True)
class Interaction:
    """
    Persisted record of one turn

    Immutable once written; the unit of audit and of conversational memory.
    """

    user_id: str
    session_id: str
    interaction_type: InteractionType
    query: str
    response: str
    fused_emotion: FusedEmotion
    medical_flag: MedicalFlag = field(default_factory=MedicalFlag)
    response_time_ms: int = 0
    created_at: datetime = field(default_factory=utcnow)
    samples: tuple[EmotionSample, ...] = ()
    sentiment_score: float | None = None
    action_suggested: str | None = None
    language: str = "en"
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "session_id": self.session_id,
            "interaction_type": self.interaction_type.value,
            "query": self.query,
            "response": self.response,
            "fused_emotion": self.fused_emotion.to_dict(),
            "medical_flag": self.medical_flag.to_dict(),
            "samples": [s.to_dict() for s in self.samples],
            "insights": {
                "sentiment_score": self.sentiment_score,
                "action_suggested": self.action_suggested,
            },
            "metadata": {
                "language": self.language,
                "response_time_ms": self.response_time_ms,
            },
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Interaction":
        insights = data.get("insights", {})
        metadata = data.get("metadata", {})
        created_at = datetime.fromisoformat(data["created_at"])
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return cls(
            id=data.get("id") or str(uuid.uuid4()),
            user_id=data["user_id"],
            session_id=data["session_id"],
            interaction_type=InteractionType(data.get("interaction_type", "Text")),
            query=data.get("query", ""),
            response=data.get("response", ""),
            fused_emotion=FusedEmotion.from_dict(data.get("fused_emotion", {})),
            medical_flag=MedicalFlag.from_dict(data.get("medical_flag")),
            samples=tuple(EmotionSample.from_dict(s) for s in data.get("samples", [])),
            sentiment_score=insights.get("sentiment_score"),
            action_suggested=insights.get("action_suggested"),
            language=metadata.get("language", "en"),
            response_time_ms=metadata.get("response_time_ms", 0),
            created_at=created_at,
        )


@dataclass(frozen=True)
class ConversationContext:
    """
    Context window (short-term memory)

    Up to K prior interactions, most recent first. `degraded` is set when
    the lookup failed and the window was replaced by an empty one.
    """

    interactions: tuple[Interaction, ...] = ()
    degraded: bool = False

    def __len__(self) -> int:
        return len(self.interactions)

    def __iter__(self):
        return iter(self.interactions)

    def serialize(self) -> list[dict[str, Any]]:
        """Compact most-recent-first view for the generation prompt"""
        return [
            {
                "query": i.query,
                "response": i.response,
                "emotion": i.fused_emotion.label.value,
                "at": i.created_at.isoformat(),
            }
            for i in self.interactions
        ]


@dataclass(frozen=True)
class MoodEntry:
    """One row of a user's mood history"""

    user_id: str
    session_id: str
    label: str
    confidence: float
    samples: tuple[dict[str, Any], ...] = ()
    recorded_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "session_id": self.session_id,
            "label": self.label,
            "confidence": self.confidence,
            "samples": list(self.samples),
            "recorded_at": self.recorded_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MoodEntry":
        recorded_at = datetime.fromisoformat(data["recorded_at"])
        if recorded_at.tzinfo is None:
            recorded_at = recorded_at.replace(tzinfo=timezone.utc)
        return cls(
            user_id=data["user_id"],
            session_id=data.get("session_id", ""),
            label=data.get("label", "Neutral"),
            confidence=data.get("confidence", 0.0),
            samples=tuple(data.get("samples", [])),
            recorded_at=recorded_at,
        )


@dataclass
class InteractionResult:
    """Envelope returned to the caller of a turn"""

    success: bool
    response: str
    fused_emotion: FusedEmotion
    medical_flag: MedicalFlag
    timestamp: datetime
    session_id: str
    interaction_type: InteractionType = InteractionType.TEXT
    diagnosis: MedicalDiagnosis | None = None
    context_degraded: bool = False
    persisted: bool = True
    reply_audio: bytes | None = None  # spoken reply, voice turns only

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "response": self.response,
            "fused_emotion": self.fused_emotion.to_dict(),
            "medical_flag": self.medical_flag.to_dict(),
            "diagnosis": self.diagnosis.to_dict() if self.diagnosis else None,
            "session_id": self.session_id,
            "interaction_type": self.interaction_type.value,
            "context_degraded": self.context_degraded,
            "persisted": self.persisted,
            "has_reply_audio": self.reply_audio is not None,
            "timestamp": self.timestamp.isoformat(),
        }
