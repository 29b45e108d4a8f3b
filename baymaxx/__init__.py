"""
BayMaxx - multi-modal companion interaction pipeline

Fuses text, voice and facial emotion signals for one conversational turn,
gates a medical-symptom sub-flow, generates a reply with recent context
and records the interaction.
"""

from importlib import metadata
from pathlib import Path
import tomllib

_pyproject = Path(__file__).resolve().parent.parent / "pyproject.toml"
if _pyproject.exists():
    with _pyproject.open("rb") as _f:
        __version__: str = tomllib.load(_f)["project"]["version"]
else:
    __version__ = metadata.version("baymaxx")

# ===== Domain Models =====
from .domain.models import (
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
    MoodEntry,
    TurnInput,
    UserRef,
)

# ===== Ports (Interfaces) =====
from .domain.ports import (
    IAIProvider,
    IInteractionStore,
    IMedicalDiagnoser,
    IModalityAnalyzer,
    IMoodHistoryStore,
    ISpeechSynthesizer,
    ISpeechTranscriber,
)

# ===== Domain Services =====
from .domain.services import (
    ContextMemoryStore,
    EmotionFusionEngine,
    InteractionOrchestrator,
    MedicalTriggerDetector,
    MoodHistoryHook,
)


# ===== Adapters (lazy import) =====
def get_openai_adapter():
    from .adapters.ai.openai import OpenAIAdapter

    return OpenAIAdapter


def get_file_storage_adapter():
    from .adapters.storage.file import FileStorageAdapter

    return FileStorageAdapter


__all__ = [
    # Version
    "__version__",
    # Models
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
    "MoodEntry",
    "InteractionResult",
    # Ports
    "IAIProvider",
    "IModalityAnalyzer",
    "IInteractionStore",
    "IMoodHistoryStore",
    "IMedicalDiagnoser",
    "ISpeechTranscriber",
    "ISpeechSynthesizer",
    # Services
    "EmotionFusionEngine",
    "MedicalTriggerDetector",
    "ContextMemoryStore",
    "MoodHistoryHook",
    "InteractionOrchestrator",
    # Adapter getters
    "get_openai_adapter",
    "get_file_storage_adapter",
]
