"""
Domain Services
Turn processing logic
"""

from .context import ContextMemoryStore
from .fusion import EmotionFusionEngine, fuse
from .hooks import MoodHistoryHook, PostTurnHook
from .medical import MedicalTriggerDetector, detect
from .orchestrator import GenerationRequest, InteractionOrchestrator

__all__ = [
    "EmotionFusionEngine",
    "fuse",
    "MedicalTriggerDetector",
    "detect",
    "ContextMemoryStore",
    "PostTurnHook",
    "MoodHistoryHook",
    "GenerationRequest",
    "InteractionOrchestrator",
]
