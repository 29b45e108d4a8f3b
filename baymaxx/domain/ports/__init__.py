"""
Domain Ports
Interfaces for dependency inversion
"""

from .ai_port import IAIProvider
from .analyzer_port import IModalityAnalyzer
from .medical_port import IMedicalDiagnoser
from .speech_port import ISpeechSynthesizer, ISpeechTranscriber
from .storage_port import IInteractionStore, IMoodHistoryStore

__all__ = [
    "IAIProvider",
    "IModalityAnalyzer",
    "IMedicalDiagnoser",
    "ISpeechTranscriber",
    "ISpeechSynthesizer",
    "IInteractionStore",
    "IMoodHistoryStore",
]
