"""
Modality analyzers
Concrete IModalityAnalyzer implementations

Example:
    from baymaxx.adapters.analyzers.text import TextSentimentAnalyzer
    from baymaxx.adapters.analyzers.remote import VoiceEmotionDetector
"""

from .remote import FacialExpressionDetector, RemoteEmotionDetector, VoiceEmotionDetector
from .text import TextSentimentAnalyzer

__all__ = [
    "TextSentimentAnalyzer",
    "RemoteEmotionDetector",
    "VoiceEmotionDetector",
    "FacialExpressionDetector",
]
