"""
Speech adapters
"""

from .tts import OpenAISpeechSynthesizer
from .whisper import WhisperTranscriber

__all__ = ["WhisperTranscriber", "OpenAISpeechSynthesizer"]
