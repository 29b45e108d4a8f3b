"""
AI adapters
"""

from .openai import OpenAIAdapter

__all__ = ["OpenAIAdapter"]
