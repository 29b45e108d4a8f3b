"""
Medical diagnosis adapters
"""

from .knowledge_base import KnowledgeBaseDiagnoser

__all__ = ["KnowledgeBaseDiagnoser"]
