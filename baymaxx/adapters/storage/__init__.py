"""
Storage adapters
"""

from .file import FileStorageAdapter

__all__ = ["FileStorageAdapter"]
