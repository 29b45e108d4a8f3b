"""
AI provider port
Abstracts the large-language-model generation service
"""

from abc import ABC, abstractmethod


class IAIProvider(ABC):
    """
    Generation collaborator

    Wraps a hosted LLM API. Implementations may raise on transport
    failure and may return an empty string.
    """

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """
        Generate a reply

        Args:
            prompt: fully composed user prompt
            system_prompt: optional system instruction
            max_tokens: optional token cap

        Returns:
            str: reply text
        """

    @abstractmethod
    async def health_check(self) -> bool:
        """Whether the API answers"""

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Model in use"""
