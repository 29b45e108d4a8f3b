"""
Medical diagnosis port
"""

from abc import ABC, abstractmethod

from ..models.interaction import MedicalDiagnosis


class IMedicalDiagnoser(ABC):
    """
    Diagnosis collaborator

    Only invoked when the symptom keyword scan triggers. Its output is
    informational and never blocks the main response.
    """

    @abstractmethod
    async def diagnose(self, symptoms_text: str) -> MedicalDiagnosis:
        """
        Candidate conditions for the described symptoms

        Args:
            symptoms_text: raw user text

        Returns:
            MedicalDiagnosis: diseases with confidences
        """
