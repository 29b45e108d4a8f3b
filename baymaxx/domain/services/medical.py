"""
Medical trigger detection
Symptom keyword scan that gates the diagnosis sub-flow
"""

from __future__ import annotations

from collections.abc import Iterable

from ..models.interaction import MedicalFlag

DEFAULT_MEDICAL_KEYWORDS = (
    "fever",
    "headache",
    "pain",
    "cough",
    "dizziness",
    "fatigue",
)


class MedicalTriggerDetector:
    """
    Case-insensitive substring matcher

    Pure and I/O free. Matched terms are reported in keyword-list order,
    each at most once.
    """

    def __init__(self, keywords: Iterable[str] | None = None):
        source = DEFAULT_MEDICAL_KEYWORDS if keywords is None else keywords
        seen: set[str] = set()
        self._keywords: list[str] = []
        for keyword in source:
            normalized = keyword.strip().lower()
            if normalized and normalized not in seen:
                seen.add(normalized)
                self._keywords.append(normalized)

    @property
    def keywords(self) -> tuple[str, ...]:
        return tuple(self._keywords)

    def detect(self, text: str | None) -> MedicalFlag:
        if not text:
            return MedicalFlag.none()

        text_lower = text.lower()
        matched = tuple(k for k in self._keywords if k in text_lower)
        return MedicalFlag(triggered=bool(matched), matched_terms=matched)


_default_detector = MedicalTriggerDetector()


def detect(text: str | None) -> MedicalFlag:
    """Scan with the default keyword list"""
    return _default_detector.detect(text)
