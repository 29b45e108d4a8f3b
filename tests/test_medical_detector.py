"""
MedicalTriggerDetector tests
"""

from baymaxx.domain.models.interaction import MedicalFlag
from baymaxx.domain.services.medical import DEFAULT_MEDICAL_KEYWORDS, MedicalTriggerDetector, detect


class TestMedicalTriggerDetector:
    """Keyword scan"""

    def test_matches_in_keyword_order(self):
        flag = detect("I have a fever and headache")
        assert flag.triggered is True
        assert flag.matched_terms == ("fever", "headache")

    def test_case_insensitive(self):
        flag = detect("Terrible HEADACHE and a Cough")
        assert flag.matched_terms == ("headache", "cough")

    def test_substring_match(self):
        """'painful' contains 'pain'"""
        assert detect("my knee is painful").matched_terms == ("pain",)

    def test_empty_and_none(self):
        assert detect("") == MedicalFlag(triggered=False, matched_terms=())
        assert detect(None) == MedicalFlag.none()

    def test_no_symptoms(self):
        assert detect("I feel great today").triggered is False

    def test_each_term_reported_once(self):
        assert detect("fever, fever and more fever").matched_terms == ("fever",)

    def test_custom_keywords_are_normalized(self):
        detector = MedicalTriggerDetector([" Nausea ", "nausea", "", "RASH"])
        assert detector.keywords == ("nausea", "rash")
        assert detector.detect("a rash and nausea").matched_terms == ("nausea", "rash")

    def test_default_keywords(self):
        assert MedicalTriggerDetector().keywords == DEFAULT_MEDICAL_KEYWORDS
