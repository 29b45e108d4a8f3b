"""
Knowledge-base diagnoser
Static symptom -> condition table used when no external diagnosis service is configured
"""

from ...domain.models.interaction import MedicalDiagnosis
from ...domain.ports.medical_port import IMedicalDiagnoser

# symptom -> ((condition, weight), ...)
SYMPTOM_CONDITIONS: dict[str, tuple[tuple[str, float], ...]] = {
    "fever": (("Influenza", 0.6), ("Common cold", 0.4), ("COVID-19", 0.3)),
    "headache": (("Tension headache", 0.6), ("Migraine", 0.4), ("Dehydration", 0.3)),
    "pain": (("Muscle strain", 0.4), ("Inflammation", 0.3)),
    "cough": (("Common cold", 0.6), ("Bronchitis", 0.4), ("Influenza", 0.3)),
    "dizziness": (("Dehydration", 0.5), ("Low blood pressure", 0.4), ("Vertigo", 0.3)),
    "fatigue": (("Sleep deprivation", 0.5), ("Anemia", 0.3), ("Influenza", 0.2)),
}


class KnowledgeBaseDiagnoser(IMedicalDiagnoser):
    """
    Table-driven diagnoser

    Weights of every matched symptom are summed per condition and
    normalized by the number of matched symptoms. At most `max_results`
    conditions are returned, highest confidence first.
    """

    def __init__(
        self,
        table: dict[str, tuple[tuple[str, float], ...]] | None = None,
        max_results: int = 3,
    ):
        self._table = SYMPTOM_CONDITIONS if table is None else table
        self.max_results = max_results

    async def diagnose(self, symptoms_text: str) -> MedicalDiagnosis:
        lowered = (symptoms_text or "").lower()
        matched = [symptom for symptom in self._table if symptom in lowered]
        if not matched:
            return MedicalDiagnosis()

        scores: dict[str, float] = {}
        for symptom in matched:
            for condition, weight in self._table[symptom]:
                scores[condition] = scores.get(condition, 0.0) + weight

        ranked = sorted(scores.items(), key=lambda item: (-item[1], item[0]))
        ranked = ranked[: self.max_results]

        return MedicalDiagnosis(
            diseases=tuple(condition for condition, _ in ranked),
            confidences=tuple(round(min(score / len(matched), 1.0), 2) for _, score in ranked),
        )
