"""
Emotion fusion
Combines per-modality samples into one ranked judgment
"""

from __future__ import annotations

from collections.abc import Sequence

from ..models.emotion import (
    EmotionLabel,
    EmotionSample,
    FusedEmotion,
    clamp_confidence,
)


class EmotionFusionEngine:
    """
    Confidence-sum fusion

    Algorithm:
    1. No samples -> Neutral / 0.5 ("no signal", distinct from "all Unknown")
    2. Sum the clamped confidence of every sample per label, so agreeing
       modalities reinforce each other
    3. The label with the highest sum wins. Ties go to the label whose
       running sum reached the maximum first when samples are replayed in
       input order, so the result depends on sample order
    4. UNKNOWN only wins when every sample is UNKNOWN
    5. Confidence = winning sum / number of samples (all samples, UNKNOWN
       included), clamped to [0, 1]
    """

    def fuse(self, samples: Sequence[EmotionSample]) -> FusedEmotion:
        if not samples:
            return FusedEmotion.neutral()

        scores = self._accumulate(samples)
        candidates = {
            label: score for label, score in scores.items()
            if label != EmotionLabel.UNKNOWN
        } or scores
        best = max(candidates.values())

        # replay in input order; the first label whose running sum reaches
        # the maximum wins. Running sums are built with the same additions
        # as `scores`, so the equality test is exact.
        running: dict[EmotionLabel, float] = {}
        winner = None
        for sample in samples:
            running[sample.label] = running.get(sample.label, 0.0) + clamp_confidence(
                sample.confidence
            )
            if sample.label in candidates and running[sample.label] >= best:
                winner = sample.label
                break

        return FusedEmotion(
            label=winner,
            confidence=clamp_confidence(best / len(samples)),
        )

    @staticmethod
    def _accumulate(samples: Sequence[EmotionSample]) -> dict[EmotionLabel, float]:
        scores: dict[EmotionLabel, float] = {}
        for sample in samples:
            scores[sample.label] = scores.get(sample.label, 0.0) + clamp_confidence(
                sample.confidence
            )
        return scores

    def label_scores(self, samples: Sequence[EmotionSample]) -> dict[str, float]:
        """Accumulated confidence per label, for inspection and logging"""
        return {
            label.value: score for label, score in self._accumulate(samples).items()
        }


_default_engine = EmotionFusionEngine()


def fuse(samples: Sequence[EmotionSample]) -> FusedEmotion:
    """Module-level shortcut for EmotionFusionEngine().fuse"""
    return _default_engine.fuse(samples)
