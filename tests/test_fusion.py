"""
EmotionFusionEngine tests

- cross-modality reinforcement
- first-seen tie-break
- empty input / all-Unknown input
- confidence bounds and determinism
"""

import pytest

from baymaxx.domain.models.emotion import EmotionLabel, EmotionSample, FusedEmotion, Modality
from baymaxx.domain.services.fusion import EmotionFusionEngine, fuse


def sample(modality: Modality, label: EmotionLabel, confidence: float) -> EmotionSample:
    return EmotionSample(modality=modality, label=label, confidence=confidence)


@pytest.fixture
def engine():
    return EmotionFusionEngine()


class TestFusion:
    """Aggregation rule"""

    def test_empty_samples_is_neutral(self, engine):
        """No signal yields Neutral / 0.5"""
        assert engine.fuse([]) == FusedEmotion(EmotionLabel.NEUTRAL, 0.5)

    def test_agreeing_modalities_outweigh_single(self, engine):
        result = engine.fuse([
            sample(Modality.TEXT, EmotionLabel.SAD, 0.4),
            sample(Modality.VOICE, EmotionLabel.SAD, 0.3),
            sample(Modality.FACIAL, EmotionLabel.HAPPY, 0.5),
        ])
        assert result.label == EmotionLabel.SAD
        assert result.confidence == pytest.approx(0.7 / 3)

    def test_tie_goes_to_first_seen(self, engine):
        result = engine.fuse([
            sample(Modality.TEXT, EmotionLabel.HAPPY, 0.5),
            sample(Modality.VOICE, EmotionLabel.SAD, 0.5),
        ])
        assert result.label == EmotionLabel.HAPPY
        assert result.confidence == pytest.approx(0.25)

    def test_tie_break_is_order_dependent(self, engine):
        result = engine.fuse([
            sample(Modality.VOICE, EmotionLabel.SAD, 0.5),
            sample(Modality.TEXT, EmotionLabel.HAPPY, 0.5),
        ])
        assert result.label == EmotionLabel.SAD

    def test_tie_break_uses_running_sum(self, engine):
        """The label that completes its sum first wins, not the first label seen"""
        result = engine.fuse([
            sample(Modality.TEXT, EmotionLabel.HAPPY, 0.2),
            sample(Modality.VOICE, EmotionLabel.SAD, 0.5),
            sample(Modality.FACIAL, EmotionLabel.HAPPY, 0.3),
        ])
        assert result.label == EmotionLabel.SAD

    def test_unknown_does_not_win_against_real_label(self, engine):
        result = engine.fuse([
            sample(Modality.TEXT, EmotionLabel.UNKNOWN, 0.0),
            sample(Modality.VOICE, EmotionLabel.ANGRY, 0.6),
        ])
        assert result.label == EmotionLabel.ANGRY
        assert result.confidence == pytest.approx(0.3)

    def test_all_unknown_is_unknown(self, engine):
        result = engine.fuse([
            EmotionSample.unknown(Modality.TEXT),
            EmotionSample.unknown(Modality.VOICE),
        ])
        assert result.label == EmotionLabel.UNKNOWN
        assert result.confidence == 0.0

    def test_out_of_range_confidences_are_clamped(self, engine):
        result = engine.fuse([
            sample(Modality.TEXT, EmotionLabel.HAPPY, 7.0),
            sample(Modality.VOICE, EmotionLabel.SAD, -2.0),
        ])
        assert result.label == EmotionLabel.HAPPY
        assert 0.0 <= result.confidence <= 1.0
        assert result.confidence == pytest.approx(0.5)

    def test_single_sample(self, engine):
        result = engine.fuse([sample(Modality.FACIAL, EmotionLabel.FEARFUL, 0.9)])
        assert result == FusedEmotion(EmotionLabel.FEARFUL, 0.9)

    def test_deterministic(self, engine):
        samples = [
            sample(Modality.TEXT, EmotionLabel.CALM, 0.3),
            sample(Modality.VOICE, EmotionLabel.STRESSED, 0.3),
            sample(Modality.FACIAL, EmotionLabel.CALM, 0.1),
        ]
        assert engine.fuse(samples) == engine.fuse(list(samples))

    def test_module_level_fuse(self):
        assert fuse([]) == FusedEmotion.neutral()

    def test_label_scores(self, engine):
        scores = engine.label_scores([
            sample(Modality.TEXT, EmotionLabel.SAD, 0.4),
            sample(Modality.VOICE, EmotionLabel.SAD, 0.3),
        ])
        assert scores == {"Sad": pytest.approx(0.7)}
