"""
Remote voice / facial detector tests

HTTP transport is patched at `_post`.
"""

from unittest.mock import AsyncMock, patch

import pytest

from baymaxx.adapters.analyzers.remote import (
    FacialExpressionDetector,
    RemoteEmotionDetector,
    VoiceEmotionDetector,
    parse_detection_payload,
)
from baymaxx.core.exceptions import ConfigurationError, ExternalServiceError
from baymaxx.domain.models.emotion import EmotionLabel, Modality


class TestParseDetectionPayload:
    """Response normalization"""

    def test_flat_payload(self):
        assert parse_detection_payload({"emotion": "sad", "confidence": 0.8}) == (EmotionLabel.SAD, 0.8)

    def test_label_key_and_alias(self):
        assert parse_detection_payload({"label": "happiness", "confidence": "0.4"}) == (EmotionLabel.HAPPY, 0.4)

    def test_predictions_pick_highest(self):
        payload = {"predictions": [
            {"label": "fear", "confidence": 0.2},
            {"label": "angry", "confidence": 0.7},
        ]}
        assert parse_detection_payload(payload) == (EmotionLabel.ANGRY, 0.7)

    def test_unmapped_label_is_unknown(self):
        label, _ = parse_detection_payload({"emotion": "contempt", "confidence": 0.9})
        assert label == EmotionLabel.UNKNOWN

    @pytest.mark.parametrize("payload", [None, [], {}, {"predictions": []}, {"confidence": 0.3}])
    def test_malformed_payload(self, payload):
        with pytest.raises(ExternalServiceError):
            parse_detection_payload(payload)


class TestRemoteEmotionDetector:
    """Analyzer contract"""

    def test_text_modality_rejected(self):
        with pytest.raises(ConfigurationError):
            RemoteEmotionDetector(Modality.TEXT, "http://detector")

    def test_missing_url_rejected(self):
        with pytest.raises(ConfigurationError):
            VoiceEmotionDetector("")

    def test_endpoint(self):
        detector = VoiceEmotionDetector("http://detector:5000/", timeout=2.0)
        assert detector.predict_endpoint == "http://detector:5000/predict"
        assert detector.modality == Modality.VOICE
        assert FacialExpressionDetector("http://x").modality == Modality.FACIAL

    @pytest.mark.asyncio
    async def test_successful_detection(self):
        detector = FacialExpressionDetector("http://detector")
        with patch.object(
            detector, "_post", AsyncMock(return_value={"emotion": "Surprised", "confidence": 0.65})
        ) as mock_post:
            sample = await detector.analyze(b"jpeg-bytes")

        mock_post.assert_awaited_once_with(b"jpeg-bytes")
        assert sample.modality == Modality.FACIAL
        assert sample.label == EmotionLabel.SURPRISED
        assert sample.confidence == pytest.approx(0.65)

    @pytest.mark.asyncio
    async def test_transport_error_degrades(self):
        detector = VoiceEmotionDetector("http://detector")
        error = ExternalServiceError("HTTP 503", service_name="voice_detector", status_code=503)
        with patch.object(detector, "_post", AsyncMock(side_effect=error)):
            sample = await detector.analyze(b"wav")

        assert sample.label == EmotionLabel.UNKNOWN
        assert sample.confidence == 0.0

    @pytest.mark.asyncio
    async def test_malformed_response_degrades(self):
        detector = VoiceEmotionDetector("http://detector")
        with patch.object(detector, "_post", AsyncMock(return_value="not json object")):
            sample = await detector.analyze(b"wav")

        assert sample.label == EmotionLabel.UNKNOWN

    @pytest.mark.asyncio
    async def test_empty_input_degrades_without_request(self):
        detector = VoiceEmotionDetector("http://detector")
        with patch.object(detector, "_post", AsyncMock()) as mock_post:
            sample = await detector.analyze(b"")

        mock_post.assert_not_awaited()
        assert sample.label == EmotionLabel.UNKNOWN

    @pytest.mark.asyncio
    async def test_confidence_clamped(self):
        detector = VoiceEmotionDetector("http://detector")
        with patch.object(detector, "_post", AsyncMock(return_value={"emotion": "calm", "confidence": 3})):
            sample = await detector.analyze(b"wav")

        assert sample.label == EmotionLabel.CALM
        assert sample.confidence == 1.0
