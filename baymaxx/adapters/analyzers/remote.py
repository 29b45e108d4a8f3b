"""
Remote emotion detectors
Voice and facial analyzers backed by an HTTP detection service
"""

from __future__ import annotations

from typing import Any

import aiohttp

from ...core.exceptions import ConfigurationError, DegradedSignalError, ExternalServiceError
from ...core.logging import get_logger, log_degraded
from ...domain.models.emotion import EmotionLabel, EmotionSample, Modality
from ...domain.ports.analyzer_port import IModalityAnalyzer

logger = get_logger(__name__)

_CONTENT_TYPES = {
    Modality.VOICE: ("audio.wav", "audio/wav"),
    Modality.FACIAL: ("image.jpg", "image/jpeg"),
}


def parse_detection_payload(payload: Any) -> tuple[EmotionLabel, float]:
    """
    Normalize a detector response

    Accepts `{"emotion"|"label": str, "confidence": float}` or a
    `{"predictions": [...]}` list of such objects (highest confidence wins).

    Raises:
        ExternalServiceError: payload has neither shape
    """
    if not isinstance(payload, dict):
        raise ExternalServiceError("Detector response is not an object", service_name="detector")

    predictions = payload.get("predictions")
    if isinstance(predictions, list):
        candidates = [p for p in predictions if isinstance(p, dict)]
        if not candidates:
            raise ExternalServiceError("Detector returned no predictions", service_name="detector")
        payload = max(candidates, key=lambda p: _as_float(p.get("confidence")))

    raw_label = payload.get("emotion", payload.get("label"))
    if raw_label is None:
        raise ExternalServiceError("Detector response has no label", service_name="detector")

    return EmotionLabel.parse(raw_label), _as_float(payload.get("confidence"))


def _as_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


class RemoteEmotionDetector(IModalityAnalyzer):
    """
    HTTP emotion detector adapter

    Posts the raw bytes as multipart form data to `<base_url>/predict`.
    Never raises: transport errors, non-200 responses and malformed
    payloads yield UNKNOWN / 0.
    """

    def __init__(
        self,
        modality: Modality,
        base_url: str,
        timeout: float = 5.0,
        endpoint: str = "/predict",
    ):
        if modality not in _CONTENT_TYPES:
            raise ConfigurationError(f"Remote detection supports voice and facial input, not {modality.value}")
        if not base_url:
            raise ConfigurationError(f"No detector URL configured for {modality.value}")
        self._modality = modality
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.predict_endpoint = f"{self.base_url}{endpoint}"

    @property
    def modality(self) -> Modality:
        return self._modality

    async def analyze(self, raw_input: Any) -> EmotionSample:
        try:
            if not raw_input:
                raise DegradedSignalError("empty input", source=f"analyzer:{self._modality.value}")
            payload = await self._post(bytes(raw_input))
            label, confidence = parse_detection_payload(payload)
        except Exception as e:
            log_degraded(
                logger, f"analyzer:{self._modality.value}", e,
                endpoint=self.predict_endpoint,
            )
            return EmotionSample.unknown(self._modality)

        return EmotionSample(modality=self._modality, label=label, confidence=confidence)

    async def _post(self, data: bytes) -> Any:
        """Send the input to the detector and return the decoded JSON"""
        filename, content_type = _CONTENT_TYPES[self._modality]
        form = aiohttp.FormData()
        form.add_field("file", data, filename=filename, content_type=content_type)

        timeout = aiohttp.ClientTimeout(total=self.timeout)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.post(self.predict_endpoint, data=form) as response:
                if response.status != 200:
                    error_text = await response.text()
                    raise ExternalServiceError(
                        f"Detector error: HTTP {response.status} - {error_text}",
                        service_name=f"{self._modality.value.lower()}_detector",
                        status_code=response.status,
                    )
                return await response.json()


class VoiceEmotionDetector(RemoteEmotionDetector):
    """Voice emotion analyzer"""

    def __init__(self, base_url: str, timeout: float = 5.0):
        super().__init__(Modality.VOICE, base_url, timeout)


class FacialExpressionDetector(RemoteEmotionDetector):
    """Facial expression analyzer"""

    def __init__(self, base_url: str, timeout: float = 5.0):
        super().__init__(Modality.FACIAL, base_url, timeout)
