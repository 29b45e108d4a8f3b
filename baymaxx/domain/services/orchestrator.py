"""
Interaction orchestrator
Runs one conversational turn: analyze, fuse, recall, generate, persist
"""

from __future__ import annotations

import asyncio
import json
import time
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from ...core.exceptions import (
    GenerationError,
    InteractionProcessingError,
    PersistenceError,
)
from ...core.logging import get_logger, log_business_event, log_degraded
from ..models.emotion import EmotionSample, FusedEmotion, Modality
from ..models.interaction import (
    ConversationContext,
    Interaction,
    InteractionResult,
    InteractionType,
    MedicalDiagnosis,
    MedicalFlag,
    TurnInput,
    UserRef,
    utcnow,
)
from ..ports.ai_port import IAIProvider
from ..ports.analyzer_port import IModalityAnalyzer
from ..ports.medical_port import IMedicalDiagnoser
from ..ports.speech_port import ISpeechSynthesizer, ISpeechTranscriber
from ..ports.storage_port import IInteractionStore
from .context import DEFAULT_CONTEXT_LIMIT, ContextMemoryStore
from .fusion import EmotionFusionEngine
from .hooks import PostTurnHook, run_hooks
from .medical import MedicalTriggerDetector

logger = get_logger(__name__)

FALLBACK_RESPONSE = "I'm not sure how to respond."
CONSULT_DOCTOR = "Consult Doctor"
DEFAULT_DIAGNOSIS_TIMEOUT = 5.0

SYSTEM_PROMPT = (
    "You are BayMaxx, an AI health companion. "
    "Reply intelligently in a warm, human-like manner. "
    "You are not a doctor: never present condition lists as a diagnosis."
)


@dataclass(frozen=True)
class GenerationRequest:
    """
    Deterministic generation request

    The same inputs always render the same prompt text.
    """

    text: str
    emotion: FusedEmotion
    context: ConversationContext
    medical_summary: str | None = None

    def render(self) -> str:
        sections = [
            f'The user said: "{self.text}"',
            f"Emotion detected: {self.emotion.label.value} "
            f"(confidence {self.emotion.confidence:.2f})",
            "Past context (most recent first): "
            + json.dumps(self.context.serialize(), ensure_ascii=False, sort_keys=True),
        ]
        if self.medical_summary:
            sections.append(f"Possible medical relevance: {self.medical_summary}")
        sections.append("Reply intelligently in a human-like manner.")
        return "\n".join(sections)


class InteractionOrchestrator:
    """
    Top-level coordinator of a turn

    Collaborators are injected; the generation provider, store,
    diagnoser, transcriber and synthesizer may each be None (unconfigured), in which
    case the turn still completes in degraded form.

    Failure semantics:
    - analyzer, transcription, context and diagnosis failures degrade
      silently (logged) and never abort the turn
    - diagnosis is bounded by `diagnosis_timeout` and cancelled when late
    - voice turns get a synthesized reply when a synthesizer is configured;
      synthesis failure leaves `reply_audio` as None
    - fusion, generation and persistence failures surface as a single
      InteractionProcessingError subclass
    """

    def __init__(
        self,
        analyzers: Mapping[Modality, IModalityAnalyzer] | Iterable[IModalityAnalyzer] = (),
        ai_provider: IAIProvider | None = None,
        store: IInteractionStore | None = None,
        *,
        fusion_engine: EmotionFusionEngine | None = None,
        medical_detector: MedicalTriggerDetector | None = None,
        context_memory: ContextMemoryStore | None = None,
        diagnoser: IMedicalDiagnoser | None = None,
        transcriber: ISpeechTranscriber | None = None,
        synthesizer: ISpeechSynthesizer | None = None,
        hooks: Sequence[PostTurnHook] = (),
        context_limit: int = DEFAULT_CONTEXT_LIMIT,
        analyzer_timeout: float | None = None,
        diagnosis_timeout: float = DEFAULT_DIAGNOSIS_TIMEOUT,
        fallback_response: str = FALLBACK_RESPONSE,
        system_prompt: str = SYSTEM_PROMPT,
    ):
        if not fallback_response or not fallback_response.strip():
            raise ValueError("fallback_response must not be empty")
        if not diagnosis_timeout or diagnosis_timeout <= 0:
            raise ValueError("diagnosis_timeout must be positive")

        if isinstance(analyzers, Mapping):
            self.analyzers: dict[Modality, IModalityAnalyzer] = dict(analyzers)
        else:
            self.analyzers = {a.modality: a for a in analyzers}

        self.ai_provider = ai_provider
        self.store = store
        self.fusion_engine = fusion_engine or EmotionFusionEngine()
        self.medical_detector = medical_detector or MedicalTriggerDetector()
        self.context_memory = context_memory or ContextMemoryStore(store, context_limit)
        self.diagnoser = diagnoser
        self.transcriber = transcriber
        self.synthesizer = synthesizer
        self.hooks = list(hooks)
        self.context_limit = context_limit
        self.analyzer_timeout = analyzer_timeout or None
        self.diagnosis_timeout = diagnosis_timeout
        self.fallback_response = fallback_response
        self.system_prompt = system_prompt

    async def process_turn(
        self, user: UserRef | str, turn: TurnInput
    ) -> InteractionResult:
        """
        Process one turn

        Args:
            user: user reference (or bare user id)
            turn: raw text / audio / image of the turn

        Returns:
            InteractionResult: success envelope

        Raises:
            InteractionProcessingError: fusion failed (kind="fusion")
            GenerationError: the generation provider raised
            PersistenceError: the interaction could not be recorded
        """
        user_id = user.id if isinstance(user, UserRef) else UserRef(user).id
        session_id = turn.session_id
        started = time.perf_counter()

        # 1. transcription (voice-only turns) then concurrent fan-out
        query = turn.text.strip() if turn.has_text else ""
        if not query and turn.has_audio:
            query = await self._transcribe(turn.audio, user_id)

        samples, medical_flag = await self._fan_out(turn, query, user_id)

        # 2. fusion
        try:
            fused = self.fusion_engine.fuse(samples)
        except Exception as e:
            raise InteractionProcessingError(
                f"Emotion fusion failed: {e}",
                kind="fusion",
                user_id=user_id,
                session_id=session_id,
            ) from e

        # 3. context window (+ diagnosis in the background when flagged)
        loop = asyncio.get_running_loop()
        diagnosis_task = None
        diagnosis_deadline = loop.time() + self.diagnosis_timeout
        if medical_flag.triggered and self.diagnoser is not None:
            diagnosis_task = asyncio.create_task(self._diagnose(query, user_id))

        context = await self.context_memory.load_context(
            user_id, session_id, self.context_limit
        )

        # 4. diagnosis result, bounded by its own timeout
        diagnosis = None
        if diagnosis_task is not None:
            diagnosis = await self._collect_diagnosis(
                diagnosis_task, diagnosis_deadline - loop.time(), user_id
            )

        # 5. generation
        request = GenerationRequest(
            text=query,
            emotion=fused,
            context=context,
            medical_summary=self._medical_summary(medical_flag, diagnosis),
        )
        response = await self._generate(request, user_id, session_id)
        response_time_ms = int((time.perf_counter() - started) * 1000)

        # 6. persistence
        text_sample = next((s for s in samples if s.modality == Modality.TEXT), None)
        interaction = Interaction(
            user_id=user_id,
            session_id=session_id,
            interaction_type=turn.interaction_type,
            query=query,
            response=response,
            fused_emotion=fused,
            medical_flag=medical_flag,
            response_time_ms=response_time_ms,
            created_at=utcnow(),
            samples=tuple(samples),
            sentiment_score=text_sample.valence if text_sample else None,
            action_suggested=CONSULT_DOCTOR if medical_flag.triggered else None,
        )
        persisted = await self._persist(interaction)

        # 7. post-turn side effects, isolated from the result
        await run_hooks(self.hooks, interaction)

        # 8. spoken reply for voice turns
        reply_audio = None
        if interaction.interaction_type == InteractionType.VOICE:
            reply_audio = await self._synthesize(response, user_id)

        log_business_event(
            logger,
            "turn_completed",
            user_id=user_id,
            session_id=session_id,
            fused_label=fused.label.value,
            fused_confidence=fused.confidence,
            medical_triggered=medical_flag.triggered,
            response_time_ms=response_time_ms,
            context_size=len(context),
        )

        return InteractionResult(
            success=True,
            response=response,
            fused_emotion=fused,
            medical_flag=medical_flag,
            timestamp=interaction.created_at,
            session_id=session_id,
            interaction_type=interaction.interaction_type,
            diagnosis=diagnosis,
            context_degraded=context.degraded,
            persisted=persisted,
            reply_audio=reply_audio,
        )

    async def _fan_out(
        self, turn: TurnInput, query: str, user_id: str
    ) -> tuple[list[EmotionSample], MedicalFlag]:
        """Join-all over present-modality analyzers and the medical scan"""
        branches: list[tuple[Modality, Any]] = []
        if turn.has_text:
            branches.append((Modality.TEXT, turn.text))
        if turn.has_audio:
            branches.append((Modality.VOICE, turn.audio))
        if turn.has_image:
            branches.append((Modality.FACIAL, turn.image))

        jobs = []
        modalities = []
        for modality, raw in branches:
            analyzer = self.analyzers.get(modality)
            if analyzer is None:
                log_degraded(
                    logger, f"analyzer:{modality.value}", "no analyzer configured",
                    user_id=user_id,
                )
                continue
            modalities.append(modality)
            jobs.append(self._analyze(analyzer, modality, raw, user_id))

        results = await asyncio.gather(
            *jobs, self._scan_medical(query), return_exceptions=True
        )

        samples = []
        for modality, result in zip(modalities, results[:-1]):
            if isinstance(result, BaseException):
                log_degraded(logger, f"analyzer:{modality.value}", result, user_id=user_id)
                result = EmotionSample.unknown(modality)
            samples.append(result)

        medical_flag = results[-1]
        if isinstance(medical_flag, BaseException):
            log_degraded(logger, "medical_scan", medical_flag, user_id=user_id)
            medical_flag = MedicalFlag.none()

        return samples, medical_flag

    async def _analyze(
        self,
        analyzer: IModalityAnalyzer,
        modality: Modality,
        raw: Any,
        user_id: str,
    ) -> EmotionSample:
        """One fan-out branch; degrades to UNKNOWN/0 instead of raising"""
        try:
            if self.analyzer_timeout:
                sample = await asyncio.wait_for(
                    analyzer.analyze(raw), timeout=self.analyzer_timeout
                )
            else:
                sample = await analyzer.analyze(raw)
        except asyncio.TimeoutError:
            log_degraded(
                logger, f"analyzer:{modality.value}", "timed out",
                user_id=user_id, timeout=self.analyzer_timeout,
            )
            return EmotionSample.unknown(modality)
        except Exception as e:
            log_degraded(logger, f"analyzer:{modality.value}", e, user_id=user_id)
            return EmotionSample.unknown(modality)

        if not isinstance(sample, EmotionSample):
            log_degraded(
                logger, f"analyzer:{modality.value}", "malformed analyzer output",
                user_id=user_id,
            )
            return EmotionSample.unknown(modality)
        if sample.modality != modality:
            sample = EmotionSample(
                modality=modality,
                label=sample.label,
                confidence=sample.confidence,
                valence=sample.valence,
            )
        return sample

    async def _scan_medical(self, text: str) -> MedicalFlag:
        return self.medical_detector.detect(text)

    async def _transcribe(self, audio: bytes, user_id: str) -> str:
        if self.transcriber is None:
            return ""
        try:
            transcript = await self.transcriber.transcribe(audio)
        except Exception as e:
            log_degraded(logger, "transcription", e, user_id=user_id)
            return ""
        return transcript.strip() if isinstance(transcript, str) else ""

    async def _diagnose(self, text: str, user_id: str) -> MedicalDiagnosis | None:
        try:
            return await self.diagnoser.diagnose(text)
        except Exception as e:
            log_degraded(logger, "diagnosis", e, user_id=user_id)
            return None

    async def _collect_diagnosis(
        self, task: asyncio.Task, remaining: float, user_id: str
    ) -> MedicalDiagnosis | None:
        """Diagnosis finished within its deadline, else None (task cancelled)"""
        done, _ = await asyncio.wait({task}, timeout=max(remaining, 0.0))
        if not done:
            task.cancel()
            log_degraded(
                logger, "diagnosis", "timed out",
                user_id=user_id, timeout=self.diagnosis_timeout,
            )
            return None
        return task.result()

    async def _synthesize(self, text: str, user_id: str) -> bytes | None:
        if self.synthesizer is None:
            return None
        try:
            audio = await self.synthesizer.synthesize(text)
        except Exception as e:
            log_degraded(logger, "speech_synthesis", e, user_id=user_id)
            return None
        if not isinstance(audio, (bytes, bytearray)) or not audio:
            log_degraded(logger, "speech_synthesis", "empty audio", user_id=user_id)
            return None
        return bytes(audio)

    def _medical_summary(
        self, flag: MedicalFlag, diagnosis: MedicalDiagnosis | None
    ) -> str | None:
        if not flag.triggered:
            return None
        summary = "symptoms mentioned: " + ", ".join(flag.matched_terms)
        if diagnosis is not None:
            summary += f"; candidate conditions: {diagnosis.summary()}"
        return summary

    async def _generate(
        self, request: GenerationRequest, user_id: str, session_id: str
    ) -> str:
        if self.ai_provider is None:
            log_degraded(logger, "generation", "no AI provider configured", user_id=user_id)
            return self.fallback_response

        try:
            reply = await self.ai_provider.generate(
                request.render(), system_prompt=self.system_prompt
            )
        except Exception as e:
            raise GenerationError(
                f"Response generation failed: {e}",
                user_id=user_id,
                session_id=session_id,
            ) from e

        if not isinstance(reply, str) or not reply.strip():
            log_degraded(logger, "generation", "empty or malformed reply", user_id=user_id)
            return self.fallback_response
        return reply.strip()

    async def _persist(self, interaction: Interaction) -> bool:
        if self.store is None:
            log_degraded(
                logger, "persistence", "no interaction store configured",
                user_id=interaction.user_id,
            )
            return False

        try:
            await self.store.append(interaction)
        except Exception as e:
            raise PersistenceError(
                f"Interaction could not be recorded: {e}",
                response=interaction.response,
                user_id=interaction.user_id,
                session_id=interaction.session_id,
            ) from e
        return True
