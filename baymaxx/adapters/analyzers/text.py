"""
Text emotion analyzer
Lexical sentiment scoring (AFINN-style word valences)
"""

from __future__ import annotations

import re
from typing import Any

from ...core.exceptions import DegradedSignalError
from ...core.logging import get_logger, log_degraded
from ...domain.models.emotion import EmotionLabel, EmotionSample, Modality
from ...domain.ports.analyzer_port import IModalityAnalyzer

logger = get_logger(__name__)

# word -> valence in [-5, 5]
VALENCE_LEXICON: dict[str, int] = {
    # positive
    "amazing": 4,
    "awesome": 4,
    "beautiful": 3,
    "best": 3,
    "better": 2,
    "brilliant": 4,
    "calm": 2,
    "cheerful": 2,
    "comfortable": 2,
    "confident": 2,
    "delighted": 3,
    "enjoy": 2,
    "enjoying": 2,
    "excellent": 3,
    "excited": 3,
    "fantastic": 4,
    "fine": 2,
    "fun": 4,
    "glad": 3,
    "good": 3,
    "grateful": 3,
    "great": 3,
    "happy": 3,
    "hope": 2,
    "hopeful": 2,
    "joy": 3,
    "like": 2,
    "love": 3,
    "lovely": 3,
    "nice": 3,
    "peaceful": 2,
    "perfect": 3,
    "pleased": 3,
    "proud": 2,
    "relaxed": 2,
    "relieved": 2,
    "rested": 2,
    "thank": 2,
    "thanks": 2,
    "thrilled": 5,
    "well": 2,
    "win": 4,
    "wonderful": 4,
    "yes": 1,
    # negative
    "afraid": -2,
    "alone": -2,
    "angry": -3,
    "annoyed": -2,
    "anxious": -2,
    "ashamed": -2,
    "awful": -3,
    "bad": -3,
    "bored": -2,
    "broken": -1,
    "cry": -1,
    "crying": -2,
    "depressed": -2,
    "desperate": -3,
    "disappointed": -2,
    "disgusted": -3,
    "dread": -2,
    "exhausted": -2,
    "fail": -2,
    "failed": -2,
    "fear": -2,
    "frustrated": -2,
    "furious": -3,
    "grief": -2,
    "hate": -3,
    "helpless": -2,
    "hopeless": -2,
    "horrible": -3,
    "hurt": -2,
    "ill": -2,
    "lonely": -2,
    "lost": -3,
    "mad": -3,
    "miserable": -3,
    "nervous": -2,
    "no": -1,
    "pain": -2,
    "panic": -3,
    "sad": -2,
    "scared": -2,
    "sick": -2,
    "sorry": -1,
    "stressed": -2,
    "suffering": -2,
    "terrible": -3,
    "tired": -2,
    "unhappy": -2,
    "upset": -2,
    "worried": -3,
    "worse": -3,
    "worst": -3,
    "worthless": -2,
}

NEGATORS = frozenset([
    "not", "no", "never", "dont", "don't", "isnt", "isn't", "wasnt", "wasn't",
    "cant", "can't", "cannot", "wont", "won't", "aint", "ain't", "didnt", "didn't",
    "doesnt", "doesn't", "nor", "without",
])

_TOKEN_PATTERN = re.compile(r"[a-z']+")


def score_text(text: str, lexicon: dict[str, int] | None = None) -> int:
    """
    Sum of word valences; a negator directly before a word flips its sign
    """
    lexicon = VALENCE_LEXICON if lexicon is None else lexicon
    tokens = _TOKEN_PATTERN.findall(text.lower())
    score = 0
    for index, token in enumerate(tokens):
        valence = lexicon.get(token)
        if valence is None:
            continue
        if index > 0 and tokens[index - 1] in NEGATORS:
            valence = -valence
        score += valence
    return score


def label_for_score(score: int) -> EmotionLabel:
    if score > 3:
        return EmotionLabel.HAPPY
    if score > 1:
        return EmotionLabel.CALM
    if score < -3:
        return EmotionLabel.ANGRY
    if score < -1:
        return EmotionLabel.SAD
    return EmotionLabel.NEUTRAL


class TextSentimentAnalyzer(IModalityAnalyzer):
    """
    Lexical sentiment analyzer

    Thresholds: > 3 Happy, > 1 Calm, < -3 Angry, < -1 Sad, else Neutral.
    Confidence is |score| / 10; empty text yields Neutral / 0.5.
    """

    def __init__(self, lexicon: dict[str, int] | None = None):
        self._lexicon = VALENCE_LEXICON if lexicon is None else lexicon

    @property
    def modality(self) -> Modality:
        return Modality.TEXT

    async def analyze(self, raw_input: Any) -> EmotionSample:
        try:
            return self._analyze(raw_input)
        except Exception as e:
            log_degraded(logger, "analyzer:Text", e)
            return EmotionSample.unknown(Modality.TEXT)

    def _analyze(self, text: Any) -> EmotionSample:
        if text is None or (isinstance(text, str) and not text.strip()):
            return EmotionSample(Modality.TEXT, EmotionLabel.NEUTRAL, 0.5, valence=0.0)
        if not isinstance(text, str):
            raise DegradedSignalError(
                f"text analyzer expects str, got {type(text).__name__}", source="analyzer:Text"
            )

        score = score_text(text, self._lexicon)

        return EmotionSample(
            modality=Modality.TEXT,
            label=label_for_score(score),
            confidence=abs(score) / 10,
            valence=score / 10,
        )

