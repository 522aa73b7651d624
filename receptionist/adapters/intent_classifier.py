import asyncio
import logging
from typing import Optional, Protocol, Tuple

from openai import AsyncOpenAI

from ..models import Intent
from ..prompts.prompt_layer import INTENT_CLASSIFICATION_PROMPT

logger = logging.getLogger(__name__)

# Whole-utterance substring keywords, checked in this order
CLAIMS_KEYWORDS = ('claim', 'accident', 'loss', 'adjuster', 'rental', 'payment', 'denial')
ONBOARDING_KEYWORDS = (
    'agent', 'dealer', 'onboard', 'contract', 'appointment',
    'portal', 'login', 'commission', 'training',
)

VALID_LABELS = {intent.value: intent for intent in Intent}


class TextClassifier(Protocol):
    """Anything that can answer a single classification prompt with text"""

    async def complete(self, prompt: str) -> str:
        ...


class OpenAITextClassifier:
    """Single-shot chat completion used as the fallback classifier"""

    def __init__(self, api_key: str, model: str = "gpt-4o-mini", timeout_sec: float = 4.0,
                 client: Optional[AsyncOpenAI] = None):
        self.model = model
        self.openai_client = client or AsyncOpenAI(api_key=api_key, timeout=timeout_sec, max_retries=0)

    async def complete(self, prompt: str) -> str:
        response = await self.openai_client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=0,
            max_tokens=10,
        )
        return response.choices[0].message.content or ""

    async def close(self):
        """Close the OpenAI HTTP client"""
        await self.openai_client.close()


class IntentClassifier:
    """Classifies a caller utterance into claims, onboarding or unknown.

    Keyword matching runs first; the text classifier is consulted only when no
    keyword matches, at most once per call to ``classify``. Failures of the
    text classifier resolve to ``Intent.UNKNOWN`` and are never raised.
    """

    def __init__(self, text_classifier: Optional[TextClassifier] = None, timeout_sec: float = 4.0):
        self.text_classifier = text_classifier
        self.timeout_sec = timeout_sec
        self.claims_keywords = CLAIMS_KEYWORDS
        self.onboarding_keywords = ONBOARDING_KEYWORDS

    def match_keywords(self, utterance: str) -> Optional[Intent]:
        """Keyword pass only. Returns None when neither keyword set matches."""
        text_lower = (utterance or "").lower()

        if any(keyword in text_lower for keyword in self.claims_keywords):
            return Intent.CLAIMS

        if any(keyword in text_lower for keyword in self.onboarding_keywords):
            return Intent.ONBOARDING

        return None

    @staticmethod
    def parse_label(raw: Optional[str]) -> Intent:
        """Map a model reply onto an Intent; anything unexpected is UNKNOWN"""
        if not raw:
            return Intent.UNKNOWN
        label = raw.strip().strip('"\'.').strip().lower()
        return VALID_LABELS.get(label, Intent.UNKNOWN)

    async def classify(self, utterance: str, call_sid: Optional[str] = None) -> Intent:
        intent, _ = await self.classify_with_source(utterance, call_sid)
        return intent

    async def classify_with_source(self, utterance: str, call_sid: Optional[str] = None) -> Tuple[Intent, str]:
        """Classify and report the source: keyword, model, model_failed or none"""
        keyword_intent = self.match_keywords(utterance)
        if keyword_intent is not None:
            return keyword_intent, "keyword"

        if not (utterance or "").strip():
            return Intent.UNKNOWN, "none"

        if self.text_classifier is None:
            logger.warning(f"No fallback classifier configured; treating utterance as unknown for {call_sid}")
            return Intent.UNKNOWN, "none"

        prompt = INTENT_CLASSIFICATION_PROMPT.format(utterance=utterance)
        try:
            raw = await asyncio.wait_for(self.text_classifier.complete(prompt), timeout=self.timeout_sec)
        except asyncio.TimeoutError:
            logger.error(f"Fallback classification timed out after {self.timeout_sec}s for {call_sid}")
            return Intent.UNKNOWN, "model_failed"
        except Exception as e:
            logger.error(f"Fallback classification failed for {call_sid}: {e}")
            return Intent.UNKNOWN, "model_failed"

        return self.parse_label(raw), "model"

    async def close(self):
        close = getattr(self.text_classifier, "close", None)
        if close is not None:
            await close()
