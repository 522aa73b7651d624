"""
Twilio turn adapter.

Translates Twilio voice webhook fields into a TurnInput and a dialog Action
into TwiML. No dialog decisions are made here.
"""

import logging
from typing import Any, Mapping, Optional
from urllib.parse import urlencode

from twilio.request_validator import RequestValidator
from twilio.twiml.voice_response import VoiceResponse

from ..models import Action, PromptAction, TurnInput

logger = logging.getLogger(__name__)

CONTEXT_PARAM = "context"
TERMINAL_PAUSE_SEC = 1


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value).strip()


def parse_turn(form: Mapping[str, Any], query: Optional[Mapping[str, Any]] = None,
               expects_speech: bool = False) -> TurnInput:
    """Build a TurnInput from Twilio form fields and the callback query string.

    On a gather callback (``expects_speech``) a missing SpeechResult means the
    caller said nothing, so it is read as an empty utterance.
    """
    query = query or {}
    utterance = _clean(form.get("SpeechResult"))
    if utterance is None and expects_speech:
        utterance = ""

    digits = _clean(form.get("Digits")) or None
    context_token = _clean(query.get(CONTEXT_PARAM)) or None

    return TurnInput(
        call_sid=form.get("CallSid") or "",
        caller=form.get("From") or "",
        utterance=utterance,
        digits=digits,
        context_token=context_token,
    )


def build_context_url(path: str, token: Optional[str]) -> str:
    """Gather callback URL carrying the next context token, if any"""
    if not token:
        return path
    return f"{path}?{urlencode({CONTEXT_PARAM: token})}"


def render_action(action: Action, gather_path: str = "/gather", voice: str = "Polly.Joanna",
                  language: str = "en-US", gather_timeout: int = 6) -> str:
    """Render an Action as a TwiML document"""
    response = VoiceResponse()

    if isinstance(action, PromptAction) and action.listen_next:
        gather = response.gather(
            input="speech dtmf",
            action=build_context_url(gather_path, action.next_context_token),
            method="POST",
            timeout=gather_timeout,
            speech_timeout="auto",
            num_digits=1,
            language=language,
            # Silence still posts to the callback, as an empty turn
            action_on_empty_result=True,
        )
        gather.say(action.text, voice=voice, language=language)
        return str(response)

    response.say(action.text, voice=voice, language=language)
    response.pause(length=TERMINAL_PAUSE_SEC)
    response.hangup()
    return str(response)


def expected_request_url(public_base_url: str, path: str, query: str = "") -> str:
    """URL Twilio signed, rebuilt from the public base URL when behind a proxy"""
    url = public_base_url.rstrip("/") + path
    if query:
        url += f"?{query}"
    return url


class TwilioSignatureVerifier:
    """Checks X-Twilio-Signature against the account auth token"""

    def __init__(self, auth_token: str):
        self.auth_token = auth_token
        self.validator = RequestValidator(auth_token) if auth_token else None

    def verify(self, url: str, params: Mapping[str, Any], signature: Optional[str]) -> bool:
        if not signature:
            return False
        if self.validator is None:
            logger.warning("TWILIO_AUTH_TOKEN is not set; rejecting signed request")
            return False
        return self.validator.validate(url, dict(params), signature)
