"""
Dialog state machine for the receptionist.

All dialog context lives in the DialogState carried by the turn; nothing is
stored between requests. Every function here is pure and returns exactly one
action per turn.
"""

from typing import Optional, Sequence

from ..models import (
    Action,
    DialogState,
    Intent,
    PromptAction,
    TerminateAction,
    TurnInput,
)
from ..prompts.prompt_layer import (
    GREETING,
    CLAIMS_SELF_SERVICE_MESSAGE,
    CLOSING_MESSAGE,
    CLAIMS_TRANSFER_MESSAGE,
    ONBOARDING_TRANSFER_MESSAGE,
    RECEPTION_TRANSFER_MESSAGE,
)

# Checked before HELP_KEYWORDS; an utterance matching both counts as confirmation
CONFIRMATION_KEYWORDS = ('yes', 'all set', 'that helps', "i'm good", 'thank', 'okay', 'ok')
HELP_KEYWORDS = ('speak', 'representative', 'transfer', 'person', 'help', 'talk')

KEYPAD_INTENTS = {
    '1': Intent.CLAIMS,
    '2': Intent.ONBOARDING,
    '0': Intent.UNKNOWN,
}


def _contains_any(utterance: Optional[str], keywords: Sequence[str]) -> bool:
    text_lower = (utterance or "").lower()
    return any(keyword in text_lower for keyword in keywords)


def is_confirmation(utterance: Optional[str]) -> bool:
    return _contains_any(utterance, CONFIRMATION_KEYWORDS)


def is_help_request(utterance: Optional[str]) -> bool:
    return _contains_any(utterance, HELP_KEYWORDS)


def answers_claims_offer(utterance: Optional[str]) -> bool:
    """True for a confirmation or a request for a person"""
    return is_confirmation(utterance) or is_help_request(utterance)


def greeting_action() -> PromptAction:
    return PromptAction(text=GREETING, listen_next=True, next_state=None)


def reception_transfer_action() -> TerminateAction:
    return TerminateAction(text=RECEPTION_TRANSFER_MESSAGE)


def resolve_keypad_intent(digits: Optional[str]) -> Optional[Intent]:
    """Map a single keypad press to an intent, or None if it is not a shortcut"""
    return KEYPAD_INTENTS.get((digits or "").strip())


def needs_classification(turn: TurnInput) -> bool:
    """True when the turn's intent has to come from the intent classifier"""
    if not (turn.utterance or "").strip():
        return False
    if resolve_keypad_intent(turn.digits) is not None:
        return False
    if turn.state is DialogState.CLAIMS_OFFERED:
        return not answers_claims_offer(turn.utterance)
    return True


def next_action(intent: Intent, utterance: Optional[str], state: DialogState) -> Action:
    """Pick the next action for an already-classified utterance."""
    if intent is Intent.CLAIMS:
        if state is DialogState.CLAIMS_OFFERED:
            if is_confirmation(utterance):
                return TerminateAction(text=CLOSING_MESSAGE)
            if is_help_request(utterance):
                return TerminateAction(text=CLAIMS_TRANSFER_MESSAGE)
        return PromptAction(
            text=CLAIMS_SELF_SERVICE_MESSAGE,
            listen_next=True,
            next_state=DialogState.CLAIMS_OFFERED,
        )

    if intent is Intent.ONBOARDING:
        return TerminateAction(text=ONBOARDING_TRANSFER_MESSAGE)

    return reception_transfer_action()


def decide(turn: TurnInput, intent: Optional[Intent] = None) -> Action:
    """Turn-level entry point.

    ``intent`` is the classifier result and is only read when
    ``needs_classification(turn)`` is true; keypad shortcuts, empty turns
    and claims follow-ups that confirm or ask for a person are resolved
    here without it.
    """
    state = turn.state
    utterance = (turn.utterance or "").strip()

    keypad_intent = resolve_keypad_intent(turn.digits)
    if keypad_intent is not None:
        return next_action(keypad_intent, utterance, state)

    if state is DialogState.CLAIMS_OFFERED and utterance:
        # Only an onboarding request leaves the claims follow-up
        if intent is Intent.ONBOARDING and not answers_claims_offer(utterance):
            return next_action(Intent.ONBOARDING, utterance, state)
        return next_action(Intent.CLAIMS, utterance, state)

    if state is DialogState.START:
        return greeting_action()

    if not utterance:
        return reception_transfer_action()

    return next_action(intent or Intent.UNKNOWN, utterance, state)
