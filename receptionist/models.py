from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel

CLAIMS_OFFERED_TOKEN = "claims_offered"


class Intent(str, Enum):
    CLAIMS = "claims"
    ONBOARDING = "onboarding"
    UNKNOWN = "unknown"


class DialogState(str, Enum):
    """Dialog position of a call. Only CLAIMS_OFFERED travels on the wire."""

    START = "start"
    LISTENING = "listening"
    CLAIMS_OFFERED = "claims_offered"

    @classmethod
    def from_token(cls, token: Optional[str]) -> "DialogState":
        """Read the round-tripped context token; unknown tokens count as no token"""
        if token and token.strip().lower() == CLAIMS_OFFERED_TOKEN:
            return cls.CLAIMS_OFFERED
        return cls.LISTENING

    @property
    def token(self) -> Optional[str]:
        if self is DialogState.CLAIMS_OFFERED:
            return CLAIMS_OFFERED_TOKEN
        return None


class TurnInput(BaseModel):
    call_sid: str = ""
    caller: str = ""
    # None means the field was absent, "" means nothing was heard
    utterance: Optional[str] = None
    digits: Optional[str] = None
    context_token: Optional[str] = None

    @property
    def state(self) -> DialogState:
        state = DialogState.from_token(self.context_token)
        if state is DialogState.LISTENING and self.utterance is None and not (self.digits or "").strip():
            return DialogState.START
        return state

    @property
    def has_input(self) -> bool:
        return bool((self.utterance or "").strip() or (self.digits or "").strip())


class PromptAction(BaseModel):
    kind: Literal["prompt"] = "prompt"
    text: str
    listen_next: bool = True
    next_state: Optional[DialogState] = None

    @property
    def next_context_token(self) -> Optional[str]:
        return self.next_state.token if self.next_state else None


class TerminateAction(BaseModel):
    kind: Literal["terminate"] = "terminate"
    text: str


Action = Union[PromptAction, TerminateAction]
