"""
Caller-facing copy and model prompts.

Prompt text is user-facing and is rendered verbatim into TwiML.
"""

from .prompt_layer import (
    INTENT_CLASSIFICATION_PROMPT,
    GREETING,
    CLAIMS_SELF_SERVICE_MESSAGE,
    CLOSING_MESSAGE,
    CLAIMS_TRANSFER_MESSAGE,
    ONBOARDING_TRANSFER_MESSAGE,
    RECEPTION_TRANSFER_MESSAGE,
)

__all__ = [
    'INTENT_CLASSIFICATION_PROMPT',
    'GREETING',
    'CLAIMS_SELF_SERVICE_MESSAGE',
    'CLOSING_MESSAGE',
    'CLAIMS_TRANSFER_MESSAGE',
    'ONBOARDING_TRANSFER_MESSAGE',
    'RECEPTION_TRANSFER_MESSAGE',
]
