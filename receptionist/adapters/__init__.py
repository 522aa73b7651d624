"""
Adapter modules for the receptionist call flow.

This module contains adapters for:
- Intent classification (keywords first, OpenAI fallback)
- The dialog state machine
- Twilio webhook parsing, TwiML rendering and signature checks
- Structured call event logging
"""

from . import intent_classifier
from . import dialog_manager
from . import twilio_webhook
from . import call_events

__all__ = [
    'intent_classifier',
    'dialog_manager',
    'twilio_webhook',
    'call_events',
]
