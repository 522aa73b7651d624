"""
Ascent Receptionist Package

Answers inbound calls for Ascent Administrative Services and routes callers:
- Turn-by-turn Twilio voice webhooks
- Keyword-first intent classification with a model fallback
- A shallow, stateless dialog state machine
"""

__version__ = "1.0.0"
__author__ = "Ascent Receptionist Team"
