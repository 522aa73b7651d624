#!/usr/bin/env python3
"""
Simulate a phone call against the receptionist dialog, without Twilio.
Each line you type is one caller turn; the context token is carried between
turns exactly as the <Gather> callback URL would carry it.

Type 'silence' for a turn where nothing was heard, a single digit for a
keypad press, or 'exit' to hang up.
"""

import asyncio
import logging
import sys
import uuid
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from receptionist.adapters.call_events import CallEventLogger
from receptionist.adapters.dialog_manager import decide, needs_classification
from receptionist.adapters.twilio_webhook import render_action
from receptionist.config.settings import get_settings
from receptionist.models import PromptAction, TurnInput
from receptionist.services.phone_service import build_intent_classifier, configure_logging

logger = logging.getLogger("simulate_call")


async def run_call(show_twiml: bool = False) -> None:
    settings = get_settings()
    classifier = build_intent_classifier(settings)
    events = CallEventLogger()
    call_sid = f"CA_SIM_{uuid.uuid4().hex[:12]}"

    print(f"📱 Call SID: {call_sid}")
    turn = TurnInput(call_sid=call_sid, caller="+15550000000")

    while True:
        intent = None
        if needs_classification(turn):
            intent, source = await classifier.classify_with_source(turn.utterance, call_sid)
            events.intent_classified(call_sid, intent, source, turn.utterance)

        action = decide(turn, intent)
        events.action_chosen(call_sid, action)

        if show_twiml:
            print(render_action(action, gather_path=settings.GATHER_ENDPOINT, voice=settings.TTS_VOICE,
                                language=settings.LANGUAGE, gather_timeout=settings.GATHER_TIMEOUT_SEC))
        print(f"Receptionist: {action.text}\n")

        if not (isinstance(action, PromptAction) and action.listen_next):
            print("📴 Call ended")
            return

        try:
            said = input("Caller: ").strip()
        except EOFError:
            return
        if said.lower() in ("exit", "quit"):
            print("📴 Caller hung up")
            return

        digits = said if said.isdigit() and len(said) == 1 else None
        utterance = "" if said.lower() == "silence" or digits else said
        turn = TurnInput(
            call_sid=call_sid,
            caller=turn.caller,
            utterance=utterance,
            digits=digits,
            context_token=action.next_context_token,
        )


def main():
    configure_logging(get_settings().LOG_LEVEL)
    asyncio.run(run_call(show_twiml="--twiml" in sys.argv[1:]))


if __name__ == "__main__":
    main()
