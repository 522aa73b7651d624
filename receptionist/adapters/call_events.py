import json
import logging
from typing import Any, Optional

from ..models import Action, Intent, TurnInput

logger = logging.getLogger(__name__)


class CallEventLogger:
    """Emits one structured log line per call event.

    Kept apart from the dialog logic so decisions stay side-effect free; the
    service emits events around each decision.
    """

    def __init__(self, event_logger: Optional[logging.Logger] = None):
        self.logger = event_logger or logger

    def emit(self, event: str, call_sid: str = "", level: int = logging.INFO, **fields: Any) -> None:
        payload = {"event": event, "call_sid": call_sid or None}
        payload.update(fields)
        try:
            message = json.dumps(payload, default=str, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            message = f"{event} (unserializable fields: {e})"
        self.logger.log(level, f"📞 {message}")

    def turn_received(self, turn: TurnInput, endpoint: str) -> None:
        self.emit(
            "call.turn_received",
            turn.call_sid,
            endpoint=endpoint,
            caller=turn.caller,
            utterance=turn.utterance,
            digits=turn.digits,
            context=turn.context_token,
        )

    def intent_classified(self, call_sid: str, intent: Intent, source: str, utterance: Optional[str]) -> None:
        level = logging.WARNING if source == "model_failed" else logging.INFO
        self.emit("intent.classified", call_sid, level=level, intent=intent.value,
                  source=source, utterance=utterance)

    def action_chosen(self, call_sid: str, action: Action) -> None:
        self.emit(
            "dialog.action",
            call_sid,
            kind=action.kind,
            listen_next=getattr(action, "listen_next", False),
            next_context=getattr(action, "next_context_token", None),
        )

    def rejected(self, call_sid: str, reason: str) -> None:
        self.emit("webhook.rejected", call_sid, level=logging.WARNING, reason=reason)

    def error(self, call_sid: str, error: Exception) -> None:
        self.emit("webhook.error", call_sid, level=logging.ERROR, error=repr(error))
