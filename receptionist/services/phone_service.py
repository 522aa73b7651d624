"""
Ascent receptionist phone service.
- Twilio voice webhooks, one caller utterance per request
- Keyword-first intent classification with a bounded OpenAI fallback
- Dialog context round-tripped on the <Gather> callback URL, nothing stored
"""

import logging
from datetime import datetime
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from ..adapters.call_events import CallEventLogger
from ..adapters.dialog_manager import decide, needs_classification, reception_transfer_action
from ..adapters.intent_classifier import IntentClassifier, OpenAITextClassifier
from ..adapters.twilio_webhook import (
    TwilioSignatureVerifier,
    expected_request_url,
    parse_turn,
    render_action,
)
from ..config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

TWIML_MEDIA_TYPE = "application/xml"


def configure_logging(log_level: str = "INFO") -> None:
    """Set up logging configuration."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def build_intent_classifier(settings: Settings) -> IntentClassifier:
    text_classifier = None
    if settings.OPENAI_API_KEY:
        text_classifier = OpenAITextClassifier(
            api_key=settings.OPENAI_API_KEY,
            model=settings.CLASSIFIER_MODEL,
            timeout_sec=settings.CLASSIFIER_TIMEOUT_SEC,
        )
    return IntentClassifier(text_classifier=text_classifier, timeout_sec=settings.CLASSIFIER_TIMEOUT_SEC)


def create_app(settings: Optional[Settings] = None,
               classifier: Optional[IntentClassifier] = None,
               verifier: Optional[TwilioSignatureVerifier] = None,
               events: Optional[CallEventLogger] = None) -> FastAPI:
    """Build the FastAPI app with its collaborators injected"""
    settings = settings or get_settings()
    classifier = classifier or build_intent_classifier(settings)
    verifier = verifier or TwilioSignatureVerifier(settings.TWILIO_AUTH_TOKEN)
    events = events or CallEventLogger()

    app = FastAPI(title="Ascent Receptionist")
    app.state.settings = settings
    app.state.classifier = classifier

    @app.on_event("startup")
    async def startup_event():
        if settings.VALIDATE_TWILIO_SIGNATURE and not settings.TWILIO_AUTH_TOKEN:
            logger.warning("TWILIO_AUTH_TOKEN not set; every webhook will be rejected")
        if not settings.classifier_configured:
            logger.warning("OPENAI_API_KEY not set; utterances without keywords go to reception")
        logger.info("✅ Receptionist service startup completed")

    @app.on_event("shutdown")
    async def shutdown_event():
        await classifier.close()
        logger.info("Receptionist service shut down")

    async def verified_form(request: Request):
        """Read the webhook form and reject it unless Twilio signed it"""
        form = await request.form()
        params = {k: v for k, v in form.items()}
        if not settings.VALIDATE_TWILIO_SIGNATURE:
            return params

        if settings.PUBLIC_BASE_URL:
            url = expected_request_url(settings.PUBLIC_BASE_URL, request.url.path, request.url.query)
        else:
            url = str(request.url)
        signature = request.headers.get("X-Twilio-Signature", "")
        if not verifier.verify(url, params, signature):
            events.rejected(params.get("CallSid", ""), "missing signature" if not signature else "invalid signature")
            raise HTTPException(status_code=403, detail="Invalid Twilio signature")
        return params

    async def handle_turn(request: Request, params: dict, expects_speech: bool) -> Response:
        call_sid = params.get("CallSid", "")
        try:
            turn = parse_turn(params, request.query_params, expects_speech=expects_speech)
            events.turn_received(turn, request.url.path)

            intent = None
            if needs_classification(turn):
                intent, source = await classifier.classify_with_source(turn.utterance, turn.call_sid)
                events.intent_classified(turn.call_sid, intent, source, turn.utterance)

            action = decide(turn, intent)
        except Exception as e:
            events.error(call_sid, e)
            action = reception_transfer_action()

        events.action_chosen(call_sid, action)
        xml = render_action(
            action,
            gather_path=settings.GATHER_ENDPOINT,
            voice=settings.TTS_VOICE,
            language=settings.LANGUAGE,
            gather_timeout=settings.GATHER_TIMEOUT_SEC,
        )
        return Response(content=xml, media_type=TWIML_MEDIA_TYPE)

    @app.get("/")
    async def index_page():
        return PlainTextResponse("Ascent receptionist is running")

    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "timestamp": datetime.now().isoformat(),
            "twilio_configured": settings.twilio_configured,
            "classifier_configured": settings.classifier_configured,
        }

    @app.post(settings.VOICE_ENDPOINT)
    async def voice_webhook(request: Request, params: dict = Depends(verified_form)):
        """Incoming call: greet the caller unless they already said or pressed something"""
        return await handle_turn(request, params, expects_speech=False)

    @app.post(settings.GATHER_ENDPOINT)
    async def gather_webhook(request: Request, params: dict = Depends(verified_form)):
        """<Gather> callback: one caller utterance per request"""
        return await handle_turn(request, params, expects_speech=True)

    if settings.ENABLE_TEST_ENDPOINTS:
        @app.post("/test-intent")
        async def test_intent(request: Request):
            """Test endpoint for intent classification without Twilio."""
            try:
                data = await request.json()
            except ValueError:
                data = {}
            text = (data or {}).get("text", "") if isinstance(data, dict) else ""
            if not str(text).strip():
                return JSONResponse({"error": "No text provided"}, status_code=400)

            intent, source = await classifier.classify_with_source(str(text))
            return {
                "input_text": text,
                "intent": intent.value,
                "source": source,
                "timestamp": datetime.now().isoformat(),
            }

    return app


app = create_app()


def main() -> None:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    uvicorn.run(app, host=settings.SERVER_HOST, port=settings.SERVER_PORT)


if __name__ == "__main__":
    main()
