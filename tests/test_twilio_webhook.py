import pytest
import xml.etree.ElementTree as ET
from twilio.request_validator import RequestValidator
from receptionist.adapters.twilio_webhook import (
    TwilioSignatureVerifier,
    build_context_url,
    expected_request_url,
    parse_turn,
    render_action,
)
from receptionist.models import DialogState, PromptAction, TerminateAction
from receptionist.prompts.prompt_layer import (
    CLAIMS_SELF_SERVICE_MESSAGE,
    CLOSING_MESSAGE,
    GREETING,
)


def _parse(xml: str) -> ET.Element:
    return ET.fromstring(xml)


class TestParseTurn:
    """Unit tests for webhook field extraction"""

    def test_initial_call_without_speech(self):
        """The first webhook of a call carries no SpeechResult"""
        turn = parse_turn({"CallSid": "CA123", "From": "+15551234567"}, {})

        assert turn.call_sid == "CA123"
        assert turn.caller == "+15551234567"
        assert turn.utterance is None
        assert turn.digits is None
        assert turn.context_token is None
        assert turn.state == DialogState.START

    def test_gather_callback_without_speech(self):
        """A gather callback with nothing heard is an empty utterance"""
        turn = parse_turn({"CallSid": "CA123"}, {}, expects_speech=True)
        assert turn.utterance == ""
        assert not turn.has_input

    def test_speech_and_context(self):
        """Speech is stripped and the context token comes from the query string"""
        turn = parse_turn(
            {"CallSid": "CA123", "SpeechResult": "  Yes, that helps.  "},
            {"context": "claims_offered"},
            expects_speech=True,
        )

        assert turn.utterance == "Yes, that helps."
        assert turn.context_token == "claims_offered"
        assert turn.state == DialogState.CLAIMS_OFFERED
        assert turn.has_input

    def test_digits(self):
        """Keypad input is read from Digits"""
        turn = parse_turn({"CallSid": "CA123", "Digits": "2"}, None)
        assert turn.digits == "2"
        assert turn.has_input

    def test_blank_digits_and_context(self):
        """Blank fields are treated as absent"""
        turn = parse_turn({"Digits": "  "}, {"context": ""})
        assert turn.digits is None
        assert turn.context_token is None
        assert turn.call_sid == ""


class TestRenderAction:
    """Unit tests for TwiML rendering"""

    def test_greeting_prompt(self):
        """A listening prompt nests the speech inside <Gather>"""
        action = PromptAction(text=GREETING, listen_next=True, next_state=None)

        root = _parse(render_action(action, gather_path="/gather", voice="alice", gather_timeout=6))

        gather = root.find("Gather")
        assert gather is not None
        assert gather.get("action") == "/gather"
        assert gather.get("method") == "POST"
        assert gather.get("speechTimeout") == "auto"
        assert gather.get("timeout") == "6"
        assert gather.get("input") == "speech dtmf"
        say = gather.find("Say")
        assert say.text == GREETING
        assert say.get("voice") == "alice"

        # Listening is the only directive; silence comes back to the callback
        assert gather.get("actionOnEmptyResult") == "true"
        assert [child.tag for child in root] == ["Gather"]
        assert root.find("Hangup") is None

    def test_prompt_carries_context_token(self):
        """The next context token rides on the gather callback URL"""
        action = PromptAction(text=CLAIMS_SELF_SERVICE_MESSAGE, next_state=DialogState.CLAIMS_OFFERED)

        root = _parse(render_action(action, gather_path="/gather"))

        gather = root.find("Gather")
        assert gather.get("action") == "/gather?context=claims_offered"
        assert gather.find("Say").text == CLAIMS_SELF_SERVICE_MESSAGE

    def test_terminate(self):
        """A terminal action speaks, pauses and hangs up"""
        root = _parse(render_action(TerminateAction(text=CLOSING_MESSAGE)))

        assert [child.tag for child in root] == ["Say", "Pause", "Hangup"]
        assert root.find("Say").text == CLOSING_MESSAGE
        assert root.find("Gather") is None

    def test_prompt_without_listening_hangs_up(self):
        """A prompt that does not listen ends the call like a terminal action"""
        root = _parse(render_action(PromptAction(text="Goodbye for now.", listen_next=False)))

        assert [child.tag for child in root] == ["Say", "Pause", "Hangup"]

    def test_text_preserved_exactly(self):
        """Prompt copy is passed through untouched"""
        text = "We're open 9 & 5 <weekdays>, \"really\""
        root = _parse(render_action(TerminateAction(text=text)))
        assert root.find("Say").text == text

    def test_build_context_url(self):
        assert build_context_url("/gather", None) == "/gather"
        assert build_context_url("/gather", "claims_offered") == "/gather?context=claims_offered"


class TestSignatureVerifier:
    """Unit tests for X-Twilio-Signature checks"""

    @pytest.fixture
    def auth_token(self):
        return "test_auth_token"

    @pytest.fixture
    def verifier(self, auth_token):
        return TwilioSignatureVerifier(auth_token)

    def test_valid_signature(self, verifier, auth_token):
        url = "https://example.com/gather?context=claims_offered"
        params = {"CallSid": "CA123", "SpeechResult": "yes"}
        signature = RequestValidator(auth_token).compute_signature(url, params)

        assert verifier.verify(url, params, signature) is True

    def test_tampered_body(self, verifier, auth_token):
        url = "https://example.com/gather"
        signature = RequestValidator(auth_token).compute_signature(url, {"SpeechResult": "yes"})

        assert verifier.verify(url, {"SpeechResult": "no"}, signature) is False

    def test_missing_signature(self, verifier):
        assert verifier.verify("https://example.com/voice", {}, "") is False
        assert verifier.verify("https://example.com/voice", {}, None) is False

    def test_no_auth_token(self):
        verifier = TwilioSignatureVerifier("")
        assert verifier.verify("https://example.com/voice", {}, "abc") is False

    def test_expected_request_url(self):
        assert expected_request_url("https://abc.ngrok.app/", "/voice") == "https://abc.ngrok.app/voice"
        assert (
            expected_request_url("https://abc.ngrok.app", "/gather", "context=claims_offered")
            == "https://abc.ngrok.app/gather?context=claims_offered"
        )
