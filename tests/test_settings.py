import pytest
from pydantic import ValidationError
from receptionist.config.settings import Settings


class TestSettings:
    """Unit tests for environment-driven settings"""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for var in ["CLASSIFIER_TIMEOUT_SEC", "SERVER_PORT", "PORT", "VOICE_ENDPOINT",
                    "GATHER_ENDPOINT", "VALIDATE_TWILIO_SIGNATURE", "OPENAI_API_KEY"]:
            monkeypatch.delenv(var, raising=False)

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.VOICE_ENDPOINT == "/voice"
        assert settings.GATHER_ENDPOINT == "/gather"
        assert settings.CLASSIFIER_TIMEOUT_SEC == 4.0
        assert settings.CLASSIFIER_TIMEOUT_SEC < settings.GATHER_TIMEOUT_SEC
        assert settings.VALIDATE_TWILIO_SIGNATURE is True
        assert settings.ENABLE_TEST_ENDPOINTS is False
        assert settings.SERVER_PORT == 5001

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("CLASSIFIER_TIMEOUT_SEC", "2.5")
        monkeypatch.setenv("VALIDATE_TWILIO_SIGNATURE", "false")
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

        settings = Settings(_env_file=None)

        assert settings.CLASSIFIER_TIMEOUT_SEC == 2.5
        assert settings.VALIDATE_TWILIO_SIGNATURE is False
        assert settings.classifier_configured is True

    def test_port_alias(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        assert Settings(_env_file=None).SERVER_PORT == 8080

    def test_classifier_timeout_must_be_bounded(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, CLASSIFIER_TIMEOUT_SEC=0)
        with pytest.raises(ValidationError):
            Settings(_env_file=None, CLASSIFIER_TIMEOUT_SEC=30)

    def test_twilio_configured(self):
        settings = Settings(_env_file=None, TWILIO_ACCOUNT_SID="AC123", TWILIO_AUTH_TOKEN="token")
        assert settings.twilio_configured is True
