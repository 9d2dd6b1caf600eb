"""
Unit tests for the identity bootstrap.
"""

import base64
import json

import pytest
from google.auth import exceptions as auth_exceptions

from session_booking import auth
from session_booking.auth import ANONYMOUS, TOKEN, establish, identity_from_token
from session_booking.config import Config


def _b64(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode()


def make_token(claims):
    header = _b64(json.dumps({"alg": "RS256", "typ": "JWT"}).encode())
    payload = _b64(json.dumps(claims).encode())
    return f"{header}.{payload}.{_b64(b'signature')}"


@pytest.fixture
def config(monkeypatch):
    for name in ("APP_ID", "GCP_PROJECT", "INITIAL_AUTH_TOKEN", "AUTH_TOKEN_SECRET"):
        monkeypatch.delenv(name, raising=False)
    return Config(load_env_file=False)


@pytest.fixture
def adc(monkeypatch):
    monkeypatch.setattr(auth.google.auth, "default", lambda: (object(), "adc-project"))


@pytest.fixture
def no_adc(monkeypatch):
    def _fail():
        raise auth_exceptions.DefaultCredentialsError("no credentials")
    monkeypatch.setattr(auth.google.auth, "default", _fail)


class TestEstablish:
    """Test cases for establish()."""

    def test_token_identity(self, config, no_adc):
        identity = establish(config, token_loader=lambda c: make_token({"uid": "staff-7"}))
        assert identity.uid == "staff-7"
        assert identity.method == TOKEN
        assert not identity.is_anonymous

    def test_no_token_signs_in_anonymously(self, config, adc):
        identity = establish(config, token_loader=lambda c: None)
        assert identity.method == ANONYMOUS
        assert identity.project == "adc-project"
        assert identity.uid.startswith("anon-")

    def test_bad_token_falls_back_to_anonymous(self, config, adc):
        identity = establish(config, token_loader=lambda c: "not-a-jwt")
        assert identity.is_anonymous

    def test_token_loader_failure_falls_back(self, config, adc):
        def _loader(c):
            raise auth_exceptions.DefaultCredentialsError("secret unreachable")
        assert establish(config, token_loader=_loader).is_anonymous

    def test_both_fail_returns_none(self, config, no_adc):
        assert establish(config, token_loader=lambda c: "not-a-jwt") is None

    def test_configured_project_wins(self, monkeypatch, adc):
        monkeypatch.setenv("GCP_PROJECT", "configured")
        identity = establish(Config(load_env_file=False), token_loader=lambda c: None)
        assert identity.project == "configured"


class TestTokens:
    """Test cases for token parsing and loading."""

    def test_sub_claim(self):
        assert identity_from_token(make_token({"sub": "u-1"})).uid == "u-1"

    def test_token_without_uid(self):
        with pytest.raises(ValueError):
            identity_from_token(make_token({"aud": "x"}))

    def test_initial_token_used_directly(self, monkeypatch):
        monkeypatch.setenv("INITIAL_AUTH_TOKEN", "abc")
        assert auth.load_provisioned_token(Config(load_env_file=False)) == "abc"

    def test_no_token_sources(self, config):
        assert auth.load_provisioned_token(config) is None

    def test_secret_manager_lookup(self, monkeypatch, adc):
        requested = []

        class FakePayload:
            data = b"secret-token"

        class FakeResponse:
            payload = FakePayload()

        class FakeSecretClient:
            def access_secret_version(self, name):
                requested.append(name)
                return FakeResponse()

        monkeypatch.delenv("INITIAL_AUTH_TOKEN", raising=False)
        monkeypatch.delenv("GCP_PROJECT", raising=False)
        monkeypatch.setenv("AUTH_TOKEN_SECRET", "booking-token")
        monkeypatch.setattr(auth.secretmanager, "SecretManagerServiceClient", FakeSecretClient)
        token = auth.load_provisioned_token(Config(load_env_file=False))
        assert token == "secret-token"
        assert requested == ["projects/adc-project/secrets/booking-token/versions/latest"]
