from __future__ import annotations

from typing import Any

import pytest
import requests

from dynamic_form_engine.errors import AcquisitionError, RegistrationError, SchemaError
from dynamic_form_engine.form_api_client import FormApiClient
from dynamic_form_engine.models.user import UserCredentials


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: str | None = None) -> None:
        self.status_code = status_code
        self._payload = payload
        self._text = text

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self) -> Any:
        if self._text is not None:
            raise ValueError("not json")
        return self._payload


class FakeSession:
    def __init__(self, *, post=None, get=None) -> None:
        self.calls: list[tuple[str, str, dict[str, Any]]] = []
        self._post = post or FakeResponse()
        self._get = get or FakeResponse()

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append(("POST", url, kwargs))
        if isinstance(self._post, Exception):
            raise self._post
        return self._post

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append(("GET", url, kwargs))
        if isinstance(self._get, Exception):
            raise self._get
        return self._get

    def close(self) -> None:
        pass


USER = UserCredentials(roll_number="RA2111", name="Ann")


def test_login_registers_then_fetches(form_payload):
    session = FakeSession(get=FakeResponse(payload=form_payload))
    client = FormApiClient(base_url="https://forms.test/", session=session, timeout=3)

    response = client.login(USER)

    assert response.form.id == "student-info-v1"
    post, get = session.calls
    assert post[0] == "POST"
    assert post[1] == "https://forms.test/create-user"
    assert post[2]["json"] == {"rollNumber": "RA2111", "name": "Ann"}
    assert post[2]["timeout"] == 3
    assert get[1] == "https://forms.test/get-form"
    assert get[2]["params"] == {"rollNumber": "RA2111"}


def test_registration_rejection_is_retryable_error():
    client = FormApiClient(session=FakeSession(post=FakeResponse(status_code=503)))
    with pytest.raises(RegistrationError) as excinfo:
        client.register_user(USER)
    assert excinfo.value.retryable
    assert excinfo.value.status_code == 503
    assert str(excinfo.value) == "Failed to register user"


def test_registration_network_failure():
    client = FormApiClient(session=FakeSession(post=requests.ConnectionError("down")))
    with pytest.raises(RegistrationError):
        client.register_user(USER)


def test_fetch_failure_is_acquisition_error():
    client = FormApiClient(session=FakeSession(get=FakeResponse(status_code=404)))
    with pytest.raises(AcquisitionError, match="Failed to fetch form data"):
        client.fetch_form("RA2111")

    client = FormApiClient(session=FakeSession(get=requests.Timeout("slow")))
    with pytest.raises(AcquisitionError):
        client.fetch_form("RA2111")


def test_malformed_form_is_schema_error_not_network_error():
    client = FormApiClient(session=FakeSession(get=FakeResponse(payload={"message": "ok", "form": {}})))
    with pytest.raises(SchemaError):
        client.fetch_form("RA2111")

    client = FormApiClient(session=FakeSession(get=FakeResponse(text="<html>")))
    with pytest.raises(SchemaError):
        client.fetch_form("RA2111")


def test_login_stops_when_registration_fails():
    session = FakeSession(post=FakeResponse(status_code=500))
    client = FormApiClient(session=session)
    with pytest.raises(RegistrationError):
        client.login(USER)
    assert [call[0] for call in session.calls] == ["POST"]
