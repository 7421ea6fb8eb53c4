from __future__ import annotations

import logging
from typing import Any

import requests

from .errors import AcquisitionError, RegistrationError, SchemaError
from .models.schema import FormResponse
from .models.user import UserCredentials
from .schema_loader import load_form_response

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://dynamic-form-generator-9rl7.onrender.com"


class FormApiClient:
    """Client for the service that registers users and hands out their form."""

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Root URL of the form service
            timeout: Per-request timeout in seconds
            session: Optional pre-configured requests session
        """
        self.base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    def close(self) -> None:
        self._session.close()

    def register_user(self, user: UserCredentials) -> None:
        """Register a user with the form service.

        Raises:
            RegistrationError: the request failed or was rejected
        """
        url = f"{self.base_url}/create-user"
        try:
            response = self._session.post(url, json=user.to_payload(), timeout=self._timeout)
        except requests.RequestException as exc:
            logger.error("User registration request failed", extra={"url": url, "error": str(exc)})
            raise RegistrationError("Failed to register user") from exc

        if not response.ok:
            logger.error(
                "User registration rejected",
                extra={"url": url, "status_code": response.status_code},
            )
            raise RegistrationError("Failed to register user", status_code=response.status_code)

        logger.info("Registered user", extra={"roll_number": user.roll_number})

    def fetch_form(self, roll_number: str) -> FormResponse:
        """Fetch the form assigned to a registered roll number.

        Raises:
            AcquisitionError: the request failed or was rejected
            SchemaError: the response body is not a well-formed form
        """
        url = f"{self.base_url}/get-form"
        try:
            response = self._session.get(url, params={"rollNumber": roll_number}, timeout=self._timeout)
        except requests.RequestException as exc:
            logger.error("Form fetch request failed", extra={"url": url, "error": str(exc)})
            raise AcquisitionError("Failed to fetch form data") from exc

        if not response.ok:
            logger.error(
                "Form fetch rejected",
                extra={"url": url, "status_code": response.status_code},
            )
            raise AcquisitionError("Failed to fetch form data", status_code=response.status_code)

        payload = self._decode(response)
        form_response = load_form_response(payload)
        logger.info(
            "Fetched form",
            extra={
                "roll_number": roll_number,
                "form_id": form_response.form.id,
                "sections_count": len(form_response.form.sections),
            },
        )
        return form_response

    def login(self, user: UserCredentials) -> FormResponse:
        self.register_user(user)
        return self.fetch_form(user.roll_number)

    def _decode(self, response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise SchemaError("Form service returned a body that is not JSON") from exc


__all__ = ["FormApiClient", "DEFAULT_BASE_URL"]
