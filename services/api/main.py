from __future__ import annotations

import asyncio
import logging
import os
import uuid
from typing import Union

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from dynamic_form_engine.controller import FormController
from dynamic_form_engine.errors import CollaboratorError, SchemaError, UnknownFieldError
from dynamic_form_engine.form_api_client import DEFAULT_BASE_URL, FormApiClient
from dynamic_form_engine.logging_config import set_trace_id, setup_logging
from dynamic_form_engine.models.schema import FormSchema
from dynamic_form_engine.models.state import FormState, Progress
from dynamic_form_engine.models.user import UserCredentials, validate_login
from dynamic_form_engine.session_store import SessionNotFoundError, SessionStore


class LoginRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    roll_number: str = Field(default="", alias="rollNumber")
    name: str = ""


class SetValueRequest(BaseModel):
    value: Union[bool, str]


class SessionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(alias="sessionId")
    message: str | None = None
    form: FormSchema
    state: FormState
    progress: Progress


class StateResponse(BaseModel):
    state: FormState
    progress: Progress


# Environment configuration
ENVIRONMENT = os.getenv("ENVIRONMENT", "dev")
PROJECT_ID = os.getenv("PROJECT_ID")
FORM_API_BASE_URL = os.getenv("FORM_API_BASE_URL", DEFAULT_BASE_URL)
FORM_API_TIMEOUT = float(os.getenv("FORM_API_TIMEOUT", "10"))
STRICT_FIELDS = os.getenv("STRICT_FIELDS", "").lower() in {"1", "true", "yes"}

# Setup logging
setup_logging(environment=ENVIRONMENT, project_id=PROJECT_ID)
logger = logging.getLogger(__name__)

app = FastAPI(title="Dynamic Form Engine API", version="0.1.0")

form_api = FormApiClient(base_url=FORM_API_BASE_URL, timeout=FORM_API_TIMEOUT)
session_store = SessionStore()


@app.middleware("http")
async def assign_trace_id(request: Request, call_next):
    set_trace_id(request.headers.get("X-Cloud-Trace-Context") or str(uuid.uuid4()))
    return await call_next(request)


@app.post("/v1/sessions", response_model=SessionResponse)
async def create_session(request: LoginRequest) -> SessionResponse:
    login_errors = validate_login(request.roll_number, request.name)
    if login_errors:
        raise HTTPException(status_code=400, detail={"errors": login_errors})

    user = UserCredentials(roll_number=request.roll_number, name=request.name)
    try:
        form_response = await asyncio.to_thread(form_api.login, user)
        controller = FormController.load_schema(form_response.form, strict_fields=STRICT_FIELDS)
    except SchemaError as exc:
        logger.error("Received malformed form schema", extra={"roll_number": user.roll_number, "error": str(exc)})
        raise HTTPException(status_code=422, detail=str(exc))
    except CollaboratorError as exc:
        raise HTTPException(status_code=502, detail=str(exc))

    session_id = session_store.create_session(controller, roll_number=user.roll_number)
    logger.info("Created form session", extra={"session_id": session_id, "form_id": controller.schema.id})
    return SessionResponse(
        session_id=session_id,
        message=form_response.message,
        form=controller.schema,
        state=controller.state,
        progress=controller.progress,
    )


@app.get("/v1/sessions/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str) -> SessionResponse:
    controller = session_store.get_session(session_id)
    if controller is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return SessionResponse(
        session_id=session_id,
        form=controller.schema,
        state=controller.state,
        progress=controller.progress,
    )


@app.put("/v1/sessions/{session_id}/values/{field_id}", response_model=StateResponse)
async def set_value(session_id: str, field_id: str, request: SetValueRequest) -> StateResponse:
    try:
        return _run(session_id, lambda controller: controller.set_value(field_id, request.value))
    except UnknownFieldError as exc:
        raise HTTPException(status_code=404, detail=str(exc))


@app.post("/v1/sessions/{session_id}/next", response_model=StateResponse)
async def go_next(session_id: str) -> StateResponse:
    return _run(session_id, FormController.go_next)


@app.post("/v1/sessions/{session_id}/previous", response_model=StateResponse)
async def go_previous(session_id: str) -> StateResponse:
    return _run(session_id, FormController.go_previous)


@app.post("/v1/sessions/{session_id}/submit", response_model=StateResponse)
async def submit(session_id: str) -> StateResponse:
    return _run(session_id, FormController.submit)


def _run(session_id: str, operation) -> StateResponse:
    def apply(controller: FormController) -> StateResponse:
        state = operation(controller)
        return StateResponse(state=state, progress=controller.progress)

    try:
        return session_store.run(session_id, apply)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Session not found")


@app.get("/health")
async def healthcheck() -> JSONResponse:
    return JSONResponse({"status": "ok"})
