"""FastAPI wrapper for the maskfield engine."""

from __future__ import annotations

import importlib.metadata
import json
import logging
import os
import threading
import time
import uuid
from pathlib import Path
from typing import Any, TypeVar

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from core.config.settings import EngineSettings, load_settings
from core.fields.base import FieldType
from core.fields.registry import (
    FIELD_TYPE_PARAMETERS,
    list_supported_field_types,
    parse_field_type,
)
from core.forms.loader import parse_form
from core.forms.runner import run_form
from core.orchestrator.session import FieldSession
from core.utils.errors import FieldTypeConfigError, FormDefinitionError, UnknownFieldTypeError

app = FastAPI(title="maskfield API", version="0.1.0")
logger = logging.getLogger("maskfield.api")

REQUEST_ID_HEADER = "X-Maskfield-Request-Id"
SETTINGS_PATH_ENV = "MASKFIELD_SETTINGS_PATH"

_RequestModel = TypeVar("_RequestModel", bound=BaseModel)


class FormatRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: str = Field(min_length=1)
    text: str
    final: bool = False
    required: bool = False


class ValidateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: str = Field(min_length=1)
    text: str
    required: bool = False


class FormRunRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    form: dict[str, Any]
    values: dict[str, str] = Field(default_factory=dict)


class ApiRequestError(Exception):
    def __init__(
        self,
        *,
        status_code: int,
        error_code: str,
        message: str,
        detail: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        self.detail = detail or {}


_settings_lock = threading.Lock()
_settings_cache: tuple[str | None, EngineSettings] | None = None


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    """Ensure every response has a request id header."""

    request_id = uuid.uuid4().hex
    request.state.request_id = request_id
    try:
        response = await call_next(request)
    except Exception:  # noqa: BLE001
        _log_event(
            logging.ERROR,
            "error",
            request_id,
            error_code="INTERNAL_ERROR",
            status_code=500,
            failure_stage="middleware",
        )
        response = _error_response(
            status_code=500,
            error_code="INTERNAL_ERROR",
            message="internal server error",
            request_id=request_id,
            detail={"path": request.url.path},
        )
    response.headers.setdefault(REQUEST_ID_HEADER, request_id)
    return response


@app.get("/healthz")
async def healthz() -> dict[str, str]:
    """Liveness endpoint."""

    return {"status": "ok"}


@app.get("/v1/meta")
async def meta_v1(request: Request) -> JSONResponse:
    """Supported field types and service version."""

    request_id = _request_id_from_request(request)
    payload = {
        "supported_field_types": list_supported_field_types(),
        "parameterized_field_types": {
            name: list(params) for name, params in FIELD_TYPE_PARAMETERS.items()
        },
        "version": app.version,
        "package_version": _package_version(),
    }
    return JSONResponse(status_code=200, headers={REQUEST_ID_HEADER: request_id}, content=payload)


@app.post("/v1/format")
async def format_v1(request: Request) -> JSONResponse:
    """Run raw text through a focused session, optionally finalizing it."""

    request_id = _request_id_from_request(request)
    started = time.perf_counter()
    try:
        body = _parse_body(await _read_json(request), FormatRequest)
        settings = _settings()
        field_type = _resolve_field_type(body.type, settings)
        _log_event(logging.INFO, "start", request_id, endpoint="format", field_type=body.type)

        session = FieldSession(field_type, required=body.required, settings=settings)
        session.set_focus(True)
        session.set_text(body.text)
        if body.final:
            session.set_focus(False)
        snapshot = session.snapshot()
        session.close()
    except ApiRequestError as exc:
        return _api_error(exc, request_id, endpoint="format")

    _log_event(
        logging.INFO,
        "done",
        request_id,
        endpoint="format",
        state=snapshot.state,
        elapsed_ms=_elapsed_ms(started),
    )
    return JSONResponse(
        status_code=200,
        headers={REQUEST_ID_HEADER: request_id},
        content=snapshot.model_dump(mode="json"),
    )


@app.post("/v1/validate")
async def validate_v1(request: Request) -> JSONResponse:
    """Result-validate already formatted text as an inactive field would."""

    request_id = _request_id_from_request(request)
    started = time.perf_counter()
    try:
        body = _parse_body(await _read_json(request), ValidateRequest)
        settings = _settings()
        field_type = _resolve_field_type(body.type, settings)
        _log_event(logging.INFO, "start", request_id, endpoint="validate", field_type=body.type)
    except ApiRequestError as exc:
        return _api_error(exc, request_id, endpoint="validate")

    if not body.text:
        valid = not body.required
        message = "" if valid else settings.required_message
    else:
        result = field_type.validate_result(body.text)
        valid, message = result.ok, result.error

    _log_event(
        logging.INFO,
        "done",
        request_id,
        endpoint="validate",
        valid=valid,
        elapsed_ms=_elapsed_ms(started),
    )
    return JSONResponse(
        status_code=200,
        headers={REQUEST_ID_HEADER: request_id},
        content={"type": body.type, "text": body.text, "valid": valid, "message": message},
    )


@app.post("/v1/forms/run")
async def forms_run_v1(request: Request) -> JSONResponse:
    """Run an inline form definition and report its submittability."""

    request_id = _request_id_from_request(request)
    started = time.perf_counter()
    try:
        body = _parse_body(await _read_json(request), FormRunRequest)
        settings = _settings()
        try:
            form = parse_form(body.form, settings=settings)
            _log_event(
                logging.INFO,
                "start",
                request_id,
                endpoint="forms.run",
                form=form.name,
                field_count=len(form.fields),
            )
            report = run_form(form, body.values, settings)
        except FormDefinitionError as exc:
            raise ApiRequestError(
                status_code=422,
                error_code="INVALID_FORM",
                message=str(exc),
                detail={"field": "form"},
            ) from exc
    except ApiRequestError as exc:
        return _api_error(exc, request_id, endpoint="forms.run")

    _log_event(
        logging.INFO,
        "done",
        request_id,
        endpoint="forms.run",
        submittable=report.submittable,
        elapsed_ms=_elapsed_ms(started),
    )
    return JSONResponse(
        status_code=200,
        headers={REQUEST_ID_HEADER: request_id},
        content=report.model_dump(mode="json"),
    )


def _request_id_from_request(request: Request) -> str:
    request_id = getattr(request.state, "request_id", None)
    if isinstance(request_id, str) and request_id:
        return request_id
    generated = uuid.uuid4().hex
    request.state.request_id = generated
    return generated


async def _read_json(request: Request) -> Any:
    raw = await request.body()
    try:
        return json.loads(raw or b"null")
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ApiRequestError(
            status_code=400,
            error_code="INVALID_JSON",
            message="request body must be valid JSON",
        ) from exc


def _parse_body(raw: Any, model: type[_RequestModel]) -> _RequestModel:
    if not isinstance(raw, dict):
        raise ApiRequestError(
            status_code=422,
            error_code="INVALID_REQUEST",
            message="request body must be a JSON object",
        )
    try:
        return model.model_validate(raw)
    except ValidationError as exc:
        raise ApiRequestError(
            status_code=422,
            error_code="INVALID_REQUEST",
            message="request schema validation failed",
            detail={"errors": json.loads(exc.json(include_url=False))},
        ) from exc


def _resolve_field_type(expression: str, settings: EngineSettings) -> FieldType:
    try:
        return parse_field_type(expression, settings=settings)
    except UnknownFieldTypeError as exc:
        raise ApiRequestError(
            status_code=400,
            error_code="UNKNOWN_FIELD_TYPE",
            message=str(exc),
            detail={"field": "type", "supported": list_supported_field_types()},
        ) from exc
    except FieldTypeConfigError as exc:
        raise ApiRequestError(
            status_code=422,
            error_code="INVALID_REQUEST",
            message=str(exc),
            detail={"field": "type"},
        ) from exc


def _settings() -> EngineSettings:
    global _settings_cache

    configured = os.environ.get(SETTINGS_PATH_ENV) or None
    with _settings_lock:
        if _settings_cache is not None and _settings_cache[0] == configured:
            return _settings_cache[1]
        try:
            settings = load_settings(Path(configured) if configured else None)
        except ValueError as exc:
            raise ApiRequestError(
                status_code=500,
                error_code="SETTINGS_ERROR",
                message=str(exc),
                detail={"env": SETTINGS_PATH_ENV},
            ) from exc
        _settings_cache = (configured, settings)
        return settings


def _api_error(exc: ApiRequestError, request_id: str, *, endpoint: str) -> JSONResponse:
    _log_event(
        logging.ERROR,
        "error",
        request_id,
        endpoint=endpoint,
        error_code=exc.error_code,
        status_code=exc.status_code,
    )
    return _error_response(
        status_code=exc.status_code,
        error_code=exc.error_code,
        message=exc.message,
        request_id=request_id,
        detail=exc.detail,
    )


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


def _dump_json(payload: dict[str, Any]) -> str:
    return json.dumps(payload, ensure_ascii=False, sort_keys=True, separators=(",", ":"))


def _package_version() -> str:
    try:
        return importlib.metadata.version("maskfield")
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def _error_response(
    *,
    status_code: int,
    error_code: str,
    message: str,
    request_id: str,
    detail: dict[str, Any] | None = None,
) -> JSONResponse:
    payload_detail = dict(detail or {})
    payload_detail["request_id"] = request_id

    return JSONResponse(
        status_code=status_code,
        headers={REQUEST_ID_HEADER: request_id},
        content={
            "error_code": error_code,
            "message": message,
            "request_id": request_id,
            "detail": payload_detail,
        },
    )


def _log_event(level: int, event: str, request_id: str, **fields: Any) -> None:
    payload = {
        "event": event,
        "request_id": request_id,
        **fields,
    }
    logger.log(level, _dump_json(payload))
