"""Request-body validation shared by every write endpoint.

``validate_body(schema)`` builds a FastAPI dependency that reads the body
(JSON, or form fields of a multipart/urlencoded request), validates it with
the given pydantic schema and hands the typed model to the route. Bad input
becomes a 400 with per-field details. Anything else, including a missing
schema, is left to the catch-all 500 handler.
"""
import json
import logging
from typing import Any, Dict, Type

from fastapi import Request
from pydantic import BaseModel, ValidationError
from starlette.datastructures import UploadFile

from moovsafe.core.errors import RequestValidationFailed, validation_details

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


def is_form_request(request: Request) -> bool:
    content_type = request.headers.get("content-type", "")
    return content_type.startswith(FORM_CONTENT_TYPES)


async def read_form(request: Request):
    """Parse the form once per request; later readers reuse it."""
    form = getattr(request.state, "form", None)
    if form is None:
        form = await request.form()
        request.state.form = form
    return form


def form_to_payload(form) -> Dict[str, Any]:
    """Collapse form fields into a plain dict, skipping file parts.

    Repeated keys become lists; a single occurrence stays a scalar.
    """
    payload: Dict[str, Any] = {}
    for key in form.keys():
        values = [v for v in form.getlist(key) if not isinstance(v, UploadFile)]
        if not values:
            continue
        name = key[:-2] if key.endswith("[]") else key
        payload[name] = values if len(values) > 1 else values[0]
    return payload


async def read_payload(request: Request) -> Any:
    if is_form_request(request):
        return form_to_payload(await read_form(request))

    body = await request.body()
    if not body:
        return {}
    try:
        return json.loads(body)
    except ValueError:
        raise RequestValidationFailed(details=[{"field": "body", "message": "Malformed JSON body"}])


def validate_body(schema: Type[BaseModel]):
    """Return a dependency that validates the request body against ``schema``."""

    async def dependency(request: Request) -> BaseModel:
        payload = await read_payload(request)
        try:
            return schema.model_validate(payload)
        except ValidationError as e:
            details = validation_details(e.errors())
            logger.info(f"Validation failed for {request.method} {request.url.path}: {details}")
            raise RequestValidationFailed(details=details)

    return dependency
