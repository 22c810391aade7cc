"""Request validator: local required-field checks run before any network call."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from recruit_relay.errors import ValidationError
from recruit_relay.webhook.models import FLOWS, REQUEST_MODELS, RelayFlow, RelayRequest

_NOT_AN_OBJECT = "Request body must be a JSON object"


def find_missing_field(flow: RelayFlow, payload: Mapping[str, Any]) -> str | None:
    """Return the message for the first missing required field, or None.

    Fields are checked in the flow's declared order. A value that is not a
    string, or is blank after trimming, counts as missing.
    """
    for field, message in FLOWS[flow].required_fields:
        value = payload.get(field)
        if not isinstance(value, str) or not value.strip():
            return message
    return None


def parse_request(flow: RelayFlow, payload: object) -> RelayRequest:
    """Validate a raw body into the flow's typed request model.

    Raises:
        ValidationError: The body is not an object, a required field is
            missing, or a declared field has the wrong type.
    """
    if not isinstance(payload, Mapping):
        raise ValidationError(_NOT_AN_OBJECT)

    missing = find_missing_field(flow, payload)
    if missing:
        raise ValidationError(missing)

    try:
        return REQUEST_MODELS[flow].model_validate(dict(payload))  # type: ignore[return-value]
    except PydanticValidationError as exc:
        error = exc.errors()[0]
        field = ".".join(str(part) for part in error["loc"])
        raise ValidationError(f"Invalid {field}: {error['msg']}") from exc
