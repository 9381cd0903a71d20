"""Helpers for reading wire payloads at the translation boundary."""

from __future__ import annotations

import enum
import logging
from typing import Any, Iterable, Optional, TypeVar, Union

from pydantic import BaseModel, ValidationError

from modiokit.exceptions import WireFormatError

logger = logging.getLogger(__name__)

W = TypeVar("W", bound=BaseModel)
E = TypeVar("E", bound=enum.Enum)


def as_wire(model: type[W], payload: Union[W, dict[str, Any]]) -> W:
    """Return *payload* as an instance of the wire *model*.

    Model instances pass through untouched; JSON-shaped dicts are
    validated.

    Raises:
        WireFormatError: If the payload does not fit the wire shape.
    """
    if isinstance(payload, model):
        return payload
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise WireFormatError(f"Invalid {model.__name__} payload: {exc}") from exc


def as_wire_list(
    model: type[W], payloads: Optional[Iterable[Union[W, dict[str, Any]]]]
) -> list[W]:
    """Validate every element of *payloads*; ``None`` reads as an empty list."""
    if payloads is None:
        return []
    return [as_wire(model, payload) for payload in payloads]


def enum_or_default(enum_cls: type[E], value: Optional[int], default: E) -> E:
    """Map a raw wire value onto *enum_cls*, falling back to *default*.

    ``None`` maps to *default* silently; a value the enum does not know is
    logged at WARNING first.
    """
    if value is None:
        return default
    try:
        return enum_cls(value)
    except ValueError:
        logger.warning(
            "Unknown %s value %r, using %s", enum_cls.__name__, value, default.name
        )
        return default
