"""
Parameter declarations and validation.

Parameters let a component declare the inputs it needs and the outputs it
produces. Each slot carries a schema, which is any type pydantic can build a
TypeAdapter for (``bool``, ``list[float]``, ``Any``, a ``BaseModel``...).
Values are decoded through that schema before the action runs (inputs) and
after it produces something (outputs).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from pydantic import TypeAdapter, ValidationError
from pydantic.errors import PydanticInvalidForJsonSchema

from .errors import (
    InvalidParameter,
    MissingValues,
    ParameterError,
    ParameterKind,
    UnexpectedValues,
)

if TYPE_CHECKING:
    from .component import ComponentSpec


@dataclass(frozen=True)
class ParameterSpec:
    """Declaration of one input or output slot."""
    type: Any  # Any annotation accepted by pydantic.TypeAdapter
    doc: str = ""
    label: str | None = None


ParameterSet = dict[str, ParameterSpec]


@dataclass(frozen=True)
class Parameters:
    """All inputs and outputs of a component. A missing half means none."""
    inputs: ParameterSet = field(default_factory=dict)
    outputs: ParameterSet = field(default_factory=dict)


class DecodeError(ValueError):
    """A raw value did not match its schema."""


@lru_cache(maxsize=None)
def _adapter(schema: Any) -> TypeAdapter:
    return TypeAdapter(schema)


def decode(schema: Any, value: Any) -> Any:
    """
    Decode a raw value against a schema.

    Returns the decoded value, raising DecodeError with a human-readable
    cause when the value does not match.
    """
    try:
        return _adapter(schema).validate_python(value)
    except ValidationError as e:
        cause = "; ".join(_describe_error(err) for err in e.errors())
        raise DecodeError(cause) from e


def _describe_error(err: dict[str, Any]) -> str:
    location = ".".join(map(str, err["loc"]))
    return f"{location}: {err['msg']}" if location else err["msg"]


def json_schema(schema: Any) -> dict[str, Any]:
    """JSON schema for a parameter type ({} if it has no JSON form)."""
    try:
        return _adapter(schema).json_schema()
    except PydanticInvalidForJsonSchema:
        return {}


def parameter_set(spec: "ComponentSpec", kind: ParameterKind) -> ParameterSet:
    """Get the declared inputs or outputs of a spec."""
    if spec.parameters is None:
        return {}
    return getattr(spec.parameters, kind) or {}


def parse_parameters(
    kind: ParameterKind,
    spec: "ComponentSpec",
    values: Mapping[str, Any] | None,
) -> dict[str, Any]:
    """
    Validate a bag of values against the inputs or outputs of a spec.

    The result holds exactly the declared keys, each decoded through its
    schema. Undeclared keys are dropped.

    Raises:
        UnexpectedValues: values given for a set the spec does not declare
        MissingValues: no values given for a declared, non-empty set
        InvalidParameter: a declared value failed to decode
    """
    definitions = parameter_set(spec, kind)
    if values is not None and not isinstance(values, Mapping):
        raise ParameterError(
            f"Component ({spec.label or 'unknown'}) expected a mapping of {kind}, "
            f"got {type(values).__name__}",
            spec.label,
            kind,
        )

    if not definitions:
        if values:
            raise UnexpectedValues(spec.label, kind)
        return {}
    if not values:
        raise MissingValues(spec.label, kind)

    parsed: dict[str, Any] = {}
    for key, definition in definitions.items():
        try:
            parsed[key] = decode(definition.type, values.get(key))
        except DecodeError as e:
            raise InvalidParameter(spec.label, kind, key, str(e)) from e
    return parsed


def describe_parameters(definitions: ParameterSet) -> dict[str, dict[str, Any]]:
    """Render a parameter set as plain data, including each slot's JSON schema."""
    return {
        name: {
            "label": definition.label or name,
            "doc": definition.doc,
            "schema": json_schema(definition.type),
        }
        for name, definition in definitions.items()
    }
