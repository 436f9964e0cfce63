"""Error types raised while executing components."""

from __future__ import annotations

from typing import Literal

ParameterKind = Literal["inputs", "outputs"]
PortType = Literal["inlet", "outlet"]


class ComponentError(Exception):
    """Base exception for all component runtime errors."""

    def __init__(self, message: str, label: str | None = None):
        super().__init__(message)
        self.label = label or "unknown"


class ParameterError(ComponentError):
    """A value bag did not satisfy a component's parameter declaration."""

    def __init__(self, message: str, label: str | None, kind: ParameterKind):
        super().__init__(message, label)
        self.kind = kind


class UnexpectedValues(ParameterError):
    """Values were supplied for a parameter set the component does not declare."""

    def __init__(self, label: str | None, kind: ParameterKind):
        super().__init__(
            f"Component ({label or 'unknown'}) does not define any {kind}, "
            f"but values were provided",
            label,
            kind,
        )


class MissingValues(ParameterError):
    """A declared, non-empty parameter set received no values."""

    def __init__(self, label: str | None, kind: ParameterKind):
        super().__init__(
            f"Component ({label or 'unknown'}) defines {kind}, "
            f"but no values were provided",
            label,
            kind,
        )


class InvalidParameter(ParameterError):
    """A declared value failed schema decoding."""

    def __init__(
        self,
        label: str | None,
        kind: ParameterKind,
        key: str,
        cause: str,
    ):
        super().__init__(
            f'Component ({label or "unknown"}) failed to parse "{key}" of {kind}: {cause}',
            label,
            kind,
        )
        self.key = key
        self.cause = cause


class UnknownPort(ComponentError):
    """A port name was used that the component does not declare."""

    def __init__(self, label: str | None, port_type: PortType, name: str):
        super().__init__(
            f'Component ({label or "unknown"}) does not define {port_type} "{name}"',
            label,
        )
        self.port_type = port_type
        self.name = name


class BodyFailure(ComponentError):
    """The component's action raised, or its deferred/streaming result failed."""

    def __init__(self, label: str | None, cause: BaseException):
        super().__init__(
            f"Component ({label or 'unknown'}) action failed: {cause}",
            label,
        )
        self.cause = cause
