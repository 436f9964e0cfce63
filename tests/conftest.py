"""Shared fixtures for component runtime tests."""

from __future__ import annotations

import pytest

import zenith_run.components  # noqa: F401  (registers the standard components)
from zenith_run.core import (
    ComponentSpec,
    ParameterSpec,
    Parameters,
    PortSpec,
    Ports,
)


@pytest.fixture
def double_spec() -> ComponentSpec:
    """Spec with one input, one output, two outlets and one inlet."""
    return ComponentSpec(
        label="Double",
        doc="Doubles a number",
        parameters=Parameters(
            inputs={"x": ParameterSpec(type=int, doc="The number")},
            outputs={"y": ParameterSpec(type=float, doc="Twice the number")},
        ),
        ports=Ports(
            inlets={"stop": PortSpec(doc="Stop early")},
            outlets={"a": PortSpec(), "b": PortSpec()},
        ),
    )


@pytest.fixture
def bare_spec() -> ComponentSpec:
    """Spec without parameters or ports."""
    return ComponentSpec(label="Bare")
