"""Pydantic models for the component runtime API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


# === Component Models ===

class ComponentInfo(BaseModel):
    """Summary info about a component type."""
    type: str
    label: str
    doc: str
    category: str


class PortInfo(BaseModel):
    label: str
    doc: str = ""


class ParameterInfo(BaseModel):
    label: str
    doc: str = ""
    json_schema: dict[str, Any] = Field(default_factory=dict, alias="schema")

    model_config = {"populate_by_name": True}


class ComponentSchema(BaseModel):
    """Full component manifest."""
    type: str
    label: str
    doc: str
    category: str
    kind: str
    inputs: dict[str, ParameterInfo] = Field(default_factory=dict)
    outputs: dict[str, ParameterInfo] = Field(default_factory=dict)
    inlets: dict[str, PortInfo] = Field(default_factory=dict)
    outlets: dict[str, PortInfo] = Field(default_factory=dict)
    completion_port: bool = True
    execution_port: bool = False


class ComponentListResponse(BaseModel):
    """Response listing components by category."""
    components: dict[str, list[str]]
    total: int


# === Execution Models ===

class ComponentCallRequest(BaseModel):
    """Request to call a component."""
    inputs: dict[str, Any] | None = None


class ComponentCallResponse(BaseModel):
    """Response from a callable-mode call."""
    success: bool
    outputs: dict[str, Any] | None = None
    duration_seconds: float = 0.0
    error: dict[str, Any] | None = None


class ComponentObserveRequest(BaseModel):
    """Request to call a component while recording its events."""
    inputs: dict[str, Any] | None = None
    inlet_triggers: dict[str, int] = Field(
        default_factory=dict,
        description="Raise an inlet once this many outputs have been published",
    )


class ObservedEvent(BaseModel):
    channel: str
    payload: Any = None


class ComponentObserveResponse(BaseModel):
    """Response from an observable-mode call."""
    success: bool
    outputs: dict[str, Any] | None = None
    events: list[ObservedEvent] = Field(default_factory=list)
    duration_seconds: float = 0.0


# === Health Check ===

class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    version: str
    components_available: int = 0
    uptime_seconds: float = 0.0
