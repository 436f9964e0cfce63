"""Component runtime HTTP service."""

from .app import create_app
from .models import (
    ComponentCallRequest,
    ComponentCallResponse,
    ComponentInfo,
    ComponentListResponse,
    ComponentObserveRequest,
    ComponentObserveResponse,
    ComponentSchema,
    HealthResponse,
    ObservedEvent,
)

__all__ = [
    "create_app",
    "ComponentCallRequest",
    "ComponentCallResponse",
    "ComponentInfo",
    "ComponentListResponse",
    "ComponentObserveRequest",
    "ComponentObserveResponse",
    "ComponentSchema",
    "HealthResponse",
    "ObservedEvent",
]
