"""API route handlers for the component runtime service."""

from __future__ import annotations

import time

from fastapi import APIRouter, HTTPException, Request

from .. import __version__
from ..core import (
    BodyFailure,
    Component,
    ComponentError,
    ComponentRegistry,
    new_callable_component,
    new_observable_component,
)
from ..core.recorder import EventRecorder
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


router = APIRouter()


def get_component(category: str, name: str) -> tuple[str, Component]:
    """Look up a registered component by category and name."""
    comp_type = f"{category}/{name}"
    component = ComponentRegistry.get_instance().get(comp_type)
    if component is None:
        raise HTTPException(status_code=404, detail=f"Component '{comp_type}' not found")
    return comp_type, component


# === Health ===

@router.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check(request: Request) -> HealthResponse:
    """Check service health."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        components_available=len(ComponentRegistry.get_instance().list_types()),
        uptime_seconds=time.time() - request.app.state.started_at,
    )


# === Components ===

@router.get("/components", response_model=ComponentListResponse, tags=["Components"])
async def list_components() -> ComponentListResponse:
    """List all available component types by category."""
    registry = ComponentRegistry.get_instance()

    return ComponentListResponse(
        components={cat: registry.list_by_category(cat) for cat in registry.categories()},
        total=len(registry.list_types()),
    )


@router.get("/components/{category}", tags=["Components"])
async def list_components_by_category(category: str) -> dict:
    """List components in a specific category."""
    registry = ComponentRegistry.get_instance()
    matches = registry.list_by_category(category)

    if not matches:
        raise HTTPException(
            status_code=404,
            detail=f"No components found in category '{category}'",
        )

    infos = []
    for comp_type in matches:
        manifest = registry.get_manifest(comp_type)
        infos.append(ComponentInfo(
            type=comp_type,
            label=manifest["label"],
            doc=manifest["doc"],
            category=manifest["category"],
        ).model_dump())

    return {"category": category, "components": infos}


@router.get("/components/{category}/{name}/schema", response_model=ComponentSchema, tags=["Components"])
async def get_component_schema(category: str, name: str) -> ComponentSchema:
    """Get full component manifest/schema."""
    comp_type, _ = get_component(category, name)
    manifest = ComponentRegistry.get_instance().get_manifest(comp_type)
    return ComponentSchema.model_validate(manifest)


@router.post("/components/{category}/{name}/call", response_model=ComponentCallResponse, tags=["Execution"])
async def call_component(category: str, name: str, request: ComponentCallRequest) -> ComponentCallResponse:
    """
    Call a component and wait for its outputs.

    Invalid inputs or outputs are rejected with 422. A failing action is
    reported in the response body.
    """
    _, component = get_component(category, name)
    call = new_callable_component(component)

    start = time.time()
    try:
        outputs = await call(request.inputs)
    except BodyFailure as e:
        return ComponentCallResponse(
            success=False,
            duration_seconds=time.time() - start,
            error={"type": type(e.cause).__name__, "message": str(e)},
        )
    except ComponentError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return ComponentCallResponse(
        success=True,
        outputs=outputs,
        duration_seconds=time.time() - start,
    )


@router.post("/components/{category}/{name}/observe", response_model=ComponentObserveResponse, tags=["Execution"])
async def observe_component(category: str, name: str, request: ComponentObserveRequest) -> ComponentObserveResponse:
    """
    Call a component and return every event it published, in order.

    Failures are returned as an "error" event rather than an HTTP error.
    """
    _, component = get_component(category, name)
    _, observable = new_observable_component(component)
    try:
        recorder = EventRecorder(observable, inlet_triggers=request.inlet_triggers).attach()
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    start = time.time()
    outputs = await observable(request.inputs)
    events = recorder.to_list()

    return ComponentObserveResponse(
        success=not any(event["channel"] == "error" for event in events),
        outputs=outputs,
        events=[ObservedEvent(**event) for event in events],
        duration_seconds=time.time() - start,
    )


# === Docs ===

@router.get("/docs/components", tags=["System"])
async def get_component_docs() -> dict:
    """Get generated component documentation in markdown."""
    docs = ComponentRegistry.get_instance().generate_docs()

    return {"format": "markdown", "content": docs}
