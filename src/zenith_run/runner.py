#!/usr/bin/env python3
"""
Zenith Component Runner

Usage:
    zenith-run --list-components                    # List registered components
    zenith-run --docs                               # Print component docs (markdown)
    zenith-run math/sum -i numbers='[1, 2]'         # Call a component
    zenith-run flow/enumerate -i collection='[1,2,3]' --observe --inlet break@2

Options:
    --observe       Print every event published during the call
    --inlet N@K     Raise inlet N after the K-th output (observe mode)
    --config PATH   Config file (default: user config dir)
    --package MOD   Also discover components in MOD
    --trace         Print a trace summary after the call
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

from .config import (
    component_packages,
    load_config,
    output_mode as config_output_mode,
    trace_level,
    validate_config_dict,
)
from .core import (
    ComponentError,
    ComponentRegistry,
    ExecutionTracer,
    OutputMode,
    TraceLevel,
    load_component_packages,
    new_callable_component,
    new_observable_component,
)
from .core.recorder import EventRecorder


def parse_input_args(input_args: list[str] | None) -> dict[str, Any]:
    """Parse --input key=value arguments into a dict."""
    if not input_args:
        return {}

    inputs = {}
    for arg in input_args:
        if "=" not in arg:
            print(f"Warning: Invalid input format '{arg}', expected KEY=VALUE")
            continue
        key, value = arg.split("=", 1)

        # Try to parse as JSON for complex types, otherwise keep as string
        try:
            inputs[key] = json.loads(value)
        except json.JSONDecodeError:
            inputs[key] = value

    return inputs


def parse_inlet_args(inlet_args: list[str] | None) -> dict[str, int]:
    """Parse --inlet NAME@COUNT arguments into a dict."""
    triggers = {}
    for arg in inlet_args or []:
        name, sep, count = arg.partition("@")
        if not sep or not count.isdigit():
            raise ValueError(f"Invalid inlet trigger '{arg}', expected NAME@COUNT")
        triggers[name] = int(count)
    return triggers


def setup_logging(output_mode: OutputMode) -> None:
    """Configure logging based on output mode."""
    import logging

    # Determine log level for our code
    if output_mode == OutputMode.QUIET:
        level = logging.WARNING
    elif output_mode == OutputMode.DEBUG:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def _dump(value: Any) -> str:
    return json.dumps(value, indent=2, default=str)


async def run_component(
    component_type: str,
    inputs: dict[str, Any],
    observe: bool = False,
    inlet_triggers: dict[str, int] | None = None,
    output_mode: OutputMode = OutputMode.NORMAL,
    tracer: ExecutionTracer | None = None,
) -> int:
    """Call one registered component and print its result. Returns an exit code."""
    if inlet_triggers and not observe:
        raise ValueError("Inlet triggers need observe mode (--inlet requires --observe)")

    registry = ComponentRegistry.get_instance()
    component = registry.get(component_type)
    if component is None:
        print(f"Error: Unknown component type: {component_type}", file=sys.stderr)
        print(f"Available: {', '.join(registry.list_types())}", file=sys.stderr)
        return 1

    if not observe:
        call = new_callable_component(component, tracer=tracer)
        try:
            result = await call(inputs)
        except ComponentError as e:
            print(f"✗ {e}", file=sys.stderr)
            return 1
        if output_mode != OutputMode.QUIET:
            print(_dump(result))
        return 0

    _, observable = new_observable_component(component, tracer=tracer)
    recorder = EventRecorder(observable, inlet_triggers=inlet_triggers or {}).attach()
    result = await observable(inputs)

    failed = False
    for event in recorder.to_list():
        failed = failed or event["channel"] == "error"
        if output_mode != OutputMode.QUIET:
            payload = "" if event["payload"] is None else f" {json.dumps(event['payload'], default=str)}"
            print(f"[{event['channel']}]{payload}")
    if output_mode != OutputMode.QUIET:
        print(_dump(result))
    return 1 if failed else 0


def main():
    parser = argparse.ArgumentParser(
        description="Run zenith components",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument("component", nargs="?", help="Component type, e.g. math/sum")
    parser.add_argument(
        "--list-components",
        action="store_true",
        help="List registered components"
    )
    parser.add_argument("--docs", action="store_true", help="Print component documentation")
    parser.add_argument(
        "--input", "-i",
        action="append",
        metavar="KEY=VALUE",
        dest="inputs",
        help="Provide component input (can be repeated: -i numbers='[1,2]')"
    )
    parser.add_argument("--observe", action="store_true", help="Print every published event")
    parser.add_argument(
        "--inlet",
        action="append",
        metavar="NAME@COUNT",
        dest="inlets",
        help="Raise an inlet after COUNT outputs (observe mode, can be repeated)"
    )
    parser.add_argument("--config", type=Path, help="Config file path")
    parser.add_argument(
        "--package", "-p",
        action="append",
        metavar="MODULE",
        dest="packages",
        help="Also discover components in this package (can be repeated)"
    )
    parser.add_argument("--trace", action="store_true", help="Print a trace summary")

    args = parser.parse_args()

    config = load_config(args.config)
    errors = validate_config_dict(config)
    if errors:
        for error in errors:
            print(f"Config error: {error}", file=sys.stderr)
        sys.exit(1)

    output_mode = config_output_mode(config)
    setup_logging(output_mode)

    # Register the standard components, then any extra packages
    from . import components  # noqa: F401
    load_component_packages(component_packages(config) + (args.packages or []))

    registry = ComponentRegistry.get_instance()

    if args.list_components:
        print(f"{'Component':<20} {'Label':<14} {'Description'}")
        print("-" * 80)
        for component_type in registry.list_types():
            manifest = registry.get_manifest(component_type)
            doc = manifest["doc"][:44] + "..." if len(manifest["doc"]) > 44 else manifest["doc"]
            print(f"{component_type:<20} {manifest['label']:<14} {doc}")
        sys.exit(0)

    if args.docs:
        print(registry.generate_docs())
        sys.exit(0)

    if args.component is None:
        print("Error: Component type is required", file=sys.stderr)
        parser.print_usage()
        sys.exit(1)

    try:
        inlet_triggers = parse_inlet_args(args.inlets)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    level = TraceLevel.CALLS if args.trace else trace_level(config)
    tracer = ExecutionTracer(level=level)

    try:
        exit_code = asyncio.run(run_component(
            args.component,
            parse_input_args(args.inputs),
            observe=args.observe,
            inlet_triggers=inlet_triggers,
            output_mode=output_mode,
            tracer=tracer,
        ))
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.trace:
        print(tracer.format_summary())
        for trace in tracer.traces:
            print(trace.format_detailed())

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
