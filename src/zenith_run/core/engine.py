"""
Component execution engine.

Two entry points drive a component call:

- new_callable_component: plain async callable, no observation
- new_observable_component: an EventEmitter plus an async callable that
  publishes lifecycle and port events on it while running

Both share one core routine that validates inputs, runs the action in
whatever shape it has (single value, awaited value, or stream) and validates
every value it produces against the component's outputs.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Mapping
from contextlib import aclosing
from typing import Any

from .component import ActionKind, Component
from .context import CallContext, new_call_context
from .errors import BodyFailure, ComponentError, UnknownPort
from .events import END, ERROR, OUTPUT, Channel, EventEmitter
from .parameters import parse_parameters
from .ports import inlet_names
from .tracing import CallTrace, ExecutionTracer


logger = logging.getLogger(__name__)

Inputs = Mapping[str, Any] | None
CallableComponent = Callable[..., Awaitable[dict[str, Any] | None]]


def new_callable_component(
    component: Component,
    tracer: ExecutionTracer | None = None,
) -> CallableComponent:
    """
    Wrap a component as an async callable.

    Awaiting the callable validates the inputs, runs the action and returns
    its validated outputs. Stream actions are drained and the last value they
    produced is returned. Outlets and inlets are inert. Every failure raises.
    """
    async def call(inputs: Inputs = None) -> dict[str, Any] | None:
        trace = tracer.start_call(_label(component), "callable", inputs) if tracer else None
        output = None
        try:
            async with aclosing(_produce(component, inputs, trace=trace)) as outputs:
                async for output in outputs:
                    if trace is not None and output is not None:
                        tracer.record_output(trace, output)
        except Exception as e:
            if trace is not None:
                tracer.end_call(trace, error=e)
            raise
        if trace is not None:
            tracer.end_call(trace)
        return output

    call.component = component
    return call


class ObservableComponent:
    """
    Async callable driving observed calls of a component.

    Listeners subscribed on the emitter receive, for each call:

    - OUTLET_RAISED / outlet:<name> when the action raises an outlet
    - inlet:<name> when notify_inlet() is called and the action registered it
    - OUTPUT for each produced value, after validation
    - ERROR with the failure, instead of raising it. Failures of the action
      itself arrive as BodyFailure; the original exception is its .cause
    - END once, after everything else

    Events are only published to channels that have listeners. All listeners
    are removed when a call finishes, so subscribe again before the next call.
    Use a separate new_observable_component() pair for concurrent calls.
    """

    def __init__(
        self,
        component: Component,
        emitter: EventEmitter,
        tracer: ExecutionTracer | None = None,
    ):
        self.component = component
        self.emitter = emitter
        self.tracer = tracer

    async def __call__(self, inputs: Inputs = None) -> dict[str, Any] | None:
        emitter = self.emitter
        tracer = self.tracer
        trace = tracer.start_call(_label(self.component), "observable", inputs) if tracer else None
        error: Exception | None = None
        handled = False
        try:
            output = None
            async with aclosing(_produce(self.component, inputs, emitter, trace)) as outputs:
                async for output in outputs:
                    if output is None:
                        continue
                    if trace is not None:
                        tracer.record_output(trace, output)
                    if emitter.has_subscribers(OUTPUT):
                        emitter.publish(OUTPUT, output)
            return output
        except Exception as e:
            error = e
            if not emitter.has_subscribers(ERROR):
                raise
            handled = True
            logger.debug("Component %s failed, delivering to error listeners: %s", _label(self.component), e)
            emitter.publish(ERROR, e)
            return None
        finally:
            if trace is not None:
                tracer.end_call(trace, error=error, handled=handled)
            try:
                if emitter.has_subscribers(END):
                    emitter.publish(END)
            finally:
                emitter.remove_all_listeners()

    def notify_inlet(self, name: str) -> None:
        """Raise an inlet of the running call. No-op if the action did not register it."""
        if name not in inlet_names(self.component.spec):
            raise UnknownPort(self.component.spec.label, "inlet", name)
        channel = Channel.inlet(name)
        if self.emitter.has_subscribers(channel):
            self.emitter.publish(channel)


def new_observable_component(
    component: Component,
    tracer: ExecutionTracer | None = None,
) -> tuple[EventEmitter, ObservableComponent]:
    """
    Wrap a component for observed execution.

    Returns the emitter to subscribe on and the callable that drives calls.
    If nothing listens on ERROR, failures raise as in callable mode;
    otherwise they are published on ERROR and the call returns None.
    """
    emitter = EventEmitter()
    return emitter, ObservableComponent(component, emitter, tracer)


def _label(component: Component) -> str:
    return component.spec.label or "unknown"


async def _produce(
    component: Component,
    inputs: Inputs,
    emitter: EventEmitter | None = None,
    trace: CallTrace | None = None,
) -> AsyncIterator[dict[str, Any] | None]:
    # Yields each candidate output in production order, validated. The next
    # stream item is only requested once the consumer is done with this one.
    ctx = new_call_context(component, inputs, emitter=emitter, trace=trace)
    if component.kind is ActionKind.STREAM:
        async with aclosing(_iterate(component, ctx)) as stream:
            async for candidate in stream:
                yield _validate_output(component, candidate)
    else:
        try:
            result = component.action(ctx)
            if inspect.isawaitable(result):
                result = await result
        except ComponentError:
            raise
        except Exception as e:
            raise BodyFailure(component.spec.label, e) from e
        yield _validate_output(component, result)


async def _iterate(component: Component, ctx: CallContext) -> AsyncIterator[Any]:
    label = component.spec.label
    try:
        stream = component.action(ctx)
        if inspect.isawaitable(stream):
            stream = await stream
        is_async = hasattr(stream, "__aiter__")
        iterator = stream.__aiter__() if is_async else iter(stream)
    except ComponentError:
        raise
    except Exception as e:
        raise BodyFailure(label, e) from e

    if is_async:
        try:
            while True:
                try:
                    item = await iterator.__anext__()
                except StopAsyncIteration:
                    return
                except ComponentError:
                    raise
                except Exception as e:
                    raise BodyFailure(label, e) from e
                yield item
        finally:
            if hasattr(iterator, "aclose"):
                await iterator.aclose()
    else:
        try:
            while True:
                try:
                    item = next(iterator)
                except StopIteration:
                    return
                except ComponentError:
                    raise
                except Exception as e:
                    raise BodyFailure(label, e) from e
                yield item
        finally:
            if hasattr(iterator, "close"):
                iterator.close()


def _validate_output(component: Component, candidate: Any) -> dict[str, Any] | None:
    if candidate is None:
        return None
    return parse_parameters("outputs", component.spec, candidate)
