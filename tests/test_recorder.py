"""Tests for recording observed calls."""

from __future__ import annotations

import pytest

from zenith_run.components.flow import branch, enumerate_collection
from zenith_run.components.math import sum_numbers
from zenith_run.core import new_observable_component
from zenith_run.core.recorder import EventRecorder


class TestEventRecorder:
    @pytest.mark.asyncio
    async def test_records_outputs_and_end(self):
        _, observable = new_observable_component(sum_numbers)
        recorder = EventRecorder(observable).attach()

        assert await observable({"numbers": [1, 2]}) == {"sum": 3}
        assert recorder.to_list() == [
            {"channel": "output", "payload": {"sum": 3.0}},
            {"channel": "end", "payload": None},
        ]

    @pytest.mark.asyncio
    async def test_records_outlets(self):
        _, observable = new_observable_component(branch)
        recorder = EventRecorder(observable).attach()

        await observable({"condition": False})

        assert [e["channel"] for e in recorder.to_list()] == ["outlet", "outlet:false", "end"]
        assert recorder.to_list()[0]["payload"] == "false"

    @pytest.mark.asyncio
    async def test_inlet_trigger(self):
        _, observable = new_observable_component(enumerate_collection)
        recorder = EventRecorder(observable, inlet_triggers={"break": 2}).attach()

        result = await observable({"collection": ["a", "b", "c", "d"]})

        assert result == {"element": "b", "element_index": 1}
        assert [e["channel"] for e in recorder.to_list()] == [
            "output", "outlet", "outlet:on_element",
            "output", "inlet:break", "outlet", "outlet:on_element",
            "end",
        ]

    @pytest.mark.asyncio
    async def test_errors_are_serialized(self):
        _, observable = new_observable_component(sum_numbers)
        recorder = EventRecorder(observable).attach()

        assert await observable({"numbers": "x"}) is None

        error, end = recorder.to_list()
        assert error["channel"] == "error"
        assert error["payload"]["type"] == "InvalidParameter"
        assert "numbers" in error["payload"]["message"]
        assert end == {"channel": "end", "payload": None}

    def test_unknown_inlet_trigger(self):
        _, observable = new_observable_component(enumerate_collection)
        with pytest.raises(ValueError, match="Unknown inlet"):
            EventRecorder(observable, inlet_triggers={"continue": 1})
