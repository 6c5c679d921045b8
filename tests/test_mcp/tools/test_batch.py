"""Tests for sequential batch execution helpers."""

import asyncio

import pytest

from superthread_mcp_server.mcp.tools.batch import (
    BatchItemError,
    batch_input_schema,
    require_items,
    run_sequential,
)


class TestRequireItems:
    def test_returns_list(self):
        items = [{"a": 1}, {"a": 2}]
        assert require_items({"cards": items}, "cards", 10) is items

    @pytest.mark.parametrize("value", [None, [], "cards", {"a": 1}])
    def test_missing_or_empty(self, value):
        with pytest.raises(ValueError, match="cards must be a non-empty array"):
            require_items({"cards": value}, "cards", 10)

    def test_over_cap(self):
        with pytest.raises(ValueError, match="Batch size 3 exceeds maximum 2"):
            require_items({"cards": [{}, {}, {}]}, "cards", 2)

    def test_at_cap(self):
        assert len(require_items({"cards": [{}, {}]}, "cards", 2)) == 2

    def test_non_object_item(self):
        with pytest.raises(ValueError, match=r"cards\[1\] must be an object"):
            require_items({"cards": [{}, "x"]}, "cards", 10)


class TestRunSequential:
    async def test_results_in_input_order(self):
        async def op(item):
            # Later items finish faster if run concurrently
            await asyncio.sleep(0.01 * (3 - item))
            return item * 10

        assert await run_sequential([1, 2, 3], op) == [10, 20, 30]

    async def test_one_at_a_time(self):
        running = 0
        peak = 0

        async def op(item):
            nonlocal running, peak
            running += 1
            peak = max(peak, running)
            await asyncio.sleep(0)
            running -= 1
            return item

        await run_sequential(list(range(5)), op)
        assert peak == 1

    async def test_stops_at_first_failure(self):
        seen = []

        async def op(item):
            seen.append(item)
            if item == "b":
                raise ValueError("bad item")
            return item

        with pytest.raises(BatchItemError) as exc_info:
            await run_sequential(["a", "b", "c"], op)

        err = exc_info.value
        assert seen == ["a", "b"]
        assert (err.index, err.total, err.completed) == (1, 3, 1)
        assert isinstance(err.cause, ValueError)
        assert "Item 2 of 3 failed: bad item" in str(err)
        assert "not rolled back" in str(err)


class TestBatchInputSchema:
    def test_items_carry_workspace_id(self):
        schema = batch_input_schema(
            "tags", {"name": {"type": "string"}}, ["name"], "Tags to create"
        )
        assert schema["required"] == ["tags"]
        array = schema["properties"]["tags"]
        assert array["type"] == "array"
        assert array["minItems"] == 1
        assert array["items"]["required"] == ["workspace_id", "name"]
        assert set(array["items"]["properties"]) == {"workspace_id", "name"}
