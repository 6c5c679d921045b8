"""Sequential execution of batch tool items.

Batch tools accept an array of self-contained items. Items run strictly
in input order, each awaited before the next starts, so a later item may
reference something an earlier item created (e.g. a parent card). There
is no rollback: when an item fails, the items before it stay applied.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from .constants import WORKSPACE_ID_PROPERTY

T = TypeVar("T")

logger = logging.getLogger(__name__)


class BatchItemError(Exception):
    """An item of a sequential batch failed; earlier items were applied.

    Attributes:
        index: Zero-based position of the failing item.
        total: Number of items in the batch.
        completed: Number of items applied before the failure.
        cause: The exception raised by the failing item.
    """

    def __init__(
        self, index: int, total: int, completed: int, cause: BaseException
    ):
        self.index = index
        self.total = total
        self.completed = completed
        self.cause = cause
        super().__init__(
            f"Item {index + 1} of {total} failed: {cause}. "
            f"{completed} item(s) completed before the failure and were not rolled back."
        )


def batch_input_schema(
    key: str, properties: dict, required: list[str], description: str
) -> dict:
    """JSON Schema for a tool whose only argument is an array of items.

    Every item carries its own ``workspace_id``.
    """
    return {
        "type": "object",
        "properties": {
            key: {
                "type": "array",
                "minItems": 1,
                "items": {
                    "type": "object",
                    "properties": {
                        "workspace_id": WORKSPACE_ID_PROPERTY,
                        **properties,
                    },
                    "required": ["workspace_id", *required],
                },
                "description": description,
            }
        },
        "required": [key],
    }


def require_items(
    args: dict, key: str, max_batch_size: int
) -> list[dict[str, Any]]:
    """Return ``args[key]`` as a non-empty list no larger than the cap.

    Raises:
        ValueError: If the array is missing, empty, not a list of objects,
            or longer than ``max_batch_size``.
    """
    items = args.get(key)
    if not isinstance(items, list) or not items:
        raise ValueError(f"{key} must be a non-empty array")
    if len(items) > max_batch_size:
        raise ValueError(
            f"Batch size {len(items)} exceeds maximum {max_batch_size}. Split into smaller batches."
        )
    for i, item in enumerate(items):
        if not isinstance(item, dict):
            raise ValueError(f"{key}[{i}] must be an object")
    return items


async def run_sequential(
    items: list[Any], op: Callable[[Any], Awaitable[T]]
) -> list[T]:
    """Apply ``op`` to every item in order and collect the results.

    Args:
        items: Batch items, in the order supplied by the caller.
        op: Async operation for a single item.

    Returns:
        One result per item, in input order.

    Raises:
        BatchItemError: When an item fails. Later items are not attempted.
    """
    results: list[T] = []
    total = len(items)
    for index, item in enumerate(items):
        try:
            results.append(await op(item))
        except Exception as e:
            logger.warning(
                "Batch item %d/%d failed after %d completed: %s",
                index + 1,
                total,
                len(results),
                e,
            )
            raise BatchItemError(index, total, len(results), e) from e
    return results
