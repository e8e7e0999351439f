"""Utility helpers for orchestrator nodes."""
from __future__ import annotations

import functools
import logging
import time
from collections.abc import Awaitable, Callable

from orchestrator.state import GraphState, NodeName

logger = logging.getLogger(__name__)


def instrument_node(node_name: NodeName, func: Callable[[GraphState], Awaitable[GraphState]]):
    """Wrap a node callable with entry/exit logging and timing."""

    @functools.wraps(func)
    async def wrapper(state: GraphState) -> GraphState:
        started = time.perf_counter()
        logger.info("node %s start", node_name.value)
        try:
            update = await func(state)
        except Exception as exc:
            logger.error("node %s failed after %.2fs: %s", node_name.value, time.perf_counter() - started, exc)
            raise
        logger.info(
            "node %s complete in %.2fs (keys=%s)",
            node_name.value,
            time.perf_counter() - started,
            sorted(update),
        )
        return update

    return wrapper
