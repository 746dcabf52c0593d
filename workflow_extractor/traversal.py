from __future__ import annotations

from typing import Any, Iterator, Optional, Tuple

from .config import DEFAULTS, ExtractorConfig
from .errors import TraversalLimitError


class TraversalBudget:
    """Depth and node allowance for one scan over an untrusted document.

    Every mapping or list entered counts as one node. Scalars are free.
    """

    def __init__(self, config: Optional[ExtractorConfig] = None, scan: str = 'document'):
        config = config or DEFAULTS
        self.max_depth = config.max_depth
        self.max_nodes = config.max_nodes
        self.scan = scan
        self.visited = 0

    def enter(self, depth: int) -> None:
        self.visited += 1
        if self.visited > self.max_nodes:
            raise TraversalLimitError(
                f"{self.scan} scan visited more than {self.max_nodes} nodes",
                'max_nodes',
                self.max_nodes,
            )
        if depth > self.max_depth:
            raise TraversalLimitError(
                f"{self.scan} scan exceeded nesting depth {self.max_depth}",
                'max_depth',
                self.max_depth,
            )


def is_container(value: Any) -> bool:
    return isinstance(value, (dict, list))


def iter_containers(root: Any, budget: TraversalBudget) -> Iterator[Tuple[Any, int]]:
    """Yield (node, depth) for every dict/list under root, depth-first pre-order.

    Dict values are visited in key order, list elements by ascending index.
    """
    if not is_container(root):
        return

    stack = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        budget.enter(depth)
        yield node, depth

        children = node.values() if isinstance(node, dict) else node
        # Reversed so the first child is popped next.
        stack.extend((child, depth + 1) for child in reversed(list(children)) if is_container(child))
