"""A positional list with user-supplied copy, free and compare callbacks.

Indices are forgiving: an index of zero or below addresses the first node,
an index past the end addresses the last node (or the end, for inserts).
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional

CopyFn = Callable[[Any], Any]
FreeFn = Callable[[Any], None]
CompareFn = Callable[[Any, Any], int]


def _default_compare(x: Any, y: Any) -> int:
    if x < y:
        return -1
    if x == y:
        return 0
    return 1


def _no_free(_element: Any) -> None:
    return None


@dataclass(eq=False)
class ListNode:
    """A node of a DPList; returned as a reference to a position."""

    element: Any


class DPList:
    """List whose element handling is delegated to callbacks."""

    def __init__(
        self,
        element_copy: Optional[CopyFn] = None,
        element_free: Optional[FreeFn] = None,
        element_compare: Optional[CompareFn] = None,
    ) -> None:
        self._copy = element_copy or copy.deepcopy
        self._free = element_free or _no_free
        self._compare = element_compare or _default_compare
        self._nodes: list[ListNode] = []

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Any]:
        return (node.element for node in self._nodes)

    def _clamp(self, index: int) -> int:
        return min(max(index, 0), len(self._nodes) - 1)

    def insert_at_index(
        self, element: Any, index: int, insert_copy: bool = False
    ) -> "DPList":
        """Insert at 'index'; index <= 0 prepends, index >= len appends."""
        stored = self._copy(element) if insert_copy else element
        position = min(max(index, 0), len(self._nodes))
        self._nodes.insert(position, ListNode(stored))
        return self

    def remove_at_index(self, index: int, free_element: bool = False) -> "DPList":
        """Remove the node at 'index', clamped; an empty list is left as is."""
        if not self._nodes:
            return self
        node = self._nodes.pop(self._clamp(index))
        if free_element and node.element is not None:
            self._free(node.element)
        return self

    def get_reference_at_index(self, index: int) -> Optional[ListNode]:
        """Return the node at 'index', clamped, or None for an empty list."""
        if not self._nodes:
            return None
        return self._nodes[self._clamp(index)]

    def get_element_at_index(self, index: int) -> Any:
        """Return the element at 'index', clamped, or None for an empty list."""
        node = self.get_reference_at_index(index)
        return None if node is None else node.element

    def get_index_of_element(self, element: Any) -> int:
        """Return the first index whose element compares equal, or -1."""
        return next(
            (
                position
                for position, node in enumerate(self._nodes)
                if self._compare(node.element, element) == 0
            ),
            -1,
        )

    def get_element_at_reference(self, reference: Optional[ListNode]) -> Any:
        """Return the element of 'reference' if it is a node of this list."""
        if reference is None:
            return None
        if any(node is reference for node in self._nodes):
            return reference.element
        return None

    def free(self, free_element: bool = False) -> None:
        """Drop every node, handing elements to the free callback if asked."""
        if free_element:
            for node in self._nodes:
                if node.element is not None:
                    self._free(node.element)
        self._nodes.clear()