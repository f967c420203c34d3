# Copyright 2026 sdkpcm Contributors
# SPDX-License-Identifier: Apache-2.0

"""Arena-backed transitive dependency sets.

A dependency set is an immutable node in a shared graph: it holds an optional
value (a compiled module) and references to child sets.  Nodes live in a
:class:`DependencySetArena` and are addressed by index, so a set handed to many
compile requests is shared by reference and never copied.

Flattening follows a pre-order, left-to-right traversal in which each node is
visited once.  Both the traversal order and every projection of it are cached
per node, so repeated requests for the same set cost a dictionary lookup.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sdkpcm.model.modules import CompiledModuleInfo

# ###############
# Public Interface
# ###############

Projection = Callable[["CompiledModuleInfo"], Sequence[str]]


class DependencySetArena:
    """Owns every dependency-set node created during one build evaluation.

    Args:
        projections: Named functions mapping a node value to the arguments it
            contributes to a flattened projection.
    """

    def __init__(self, projections: Mapping[str, Projection]) -> None:
        self._projections = dict(projections)
        self._values: list[CompiledModuleInfo | None] = []
        self._children: list[tuple[int, ...]] = []
        self._order_cache: dict[int, tuple[int, ...]] = {}
        self._projection_cache: dict[tuple[int, str], tuple[str, ...]] = {}

    def __len__(self) -> int:
        return len(self._values)

    def make(
        self,
        value: CompiledModuleInfo | None = None,
        children: Iterable[DependencySet] = (),
    ) -> DependencySet:
        """Create a new node holding *value* with the given child sets."""
        child_indices: list[int] = []
        for child in children:
            if child.arena is not self:
                raise ValueError("Dependency sets from different arenas cannot be combined")
            child_indices.append(child.index)
        self._values.append(value)
        self._children.append(tuple(child_indices))
        return DependencySet(self, len(self._values) - 1)

    def projection_names(self) -> list[str]:
        return sorted(self._projections)

    def value_of(self, index: int) -> CompiledModuleInfo | None:
        """Return the value stored at node *index*."""
        return self._values[index]

    def children_of(self, index: int) -> tuple[int, ...]:
        """Return the indices of the direct children of node *index*."""
        return self._children[index]

    def traversal(self, index: int) -> tuple[int, ...]:
        """Return the node indices reachable from *index* in flattening order."""
        cached = self._order_cache.get(index)
        if cached is not None:
            return cached
        order: list[int] = []
        seen: set[int] = set()
        # Children are pushed in reverse so the leftmost child is visited first.
        stack = [index]
        while stack:
            node = stack.pop()
            if node in seen:
                continue
            seen.add(node)
            order.append(node)
            stack.extend(reversed(self._children[node]))
        result = tuple(order)
        self._order_cache[index] = result
        return result

    def project(self, index: int, projection: str) -> tuple[str, ...]:
        """Return the flattened arguments of *projection* for node *index*.

        Raises:
            KeyError: If *projection* is not registered.
        """
        key = (index, projection)
        cached = self._projection_cache.get(key)
        if cached is not None:
            return cached
        if projection not in self._projections:
            raise KeyError(f"Unknown dependency set projection '{projection}'")
        project = self._projections[projection]
        args: list[str] = []
        for node in self.traversal(index):
            value = self._values[node]
            if value is not None:
                args.extend(project(value))
        result = tuple(args)
        self._projection_cache[key] = result
        return result


class DependencySet:
    """A handle to one node of a :class:`DependencySetArena`."""

    __slots__ = ("arena", "index")

    def __init__(self, arena: DependencySetArena, index: int) -> None:
        self.arena = arena
        self.index = index

    def __repr__(self) -> str:
        return f"DependencySet(index={self.index})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DependencySet):
            return NotImplemented
        return self.arena is other.arena and self.index == other.index

    def __hash__(self) -> int:
        return hash((id(self.arena), self.index))

    @property
    def value(self) -> CompiledModuleInfo | None:
        return self.arena.value_of(self.index)

    @property
    def children(self) -> tuple[DependencySet, ...]:
        return tuple(DependencySet(self.arena, i) for i in self.arena.children_of(self.index))

    def traverse(self) -> list[CompiledModuleInfo]:
        """Return every value reachable from this set in flattening order."""
        values = (self.arena.value_of(i) for i in self.arena.traversal(self.index))
        return [v for v in values if v is not None]

    def project_as_args(self, projection: str) -> tuple[str, ...]:
        """Return the flattened arguments of *projection* over this set.

        Raises:
            KeyError: If *projection* is not registered with the arena.
        """
        return self.arena.project(self.index, projection)
