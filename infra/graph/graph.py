"""
Resource graph: the declaration set and its dependency ordering.

The graph holds desired state only. Diffing against what exists in the
account is left to the provisioning engine; this module guarantees the
set it hands over is closed (no dangling references) and acyclic, and
gives the order in which the engine will create (and destroy) things.
"""

import logging
from collections.abc import Iterable, Iterator
from typing import Any

from infra.graph.errors import (
    DependencyCycleError,
    DuplicateResourceError,
    InvalidAttributeError,
    UnresolvedReferenceError,
)
from infra.graph.models import ResourceDescriptor, ResourceKind

logger = logging.getLogger(__name__)


class ResourceGraph:
    """Ordered set of resource descriptors keyed by name."""

    def __init__(self, descriptors: Iterable[ResourceDescriptor] = ()) -> None:
        self._resources: dict[str, ResourceDescriptor] = {}
        for descriptor in descriptors:
            self.add(descriptor)

    def add(self, descriptor: ResourceDescriptor) -> ResourceDescriptor:
        """
        Add a descriptor to the set.

        Args:
            descriptor: Descriptor to add

        Returns:
            The descriptor, for chaining into references

        Raises:
            DuplicateResourceError: If a descriptor with the same name exists
        """
        if descriptor.name in self._resources:
            raise DuplicateResourceError(
                f"Resource '{descriptor.name}' is declared more than once",
                resource=descriptor.name,
            )
        self._resources[descriptor.name] = descriptor
        return descriptor

    def get(self, name: str) -> ResourceDescriptor:
        """Get a descriptor by name (KeyError if missing)."""
        return self._resources[name]

    def attribute(self, name: str, key: str) -> Any:
        """Get one declared attribute of a descriptor."""
        descriptor = self.get(name)
        try:
            return descriptor.attributes[key]
        except KeyError:
            raise InvalidAttributeError(
                f"{name} has no attribute '{key}'", resource=name
            ) from None

    def of_kind(self, kind: ResourceKind) -> list[ResourceDescriptor]:
        """All descriptors of a kind, in declaration order."""
        return [d for d in self._resources.values() if d.kind == kind]

    def __contains__(self, name: object) -> bool:
        return name in self._resources

    def __iter__(self) -> Iterator[ResourceDescriptor]:
        return iter(self._resources.values())

    def __len__(self) -> int:
        return len(self._resources)

    @property
    def names(self) -> list[str]:
        return list(self._resources)

    def dependencies(self, name: str) -> tuple[str, ...]:
        """Names the given resource references."""
        return self.get(name).depends_on

    def dependents(self, name: str) -> tuple[str, ...]:
        """Names of resources that reference the given resource."""
        self.get(name)
        return tuple(
            d.name for d in self._resources.values() if name in d.depends_on
        )

    def validate(self) -> None:
        """
        Check the declaration set is closed and acyclic.

        Raises:
            UnresolvedReferenceError: On the first reference to an undeclared resource
            DependencyCycleError: If the references form a cycle
        """
        for descriptor in self._resources.values():
            for ref in descriptor.references:
                if ref.target not in self._resources:
                    raise UnresolvedReferenceError(descriptor.name, ref.attribute, ref.target)

        cycle = self._find_cycle()
        if cycle:
            raise DependencyCycleError(cycle)

        logger.debug("Validated resource graph with %d resources", len(self))

    def _find_cycle(self) -> list[str] | None:
        """Depth-first search for a back edge; returns the cycle path if found."""
        white, grey, black = 0, 1, 2
        colour = {name: white for name in self._resources}
        path: list[str] = []

        def visit(name: str) -> list[str] | None:
            colour[name] = grey
            path.append(name)
            for target in self._resources[name].depends_on:
                if target not in colour:
                    continue
                if colour[target] == grey:
                    return path[path.index(target):] + [target]
                if colour[target] == white:
                    found = visit(target)
                    if found:
                        return found
            path.pop()
            colour[name] = black
            return None

        for name in self._resources:
            if colour[name] == white:
                found = visit(name)
                if found:
                    return found
        return None

    def creation_order(self) -> list[str]:
        """
        Topological order in which the resources can be created.

        Every resource appears after everything it references. Ties are
        broken by declaration order so the result is deterministic.

        Raises:
            UnresolvedReferenceError, DependencyCycleError: If the graph is invalid
        """
        self.validate()

        position = {name: i for i, name in enumerate(self._resources)}
        remaining = {name: len(d.depends_on) for name, d in self._resources.items()}
        dependents: dict[str, list[str]] = {name: [] for name in self._resources}
        for descriptor in self._resources.values():
            for target in descriptor.depends_on:
                dependents[target].append(descriptor.name)

        ready = sorted((n for n, count in remaining.items() if count == 0), key=position.get)
        order: list[str] = []
        while ready:
            name = ready.pop(0)
            order.append(name)
            for dependent in dependents[name]:
                remaining[dependent] -= 1
                if remaining[dependent] == 0:
                    ready.append(dependent)
            ready.sort(key=position.get)

        return order

    def teardown_order(self) -> list[str]:
        """Reverse of creation order: dependents are destroyed first."""
        return list(reversed(self.creation_order()))
