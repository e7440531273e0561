"""
Resource descriptor types.

A descriptor is a flat record of attributes plus typed references to
other descriptors by name. Descriptors are immutable; a changed
declaration is a new descriptor.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class ResourceKind(str, Enum):
    """Kinds of cloud resources the stack declares."""

    NETWORK = "network"
    SUBNET = "subnet"
    INTERNET_GATEWAY = "internet_gateway"
    ROUTE_TABLE = "route_table"
    ROUTE = "route"
    ROUTE_ASSOCIATION = "route_association"
    SECURITY_GROUP = "security_group"
    CLUSTER = "cluster"
    EXECUTION_ROLE = "execution_role"
    TASK_DEFINITION = "task_definition"
    SERVICE = "service"
    LOAD_BALANCER = "load_balancer"
    TARGET_GROUP = "target_group"
    LISTENER = "listener"


@dataclass(frozen=True)
class Reference:
    """
    Edge from one descriptor to another.

    Attributes:
        attribute: Attribute of the owning descriptor holding the target's identifier
        target: Name of the referenced descriptor
    """
    attribute: str
    target: str


@dataclass(frozen=True)
class ResourceDescriptor:
    """
    Declared target state for one cloud resource.

    Attributes:
        name: Unique name within the declaration set
        kind: Resource kind
        attributes: Typed attribute values (read-only view)
        references: Edges to other descriptors
    """
    name: str
    kind: ResourceKind
    attributes: Mapping[str, Any] = field(default_factory=dict)
    references: tuple[Reference, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))
        object.__setattr__(self, "references", tuple(self.references))

    def __hash__(self) -> int:
        return hash((self.name, self.kind, self.references))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResourceDescriptor):
            return NotImplemented
        return (
            self.name == other.name
            and self.kind == other.kind
            and dict(self.attributes) == dict(other.attributes)
            and self.references == other.references
        )

    @property
    def depends_on(self) -> tuple[str, ...]:
        """Distinct reference targets, in declaration order."""
        seen: dict[str, None] = {}
        for ref in self.references:
            seen.setdefault(ref.target, None)
        return tuple(seen)

    def targets(self, attribute: str) -> tuple[str, ...]:
        """Targets referenced through one attribute."""
        return tuple(ref.target for ref in self.references if ref.attribute == attribute)
