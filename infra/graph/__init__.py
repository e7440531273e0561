"""
Resource graph declaration.

Desired state of the stack as plain descriptors, with reference
resolution, cycle detection and dependency ordering. Pure Python so it
can be checked before the provisioning engine is involved.
"""

from infra.graph.cidr import cidrsubnet
from infra.graph.declaration import build_declaration, plan_declaration, validate_attributes
from infra.graph.errors import (
    DeclarationError,
    DependencyCycleError,
    DuplicateResourceError,
    InvalidAttributeError,
    UnresolvedReferenceError,
)
from infra.graph.graph import ResourceGraph
from infra.graph.models import Reference, ResourceDescriptor, ResourceKind

__all__ = [
    "cidrsubnet",
    "build_declaration",
    "plan_declaration",
    "validate_attributes",
    "DeclarationError",
    "DependencyCycleError",
    "DuplicateResourceError",
    "InvalidAttributeError",
    "UnresolvedReferenceError",
    "ResourceGraph",
    "Reference",
    "ResourceDescriptor",
    "ResourceKind",
]
