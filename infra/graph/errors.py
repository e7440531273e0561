"""
Declaration errors raised while building or validating the resource graph.

All of these are plan-time failures: they are raised before the
provisioning engine is asked to do anything.
"""


class DeclarationError(Exception):
    """Base class for resource declaration errors."""

    def __init__(self, message: str, resource: str | None = None):
        self.message = message
        self.resource = resource
        super().__init__(self.message)


class DuplicateResourceError(DeclarationError):
    """Raised when two descriptors share the same name."""
    pass


class UnresolvedReferenceError(DeclarationError):
    """Raised when a reference points at a resource that is not declared."""

    def __init__(self, resource: str, attribute: str, target: str):
        self.attribute = attribute
        self.target = target
        super().__init__(
            f"{resource}.{attribute} references undeclared resource '{target}'",
            resource=resource,
        )


class DependencyCycleError(DeclarationError):
    """Raised when references form a cycle."""

    def __init__(self, cycle: list[str]):
        self.cycle = cycle
        super().__init__(
            "Dependency cycle detected: " + " -> ".join(cycle),
            resource=cycle[0] if cycle else None,
        )


class InvalidAttributeError(DeclarationError):
    """Raised when a declared attribute has an unacceptable value."""
    pass
