"""Errors raised by the layout engine.

``LayoutError`` derives from ``ValueError`` so HTTP views can keep the usual
``except ValueError`` -> ``HttpResponseBadRequest`` translation.
"""


class LayoutError(ValueError):
    """Base class for layout engine errors."""


class InvalidLayoutConfig(LayoutError):
    """Raised when data does not describe a valid layout config."""


class ContainerNotFound(LayoutError):
    """Raised when an operation names a container missing from the layout."""

    def __init__(self, container_name: str):
        super().__init__(f"Unknown container: {container_name!r}")
        self.container_name = container_name


class UnknownEvent(LayoutError):
    """Raised when an event payload names an unsupported event type."""


class UnknownLayout(LookupError):
    """Raised when no default layout is registered under a name."""

    def __init__(self, name: str):
        super().__init__(f"No default layout registered as {name!r}")
        self.name = name
