"""Error types raised by the grid engine."""


class InfiniteGridError(Exception):
    """Base class for grid engine errors."""


class EmptyCatalogError(InfiniteGridError):
    """Raised when there are no images to build a pool from."""

    def __init__(self, message: str = 'Image catalog is empty'):
        super().__init__(message)


class ResourceLoadFailure(InfiniteGridError):
    """A single image could not be loaded. Never fatal for the grid."""

    def __init__(self, resource, reason: str = ''):
        self.resource = resource
        self.reason = reason
        message = f'Failed to load {resource}'
        if reason:
            message += f': {reason}'
        super().__init__(message)


class LayoutDegenerate(UserWarning):
    """Viewport has no area; a minimal layout is used instead."""
