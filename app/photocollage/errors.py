"""Error taxonomy for collage building.

Every error raised on purpose by this package derives from CollageError so
callers (CLI, services) can catch one type. Each also derives from the
closest builtin so plain ``except ValueError`` call sites keep working.
"""

from __future__ import annotations


class CollageError(Exception):
    """Base class for all collage failures."""


class InvalidConfiguration(CollageError, ValueError):
    """Bad layout/collage parameters or an empty source list."""


class InvalidImageDimensions(CollageError, ValueError):
    """An image reported a non-positive (or non-finite) natural size."""


class SourceUnavailable(CollageError, OSError):
    """A source reference could not be turned into bytes."""


class UnrecognizedImageFormat(CollageError, ValueError):
    """Bytes were resolved but no decoder recognised them."""


class RenderFailure(CollageError, RuntimeError):
    """The rendering surface failed to allocate, draw or encode."""
