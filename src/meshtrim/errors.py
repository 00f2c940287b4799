"""Exceptions raised by the trimming border.

Both classes signal a bug in the calling code, not bad input data, and
are never caught inside the package.  Invalid geometric construction
(zero-length normals, bad camera parameters, malformed configuration)
raises ``ValueError`` instead, like the rest of the geometry helpers.
"""


class TrimError(Exception):
    """Base class for trimming contract violations."""


class PreconditionError(TrimError):
    """A caller broke the contract of a border operation.

    Raised for example when a vertex is added to a segment it does not
    lie on, when no polyline has been opened yet, or when an index is
    missing from a renumbering map.
    """


class ImpossibleStateError(TrimError):
    """The border reached a state that correct construction rules out."""


__all__ = [
    'TrimError',
    'PreconditionError',
    'ImpossibleStateError',
]
