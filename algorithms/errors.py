"""
errors.py — Generation Errors
==============================
Everything that can go wrong is caught BEFORE the first Step is built.
Once a generator starts it always runs to a COMPLETE step, so there is
no partial-trace error type.
"""


class SortVisualizerError(Exception):
    """Base class for every error the engine raises on purpose."""


class InvalidInputError(SortVisualizerError, ValueError):
    """Input is empty after parsing, or holds a non-numeric / non-finite value."""


class UnsupportedVariantError(SortVisualizerError, ValueError):
    """Unknown algorithm key, or a variant the algorithm does not offer."""
