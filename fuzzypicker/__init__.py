"""Public package surface for fuzzypicker.

Exports the ``FuzzyPicker`` facade and its error types. ``main`` runs the CLI
and is imported lazily to keep package imports lightweight.
"""

from __future__ import annotations

from .errors import EmptyStoreError, FuzzyPickerError, PickError
from .picker import FuzzyPicker
from .state import Phase


def main(*args, **kwargs):
    """Lazily import CLI entrypoint."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "EmptyStoreError",
    "FuzzyPicker",
    "FuzzyPickerError",
    "Phase",
    "PickError",
    "main",
]
