"""Exception types raised by the picker.

Only :class:`PickError` escapes ``FuzzyPicker.pick``; the others are absorbed
into lifecycle phases by the interaction loop.
"""

from __future__ import annotations


class FuzzyPickerError(Exception):
    """Base class for picker errors."""


class EmptyStoreError(FuzzyPickerError):
    """Raised when a pick session is requested with zero candidates."""


class PickError(FuzzyPickerError):
    """Terminal I/O failure that aborted a pick session."""


__all__ = ["EmptyStoreError", "FuzzyPickerError", "PickError"]
