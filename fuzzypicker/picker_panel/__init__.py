"""Picker session controller exports."""

from .controller import PickerController

__all__ = ["PickerController"]
