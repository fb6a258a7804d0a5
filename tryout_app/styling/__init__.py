"""Styling module for the tryout application."""

from .styles import Styles

__all__ = ["Styles"]
