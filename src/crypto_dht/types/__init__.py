"""Shared base types."""

from .base import CamelModel, StrictBaseModel

__all__ = ["CamelModel", "StrictBaseModel"]
