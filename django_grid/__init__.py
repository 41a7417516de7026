"""Declarative admin data grids for Django models."""

from .conf import settings
from .context import GridContext
from .grid import Grid

__all__ = ["settings", "Grid", "GridContext"]
