from .actions import Action, ActionButton, Actions, BatchActions
from .column import Column
from .filter import Filter
from .model import Model
from .toolbars import ToolButton, Toolbars

__all__ = [
    "Action",
    "ActionButton",
    "Actions",
    "BatchActions",
    "Column",
    "Filter",
    "Model",
    "ToolButton",
    "Toolbars",
]
