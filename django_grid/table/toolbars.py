from __future__ import annotations

from typing import Any, Dict, List

from .actions import Action


class CreateButton(Action):
    component_name = "ToolButton"

    def __init__(self, resource: str, **kwargs):
        kwargs.setdefault("icon", "el-icon-plus")
        kwargs.setdefault("type", "primary")
        super().__init__("Create", url=f"{resource}/create", handler="route", **kwargs)


class ToolButton(Action):
    component_name = "ToolButton"

    def __init__(self, content: str = "", **kwargs):
        kwargs.setdefault("type", "default")
        super().__init__(content, **kwargs)


class Toolbars:
    """Buttons shown above the table, split into left and right groups."""

    def __init__(self, resource: str = ""):
        self.resource = resource
        self._left: List[Any] = []
        self._right: List[Any] = []
        self._hide_create = False

    def add_left(self, tool: Any) -> "Toolbars":
        self._left.append(tool)
        return self

    def add_right(self, tool: Any) -> "Toolbars":
        self._right.append(tool)
        return self

    def hide_create_button(self, hide: bool = True) -> "Toolbars":
        self._hide_create = hide
        return self

    def builder_data(self) -> Dict[str, List[Dict[str, Any]]]:
        right = list(self._right)
        if not self._hide_create:
            right.insert(0, CreateButton(self.resource))
        return {
            "left": [t.to_dict() for t in self._left],
            "right": [t.to_dict() for t in right],
        }
