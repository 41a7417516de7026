from __future__ import annotations

from typing import Any, Dict, List, Optional


class Action:
    """Button descriptor rendered in a row or batch action area."""

    component_name = "ActionButton"

    def __init__(
        self,
        content: str = "",
        *,
        url: Optional[str] = None,
        handler: str = "route",
        confirm: Optional[str] = None,
        type: str = "text",
        icon: Optional[str] = None,
        order: int = 0,
    ):
        self.content = content
        self.url = url
        self.handler = handler
        self.confirm = confirm
        self.type = type
        self.icon = icon
        self.order = order
        self.row: Any = None
        self.key: Any = None

    def bind(self, row: Any = None, key: Any = None) -> "Action":
        self.row = row
        self.key = key
        return self

    def get_url(self) -> Optional[str]:
        if self.url and self.key is not None:
            return self.url.replace("{key}", str(self.key))
        return self.url

    def to_dict(self) -> Dict[str, Any]:
        return {
            "componentName": self.component_name,
            "content": self.content,
            "handler": self.handler,
            "uri": self.get_url(),
            "confirm": self.confirm,
            "type": self.type,
            "icon": self.icon,
            "order": self.order,
        }


class ActionButton(Action):
    """Free-form row or batch action."""


class EditAction(Action):
    def __init__(self, resource: str, **kwargs):
        kwargs.setdefault("icon", "el-icon-edit")
        kwargs.setdefault("order", 1)
        super().__init__("Edit", url=f"{resource}/{{key}}/edit", handler="route", **kwargs)


class DeleteAction(Action):
    def __init__(self, resource: str, **kwargs):
        kwargs.setdefault("icon", "el-icon-delete")
        kwargs.setdefault("confirm", "Are you sure you want to delete this row?")
        kwargs.setdefault("order", 2)
        super().__init__("Delete", url=f"{resource}/{{key}}", handler="request", **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["method"] = "delete"
        return data


class BatchDelete(Action):
    def __init__(self, resource: str, **kwargs):
        kwargs.setdefault("confirm", "Are you sure you want to delete the selected rows?")
        super().__init__("Delete selected", url=f"{resource}/{{keys}}", handler="request", **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["method"] = "delete"
        return data


class Actions:
    """Per-row action set, rebuilt for every row the grid serializes."""

    def __init__(self, resource: str = ""):
        self.resource = resource
        self.row: Any = None
        self.key: Any = None
        self._prepend: List[Action] = []
        self._append: List[Action] = []
        self._hide_edit = False
        self._hide_delete = False
        self._hide_all = False

    def set_row(self, row: Any) -> "Actions":
        self.row = row
        return self

    def set_key(self, key: Any) -> "Actions":
        self.key = key
        return self

    def add(self, action: Action) -> "Actions":
        self._append.append(action)
        return self

    def prepend(self, action: Action) -> "Actions":
        self._prepend.append(action)
        return self

    def hide_edit_action(self, hide: bool = True) -> "Actions":
        self._hide_edit = hide
        return self

    def hide_delete_action(self, hide: bool = True) -> "Actions":
        self._hide_delete = hide
        return self

    def hide_actions(self, hide: bool = True) -> "Actions":
        self._hide_all = hide
        return self

    def builder_actions(self) -> List[Dict[str, Any]]:
        if self._hide_all:
            return []
        actions: List[Action] = list(self._prepend)
        if not self._hide_edit:
            actions.append(EditAction(self.resource))
        if not self._hide_delete:
            actions.append(DeleteAction(self.resource))
        actions.extend(self._append)
        return [a.bind(self.row, self.key).to_dict() for a in actions]


class BatchActions:
    def __init__(self, resource: str = ""):
        self.resource = resource
        self._actions: List[Action] = []
        self._hide_delete = False

    def add(self, action: Action) -> "BatchActions":
        self._actions.append(action)
        return self

    def hide_batch_delete(self, hide: bool = True) -> "BatchActions":
        self._hide_delete = hide
        return self

    def builder_actions(self) -> List[Dict[str, Any]]:
        actions: List[Action] = []
        if not self._hide_delete:
            actions.append(BatchDelete(self.resource))
        actions.extend(self._actions)
        return [a.to_dict() for a in actions]
