from __future__ import annotations

from typing import Any, Dict


class Component:
    """A front-end component: a name plus the attributes it is rendered with."""

    component_name = ""

    def __init__(self, **attributes):
        self.attributes: Dict[str, Any] = dict(attributes)

    def to_dict(self) -> Dict[str, Any]:
        return {"componentName": self.component_name, **self.attributes}


class Html(Component):
    component_name = "Html"

    def __init__(self, html: str = "", **attributes):
        super().__init__(html=html, **attributes)


class Tag(Component):
    """Renders a cell value as a coloured tag."""

    component_name = "Tag"

    def __init__(self, type: str = "", size: str = "small", **attributes):
        super().__init__(type=type, size=size, **attributes)


def to_payload(value: Any) -> Any:
    """Turn components (or lists of them) into plain JSON-ready structures."""
    if value is None:
        return None
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, str):
        return {"componentName": Html.component_name, "html": value}
    if isinstance(value, (list, tuple)):
        return [to_payload(v) for v in value]
    return value
