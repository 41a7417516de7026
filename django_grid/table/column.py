from __future__ import annotations

from typing import Any, Callable, Dict, Optional, TYPE_CHECKING

from ..components import Component

if TYPE_CHECKING:  # pragma: no cover
    from ..grid import Grid


ALIGNS = {"left", "center", "right"}


def to_lookup(path: str) -> str:
    """``author.publisher.name`` -> ``author__publisher__name``."""
    return (path or "").replace(".", "__")


class Column:
    """Display and query metadata of one grid column.

    ``name`` is what the row value is read from (dot paths walk relations),
    ``column_key`` the ORM lookup used when the front end sorts by it.
    """

    def __init__(self, name: str, label: str = "", column_key: Optional[str] = None):
        self.name = name
        self.label = label or name.split(".")[-1].replace("_", " ").title()
        self.column_key = column_key or to_lookup(name)
        self.grid: Optional["Grid"] = None
        self._display: Optional[Callable[[Any, Any], Any]] = None
        self._attributes: Dict[str, Any] = {
            "width": None,
            "minWidth": None,
            "fixed": None,
            "align": "left",
            "headerAlign": "left",
            "sortable": False,
            "help": None,
            "hide": False,
            "showOverflowTooltip": False,
            "component": None,
        }

    def set_grid(self, grid: "Grid") -> "Column":
        self.grid = grid
        return self

    @property
    def is_sortable(self) -> bool:
        return bool(self._attributes["sortable"])

    def width(self, width) -> "Column":
        self._attributes["width"] = width
        return self

    def min_width(self, width) -> "Column":
        self._attributes["minWidth"] = width
        return self

    def fixed(self, side: str = "left") -> "Column":
        self._attributes["fixed"] = side
        return self

    def align(self, align: str) -> "Column":
        if align not in ALIGNS:
            raise ValueError(f"Invalid align '{align}'")
        self._attributes["align"] = align
        return self

    def header_align(self, align: str) -> "Column":
        if align not in ALIGNS:
            raise ValueError(f"Invalid header align '{align}'")
        self._attributes["headerAlign"] = align
        return self

    def sortable(self, sortable: bool = True) -> "Column":
        self._attributes["sortable"] = sortable
        return self

    def help(self, text: str) -> "Column":
        self._attributes["help"] = text
        return self

    def hide(self, hide: bool = True) -> "Column":
        self._attributes["hide"] = hide
        return self

    def show_overflow_tooltip(self, show: bool = True) -> "Column":
        self._attributes["showOverflowTooltip"] = show
        return self

    def component(self, component: Component) -> "Column":
        """Render cells with a front-end component instead of plain text."""
        self._attributes["component"] = component
        return self

    def display(self, fn: Callable[[Any, Any], Any]) -> "Column":
        """Transform the cell value per row: ``fn(value, obj) -> value``."""
        self._display = fn
        return self

    def render(self, value: Any, obj: Any) -> Any:
        if self._display is None:
            return value
        return self._display(value, obj)

    def get_attributes(self) -> Dict[str, Any]:
        attrs = dict(self._attributes)
        component = attrs.get("component")
        attrs["component"] = component.to_dict() if component is not None else None
        return {
            "prop": self.name,
            "label": self.label,
            "columnKey": self.column_key,
            **attrs,
        }

    def __repr__(self) -> str:
        return f"<Column {self.name!r}>"
