"""Generic row/column block builder used for grid top and bottom regions."""
from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from ..components import to_payload


class Column:
    """One cell of a content row, ``span`` out of 24."""

    def __init__(self, content: Any = None, span: int = 24):
        if not 1 <= int(span) <= 24:
            raise ValueError(f"Column span must be between 1 and 24, got {span}")
        self.span = int(span)
        self.items: List[Any] = []
        if content is not None:
            self.append(content)

    def append(self, content: Any) -> "Column":
        self.items.append(content)
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {"span": self.span, "items": [to_payload(i) for i in self.items]}


class Row:
    def __init__(self, content: Any = None, gutter: int = 0):
        self.gutter = gutter
        self.columns: List[Column] = []
        if content is not None:
            self.column(24, content)

    def column(self, span: int, content: Any) -> "Row":
        """Add a column; ``content`` may be a callable receiving the column."""
        col = Column(span=span)
        if callable(content) and not hasattr(content, "to_dict"):
            content(col)
        else:
            col.append(content)
        self.columns.append(col)
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {"gutter": self.gutter, "columns": [c.to_dict() for c in self.columns]}


class Content:
    """Block of rows rendered above or below a grid."""

    def __init__(self):
        self.rows: List[Row] = []
        self._class_name: Optional[str] = None
        self._style: Optional[str] = None

    def row(self, content: Any) -> "Content":
        """Append a row; ``content`` may be a callable receiving the new row."""
        if isinstance(content, Row):
            row = content
        elif callable(content) and not hasattr(content, "to_dict"):
            row = Row()
            content(row)
        else:
            row = Row(content)
        self.rows.append(row)
        return self

    def class_name(self, class_name: str) -> "Content":
        self._class_name = class_name
        return self

    def style(self, style: str) -> "Content":
        self._style = style
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "className": self._class_name,
            "style": self._style,
            "rows": [r.to_dict() for r in self.rows],
        }
