from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


SIZES = {"medium", "small", "mini"}


@dataclass
class Attributes:
    """Display flags of the table widget itself."""

    stripe: bool = False
    border: bool = False
    size: Optional[str] = None
    fit: bool = True
    show_header: bool = True
    highlight_current_row: bool = False
    empty_text: str = "No data"
    row_key: Optional[str] = None
    height: Any = None
    max_height: Any = None
    selection: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        # front end expects camelCase keys
        return {_camel(k): v for k, v in data.items()}


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)
