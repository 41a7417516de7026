from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class RelationResult:
    """Outcome of registering the eager load implied by a dot-path column.

    ``relation`` is the ORM lookup (``author__publisher``) and ``loader`` the
    queryset method used for it. ``ok`` is False when any hop of the path is
    not a relation on the model; ``reason`` then says which one.
    """

    path: str
    relation: str
    ok: bool
    loader: Optional[str] = None
    reason: str = ""

    def __bool__(self) -> bool:
        return self.ok


@dataclass
class GridData:
    """Rows of the current page, returned for data requests."""

    page: Dict[str, Any]
    code: int = 200

    @property
    def rows(self) -> List[Dict[str, Any]]:
        return self.page.get("data", [])

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "data": self.page}


@dataclass
class GridView:
    """View configuration the front end renders the empty table from."""

    component_name: str
    routers: Dict[str, str]
    key_name: str
    selection: bool
    tree: bool
    default_sort: Dict[str, str]
    column_attributes: List[Dict[str, Any]]
    attributes: Dict[str, Any]
    data_url: str
    page_sizes: List[int]
    per_page: int
    page_background: bool
    toolbars: Dict[str, Any]
    batch_actions: List[Dict[str, Any]]
    quick_search: Any
    filter: Any
    top: Optional[Dict[str, Any]] = None
    bottom: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "componentName": self.component_name,
            "routers": dict(self.routers),
            "keyName": self.key_name,
            "selection": self.selection,
            "tree": self.tree,
            "defaultSort": dict(self.default_sort),
            "columnAttributes": list(self.column_attributes),
            "attributes": dict(self.attributes),
            "dataUrl": self.data_url,
            "pageSizes": list(self.page_sizes),
            "perPage": self.per_page,
            "pageBackground": self.page_background,
            "toolbars": self.toolbars,
            "batchActions": self.batch_actions,
            "quickSearch": self.quick_search,
            "filter": self.filter,
            "top": self.top,
            "bottom": self.bottom,
        }
