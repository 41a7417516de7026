from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from django.http import HttpRequest, QueryDict

from .conf import settings


@dataclass(frozen=True)
class GridContext:
    """Request-derived inputs a grid needs, captured once per request.

    ``uri`` is the absolute URI the front end fetches data from, ``path`` the
    resource path that row actions and toolbars point at. ``params`` is the
    query string (a ``QueryDict`` or any mapping).
    """

    uri: str = ""
    path: str = ""
    params: Mapping[str, Any] = field(default_factory=QueryDict)
    get_data: bool = False
    resource_url: Optional[str] = None

    @classmethod
    def from_request(cls, request: HttpRequest) -> "GridContext":
        params = request.GET
        flag = (params.get(settings.GRID_DATA_PARAM) or "").strip().lower()
        return cls(
            uri=request.build_absolute_uri(),
            path=request.path_info,
            params=params,
            get_data=flag == "true",
            resource_url=request.build_absolute_uri(request.path_info),
        )

    @property
    def resource(self) -> str:
        return (self.resource_url or self.path).rstrip("/")

    def param(self, key: str, default: Any = None) -> Any:
        value = self.params.get(key, default)
        if isinstance(value, (list, tuple)):
            return value[-1] if value else default
        return value

    def param_list(self, key: str) -> list:
        if hasattr(self.params, "getlist"):
            return [v for v in self.params.getlist(key) if v not in (None, "")]
        raw = self.params.get(key)
        if raw in (None, ""):
            return []
        if isinstance(raw, (list, tuple)):
            return [v for v in raw if v not in (None, "")]
        # comma list fallback
        return [s.strip() for s in str(raw).split(",") if s.strip()]
