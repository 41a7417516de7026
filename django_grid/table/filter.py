from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional, Sequence, TYPE_CHECKING

from django.db.models import Q

from .column import to_lookup

if TYPE_CHECKING:  # pragma: no cover
    from ..context import GridContext
    from .model import Model

log = logging.getLogger(__name__)


def coerce_value(v: Any, typ: str):
    """Coerce a raw request value to the filter type; None when it cannot be."""
    if v is None:
        return None
    try:
        if typ in {"text", "select"}:
            return str(v)
        if typ == "multiselect":
            if isinstance(v, (list, tuple)):
                return [str(x) for x in v]
            return [str(v)] if str(v) else []
        if typ == "number":
            if isinstance(v, (int, float)):
                return v
            s = str(v)
            return int(s) if s.lstrip("-").isdigit() else float(s)
        if typ == "boolean":
            if isinstance(v, bool):
                return v
            return str(v).lower() in {"1", "true", "yes", "on"}
        if typ == "date":
            if isinstance(v, date):
                return v
            return date.fromisoformat(str(v))
        if typ == "datetime":
            if isinstance(v, datetime):
                return v
            return datetime.fromisoformat(str(v))
    except (TypeError, ValueError):
        return None
    return v


class AbstractFilter:
    """One predicate of the filter form.

    Subclasses set ``lookup``; the request value read for ``column`` becomes
    ``<column lookup>__<lookup>=value``.
    """

    lookup = "exact"

    def __init__(self, column: str, label: str = ""):
        self.column = column
        self.label = label or column.split(".")[-1].replace("_", " ").title()
        self.type = "text"
        self.component: Dict[str, Any] = {"componentName": "Input"}
        self._placeholder: Optional[str] = None
        self._default: Any = None

    @property
    def key(self) -> str:
        return self.column

    @property
    def field_path(self) -> str:
        return to_lookup(self.column)

    # ----- UI ---------------------------------------------------------------
    def placeholder(self, text: str):
        self._placeholder = text
        return self

    def default(self, value: Any):
        self._default = value
        return self

    def select(self, options, multiple: bool = False):
        """Render as a select; ``options`` is a dict or ``(value, label)`` pairs."""
        if isinstance(options, dict):
            options = options.items()
        self.type = "multiselect" if multiple else "select"
        self.component = {
            "componentName": "Select",
            "multiple": multiple,
            "options": [{"value": v, "label": str(lbl)} for v, lbl in options],
        }
        return self

    def number(self):
        self.type = "number"
        self.component = {"componentName": "InputNumber"}
        return self

    def boolean(self):
        self.type = "boolean"
        self.component = {"componentName": "Switch"}
        return self

    def date(self):
        self.type = "date"
        self.component = {"componentName": "DatePicker", "type": "date"}
        return self

    def datetime(self):
        self.type = "datetime"
        self.component = {"componentName": "DatePicker", "type": "datetime"}
        return self

    # ----- query ------------------------------------------------------------
    def read(self, context: "GridContext") -> Any:
        raw = context.param(self.key)
        if raw in (None, ""):
            raw = self._default
        if raw in (None, ""):
            return None
        return coerce_value(raw, self.type)

    def condition(self, value: Any) -> Q:
        return Q(**{f"{self.field_path}__{self.lookup}": value})

    def apply(self, queryset, value: Any):
        return queryset.filter(self.condition(value))

    def form_value(self) -> Any:
        return self._default

    def to_dict(self) -> Dict[str, Any]:
        component = dict(self.component)
        if self._placeholder:
            component["placeholder"] = self._placeholder
        return {
            "column": self.column,
            "label": self.label,
            "type": self.type,
            "lookup": self.lookup,
            "component": component,
        }


class Equal(AbstractFilter):
    lookup = "exact"


class NotEqual(AbstractFilter):
    lookup = "exact"

    def apply(self, queryset, value):
        return queryset.exclude(self.condition(value))


class Like(AbstractFilter):
    lookup = "icontains"


class StartsWith(AbstractFilter):
    lookup = "istartswith"


class Gt(AbstractFilter):
    lookup = "gt"


class Gte(AbstractFilter):
    lookup = "gte"


class Lt(AbstractFilter):
    lookup = "lt"


class Lte(AbstractFilter):
    lookup = "lte"


class In(AbstractFilter):
    lookup = "in"

    def __init__(self, column: str, label: str = ""):
        super().__init__(column, label)
        self.type = "multiselect"

    def select(self, options, multiple: bool = True):
        return super().select(options, multiple=True)

    def read(self, context):
        values = context.param_list(self.key) or list(self._default or [])
        coerced = [coerce_value(v, self.type) for v in values]
        # flatten multiselect coercion and drop empties, __in=[] matches nothing
        flat = [
            x for v in coerced if v is not None and v != []
            for x in (v if isinstance(v, list) else [v])
        ]
        return flat or None

    def form_value(self):
        return list(self._default or [])


class Between(AbstractFilter):
    """Range filter read from ``<column>.start`` and ``<column>.end``."""

    lookup = "range"

    def read(self, context):
        start = coerce_value(context.param(f"{self.key}.start") or None, self.type)
        end = coerce_value(context.param(f"{self.key}.end") or None, self.type)
        if start is None and end is None:
            return None
        return (start, end)

    def condition(self, value) -> Q:
        start, end = value
        q = Q()
        if start is not None:
            q &= Q(**{f"{self.field_path}__gte": start})
        if end is not None:
            q &= Q(**{f"{self.field_path}__lte": end})
        return q

    def form_value(self):
        return {"start": None, "end": None}

    def to_dict(self):
        data = super().to_dict()
        data["component"]["range"] = True
        return data


class Where(AbstractFilter):
    """Filter applied by a callable ``fn(queryset, value) -> queryset``."""

    lookup = "custom"

    def __init__(self, fn: Callable[[Any, Any], Any], label: str = "", column: str = "where"):
        super().__init__(column, label)
        self.fn = fn

    def apply(self, queryset, value):
        return self.fn(queryset, value)


class Filter:
    """Ordered set of predicates bound to the grid's request params."""

    def __init__(self, model: "Model"):
        self.model = model
        self.filters: List[AbstractFilter] = []
        self._disabled = False

    def _add(self, item: AbstractFilter) -> AbstractFilter:
        self.filters.append(item)
        return item

    def equal(self, column: str, label: str = "") -> AbstractFilter:
        return self._add(Equal(column, label))

    def not_equal(self, column: str, label: str = "") -> AbstractFilter:
        return self._add(NotEqual(column, label))

    def like(self, column: str, label: str = "") -> AbstractFilter:
        return self._add(Like(column, label))

    def starts_with(self, column: str, label: str = "") -> AbstractFilter:
        return self._add(StartsWith(column, label))

    def gt(self, column: str, label: str = "") -> AbstractFilter:
        return self._add(Gt(column, label))

    def gte(self, column: str, label: str = "") -> AbstractFilter:
        return self._add(Gte(column, label))

    def lt(self, column: str, label: str = "") -> AbstractFilter:
        return self._add(Lt(column, label))

    def lte(self, column: str, label: str = "") -> AbstractFilter:
        return self._add(Lte(column, label))

    def between(self, column: str, label: str = "") -> AbstractFilter:
        return self._add(Between(column, label))

    def in_(self, column: str, label: str = "") -> AbstractFilter:
        return self._add(In(column, label))

    def where(self, fn: Callable[[Any, Any], Any], label: str = "", column: Optional[str] = None) -> AbstractFilter:
        """Custom filter; unnamed ones get ``where``, ``where_1``, ``where_2``..."""
        if column is None:
            taken = {item.key for item in self.filters}
            column, n = "where", 0
            while column in taken:
                n += 1
                column = f"where_{n}"
        return self._add(Where(fn, label, column))

    def disable(self, disabled: bool = True) -> "Filter":
        self._disabled = disabled
        return self

    def conditions(self, context: "GridContext") -> Sequence[tuple]:
        """(filter, value) pairs for every predicate present in the request."""
        out = []
        for item in self.filters:
            value = item.read(context)
            if value is None:
                continue
            out.append((item, value))
        return out

    def apply(self, context: "GridContext") -> int:
        """Register each active predicate on the model; returns how many."""
        if self._disabled:
            return 0
        active = self.conditions(context)
        for item, value in active:
            self.model.scope(lambda qs, item=item, value=value: item.apply(qs, value))
        if active:
            log.debug("Applied %s filter(s): %s", len(active), [i.key for i, _ in active])
        return len(active)

    def build_filter(self) -> Optional[Dict[str, Any]]:
        if self._disabled or not self.filters:
            return None
        return {
            "filters": [item.to_dict() for item in self.filters],
            "filterFormData": {item.key: item.form_value() for item in self.filters},
        }
