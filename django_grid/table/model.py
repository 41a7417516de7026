from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, TYPE_CHECKING

from django.core.exceptions import FieldDoesNotExist
from django.core.paginator import EmptyPage, Paginator
from django.db import models
from django.db.models.query import QuerySet

from ..conf import settings
from ..exceptions import GridConfigurationError, InvalidGridRequest
from ..results import RelationResult
from .column import to_lookup

if TYPE_CHECKING:  # pragma: no cover
    from ..grid import Grid

log = logging.getLogger(__name__)

SORT_ORDERS = {"asc", "desc"}


def resolve_relation(model: type[models.Model], path: str) -> RelationResult:
    """Check every hop of a dot/underscore relation path against ``model``.

    - Forward FK/OneToOne -> select_related
    - Reverse OneToOne -> select_related
    - Forward/Reverse M2M, reverse ForeignKey -> prefetch_related
    Once a hop needs prefetching the rest of the path is prefetched too.
    """
    parts = [p for p in path.replace(".", "__").split("__") if p]
    if not parts:
        return RelationResult(path, "", False, reason="empty relation path")
    current = model
    loader = "select_related"
    for i, part in enumerate(parts):
        try:
            field = current._meta.get_field(part)
        except FieldDoesNotExist:
            return RelationResult(path, "__".join(parts), False, reason=f"{current.__name__} has no field '{part}'")
        if not getattr(field, "is_relation", False):
            return RelationResult(path, "__".join(parts), False, reason=f"{current.__name__}.{part} is not a relation")
        if field.related_model is None:
            # generic foreign key: target model varies per row
            if i < len(parts) - 1:
                return RelationResult(
                    path, "__".join(parts), False,
                    reason=f"{current.__name__}.{part} is a generic relation and cannot be traversed",
                )
            loader = "prefetch_related"
            break
        if field.many_to_many or field.one_to_many:
            loader = "prefetch_related"
        current = field.related_model
    return RelationResult(path, "__".join(parts), True, loader=loader)


def leaf_field(model: type[models.Model], path: str):
    """Model field at the end of a relation path, or None."""
    current = model
    field = None
    for part in [p for p in path.replace(".", "__").split("__") if p]:
        if current is None:
            return None
        try:
            field = current._meta.get_field(part)
        except FieldDoesNotExist:
            return None
        current = field.related_model if field.is_relation else None
    return field


def get_path_value(obj: Any, path: str) -> Any:
    """Walk ``author.publisher.name`` through attributes; None on any gap.

    To-many hops yield a list with one value per related object.
    """
    if obj is None:
        return None
    head, _, rest = (path or "").partition(".")
    value = obj.get(head) if isinstance(obj, dict) else getattr(obj, head, None)
    if isinstance(value, models.Manager):
        items = list(value.all())
        return [get_path_value(i, rest) for i in items] if rest else items
    if callable(value) and not isinstance(value, models.Model):
        value = value()
    if not rest:
        return value
    return get_path_value(value, rest)


def to_json_value(value: Any) -> Any:
    """Model instances become their ``str``; dates and decimals are left to DjangoJSONEncoder."""
    if isinstance(value, models.Model):
        return str(value)
    if isinstance(value, (list, tuple)):
        return [to_json_value(v) for v in value]
    return value


class Model:
    """Adapter around the queryset a grid reads its rows from.

    Constraints added through :meth:`where`, :meth:`exclude` and
    :meth:`scope` are applied lazily, in order, when the data is built.
    """

    def __init__(self, model, grid: Optional["Grid"] = None):
        if isinstance(model, QuerySet):
            self._queryset = model
            self._model = model.model
        elif isinstance(model, models.Model):
            self._model = type(model)
            self._queryset = self._model._default_manager.all()
        elif isinstance(model, type) and issubclass(model, models.Model):
            self._model = model
            self._queryset = model._default_manager.all()
        else:
            raise TypeError(f"Grid needs a Django model, instance or queryset, got {model!r}")
        self.grid = grid
        self._select_related: List[str] = []
        self._prefetch_related: List[str] = []
        self._scopes: List[Callable[[QuerySet], QuerySet]] = []
        self._sort: Optional[Tuple[str, str]] = None
        self._per_page: Optional[int] = None

    # ----- model ------------------------------------------------------------
    @property
    def model(self) -> type[models.Model]:
        return self._model

    def get_key_name(self) -> str:
        return self._model._meta.pk.name

    # ----- eager loading ----------------------------------------------------
    def with_(self, *relations: str) -> "Model":
        """Eager-load relations; returns self so calls chain."""
        for relation in relations:
            self.load(relation)
        return self

    def load(self, relation: str) -> RelationResult:
        result = resolve_relation(self._model, relation)
        if not result.ok:
            return result
        target = self._select_related if result.loader == "select_related" else self._prefetch_related
        if result.relation not in target:
            target.append(result.relation)
            log.debug("Eager loading %s.%s via %s", self._model.__name__, result.relation, result.loader)
        return result

    @property
    def eager_loads(self) -> List[str]:
        return [*self._select_related, *self._prefetch_related]

    @property
    def select_related(self) -> List[str]:
        return list(self._select_related)

    @property
    def prefetch_related(self) -> List[str]:
        return list(self._prefetch_related)

    # ----- constraints ------------------------------------------------------
    def scope(self, fn: Callable[[QuerySet], QuerySet]) -> "Model":
        self._scopes.append(fn)
        return self

    def where(self, *args, **kwargs) -> "Model":
        return self.scope(lambda qs: qs.filter(*args, **kwargs))

    def exclude(self, *args, **kwargs) -> "Model":
        return self.scope(lambda qs: qs.exclude(*args, **kwargs))

    def annotate(self, *args, **kwargs) -> "Model":
        return self.scope(lambda qs: qs.annotate(*args, **kwargs))

    def order_by(self, prop: str, order: str = "asc") -> "Model":
        if order not in SORT_ORDERS:
            raise GridConfigurationError(f"Invalid sort order '{order}'")
        self._sort = (prop, order)
        return self

    def paginate(self, per_page: int) -> "Model":
        self._per_page = int(per_page)
        return self

    # ----- query ------------------------------------------------------------
    def get_queryset(self) -> QuerySet:
        qs = self._queryset
        if self._select_related:
            qs = qs.select_related(*self._select_related)
        if self._prefetch_related:
            qs = qs.prefetch_related(*self._prefetch_related)
        for fn in self._scopes:
            qs = fn(qs)
        return qs

    def _sortable_keys(self) -> Dict[str, str]:
        if self.grid is None:
            return {}
        keys = {}
        for column in self.grid.get_columns():
            if column.is_sortable:
                keys[column.name] = column.column_key
                keys[column.column_key] = column.column_key
        return keys

    def resolve_sort(self) -> Optional[Tuple[str, str]]:
        """Explicit sort, else the request's ``sort_prop``/``sort_order``, else the default."""
        if self._sort:
            return self._sort
        context = self.grid.context if self.grid else None
        prop = context.param("sort_prop") if context else None
        if prop:
            order = (context.param("sort_order") or "asc").lower()
            order = {"ascending": "asc", "descending": "desc"}.get(order, order)
            if order not in SORT_ORDERS:
                raise InvalidGridRequest(f"Invalid sort order '{order}'")
            sortable = self._sortable_keys()
            if prop not in sortable:
                raise InvalidGridRequest(f"Column '{prop}' is not sortable")
            return sortable[prop], order
        if self.grid is not None and self.grid.get_default_sort():
            default = self.grid.get_default_sort()
            return to_lookup(default["sort_prop"]), default["sort_order"]
        return None

    def apply_sort(self, qs: QuerySet) -> QuerySet:
        sort = self.resolve_sort()
        if not sort:
            return qs
        prop, order = sort
        pk = self._model._meta.pk.name
        ordering = [prop if order == "asc" else f"-{prop}"]
        if prop not in {pk, "pk"}:
            ordering.append(pk)
        return qs.order_by(*ordering)

    def _page_params(self) -> Tuple[int, int]:
        context = self.grid.context if self.grid else None
        default_size = self._per_page or (self.grid.get_per_page() if self.grid else settings.GRID_PER_PAGE)
        raw_page = context.param("page", "1") if context else "1"
        raw_size = context.param("per_page", default_size) if context else default_size
        try:
            page = int(raw_page)
        except (TypeError, ValueError):
            raise InvalidGridRequest(f"Invalid page '{raw_page}'")
        try:
            size = int(raw_size)
        except (TypeError, ValueError):
            raise InvalidGridRequest(f"Invalid per_page '{raw_size}'")
        if page < 1:
            raise InvalidGridRequest("Page must be >= 1")
        if size < 1:
            raise InvalidGridRequest("per_page must be >= 1")
        size = min(size, settings.GRID_MAX_PER_PAGE)
        return page, size

    def build_data(self) -> Dict[str, Any]:
        """Run the query and return the current page, or the whole tree."""
        qs = self.apply_sort(self.get_queryset())
        if self.grid is not None and self.grid.is_tree():
            rows = self.build_rows(qs)
            data = self.build_tree(rows, self.grid.get_parent_key())
            return {
                "current_page": 1,
                "per_page": len(rows),
                "last_page": 1,
                "total": len(rows),
                "data": data,
            }
        page_number, size = self._page_params()
        paginator = Paginator(qs, size)
        try:
            page = paginator.page(page_number)
        except EmptyPage:
            # past the end: serve the last page
            page = paginator.page(paginator.num_pages)
        log.debug(
            "Grid page %s/%s of %s (%s rows)",
            page.number, paginator.num_pages, self._model.__name__, paginator.count,
        )
        return {
            "current_page": page.number,
            "per_page": size,
            "last_page": paginator.num_pages,
            "total": paginator.count,
            "data": self.build_rows(page.object_list),
        }

    def build_rows(self, objects: Iterable[models.Model]) -> List[Dict[str, Any]]:
        columns = self.grid.get_columns() if self.grid else []
        key_name = self.get_key_name()
        rows = []
        for obj in objects:
            key = getattr(obj, key_name)
            row: Dict[str, Any] = {key_name: key}
            for column in columns:
                value = get_path_value(obj, column.name)
                row[column.name] = to_json_value(column.render(value, obj))
            if self.grid is not None:
                if self.grid.is_tree():
                    parent_key = self.grid.get_parent_key()
                    row[parent_key] = getattr(obj, parent_key, None)
                if self.grid.has_actions():
                    row["grid_actions"] = self.grid.get_actions(obj, key)
            rows.append(row)
        return rows

    def build_tree(self, rows: Sequence[Dict[str, Any]], parent_key: str) -> List[Dict[str, Any]]:
        key_name = self.get_key_name()
        by_key = {row[key_name]: row for row in rows}
        roots = []
        for row in rows:
            parent = by_key.get(row.get(parent_key))
            if parent is None or parent is row:
                roots.append(row)
            else:
                parent.setdefault("children", []).append(row)
        return roots
