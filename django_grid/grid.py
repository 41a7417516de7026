from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

from .conf import settings
from .context import GridContext
from .exceptions import GridConfigurationError
from .layout import Content
from .results import GridData, GridView, RelationResult
from .table.actions import Actions, BatchActions
from .table.attributes import Attributes
from .table.column import Column
from .table.concerns import (
    HasDefaultSort,
    HasFilter,
    HasGridAttributes,
    HasPageAttributes,
    HasQuickSearch,
)
from .table.filter import Filter
from .table.model import Model
from .table.toolbars import Toolbars

log = logging.getLogger(__name__)


class Grid(HasGridAttributes, HasPageAttributes, HasDefaultSort, HasQuickSearch, HasFilter):
    """Data table declared against a Django model.

    Build one per request::

        grid = Grid(Book, GridContext.from_request(request))
        grid.column("id", "ID").sortable()
        grid.column("author.name", "Author")
        grid.filter(lambda f: f.like("title"))
        return JsonResponse(grid.serialize())

    :meth:`view` returns the table configuration, :meth:`data` the rows of
    the requested page; :meth:`serialize` picks one from the context's
    ``get_data`` flag.
    """

    component_name = "Grid"

    def __init__(self, model, context: Optional[GridContext] = None):
        self.context = context or GridContext()
        self.attributes = Attributes()
        self._model = Model(model, self)
        self._columns: List[Column] = []
        self._column_attributes: List[dict] = []
        self.relation_results: List[RelationResult] = []
        self._key_name = self._model.get_key_name()
        self._tree = False
        self._parent_key = "parent_id"
        self._data_url = self.context.uri
        self._init_page_attributes()
        self.default_sort(self._key_name, "asc")
        resource = self.context.resource
        self._toolbars = Toolbars(resource)
        self._batch_actions = BatchActions(resource)
        self._actions: Optional[Callable[[Actions], Any]] = None
        self._hide_actions = False
        self._query_applied = False
        self._filter = Filter(self._model)
        self._top: Optional[Content] = None
        self._bottom: Optional[Content] = None

    @property
    def model(self) -> Model:
        """The query adapter; add constraints with ``grid.model.where(...)``."""
        return self._model

    def get_key_name(self) -> str:
        return self._key_name

    def data_url(self, data_url: str) -> "Grid":
        self._data_url = data_url
        return self

    def tree(self, tree: bool = True, parent_key: str = "parent_id") -> "Grid":
        """Return rows nested under ``children`` by ``parent_key`` instead of paged."""
        self._tree = tree
        self._parent_key = parent_key
        return self

    def is_tree(self) -> bool:
        return self._tree

    def get_parent_key(self) -> str:
        return self._parent_key

    # ----- columns ----------------------------------------------------------
    def column(self, name: str, label: str = "", column_key: Optional[str] = None) -> Column:
        """Add a column.

        ``name`` is the row attribute shown; a dot path (``author.name``)
        also eager-loads the relation. ``column_key`` is the lookup used for
        sorting, defaulting to ``name`` with dots turned into ``__``.
        """
        if "." in name:
            self.add_relation_column(name)
        return self._add_column(name, label, column_key)

    def _add_column(self, name: str = "", label: str = "", column_key: Optional[str] = None) -> Column:
        column = Column(name, label, column_key)
        column.set_grid(self)
        self._columns.append(column)
        self._column_attributes = []
        return column

    def add_relation_column(self, name: str) -> RelationResult:
        """Eager-load the relation part of ``name`` and report whether it resolved.

        An unknown relation never stops the column from being added; it is
        logged, and raises only when ``GRID_STRICT_RELATIONS`` is on.
        """
        relation = name.rsplit(".", 1)[0]
        result = self._model.load(relation)
        result = RelationResult(name, result.relation, result.ok, result.loader, result.reason)
        self.relation_results.append(result)
        if not result.ok:
            if settings.GRID_STRICT_RELATIONS:
                raise GridConfigurationError(f"Column '{name}': {result.reason}")
            log.warning("Column '%s' on %s: %s", name, self._model.model.__name__, result.reason)
        return result

    def get_columns(self) -> List[Column]:
        return list(self._columns)

    def _build_column_attributes(self) -> List[dict]:
        if not self._column_attributes:
            self._column_attributes = [c.get_attributes() for c in self._columns]
        return self._column_attributes

    # ----- actions / toolbars / content -------------------------------------
    def toolbars(self, fn: Callable[[Toolbars], Any]) -> "Grid":
        fn(self._toolbars)
        return self

    def actions(self, fn: Callable[[Actions], Any]) -> "Grid":
        """Register ``fn(actions)``, called once per row with ``actions.row``/``actions.key`` set."""
        self._actions = fn
        return self

    def batch_actions(self, fn: Callable[[BatchActions], Any]) -> "Grid":
        fn(self._batch_actions)
        return self

    def hide_actions(self, hide: bool = True) -> "Grid":
        self._hide_actions = hide
        return self

    def has_actions(self) -> bool:
        return not self._hide_actions

    def get_actions(self, row: Any, key: Any) -> List[dict]:
        actions = Actions(self.context.resource)
        actions.set_row(row).set_key(key)
        if self._actions:
            self._actions(actions)
        return actions.builder_actions()

    def top(self, fn: Callable[[Content], Any]) -> "Grid":
        self._top = Content()
        fn(self._top)
        return self

    def bottom(self, fn: Callable[[Content], Any]) -> "Grid":
        self._bottom = Content()
        fn(self._bottom)
        return self

    # ----- serialization ----------------------------------------------------
    def apply_query(self) -> None:
        """Register request scopes on the model; a no-op after the first call."""
        if self._query_applied:
            return
        self._query_applied = True
        self.apply_quick_search()
        self.apply_filter()

    def data(self) -> GridData:
        """Apply quick search and filters, then fetch the requested page."""
        self._build_column_attributes()
        self.apply_query()
        return GridData(self._model.build_data())

    def view(self) -> GridView:
        return GridView(
            component_name=self.component_name,
            routers={"resource": self.context.resource},
            key_name=self._key_name,
            selection=self.attributes.selection,
            tree=self._tree,
            default_sort=self.get_default_sort(),
            column_attributes=self._build_column_attributes(),
            attributes=self.attributes.to_dict(),
            data_url=self._data_url,
            page_sizes=self._page_sizes,
            per_page=self._per_page,
            page_background=self._page_background,
            toolbars=self._toolbars.builder_data(),
            batch_actions=self._batch_actions.builder_actions(),
            quick_search=self.get_quick_search(),
            filter=self._filter.build_filter(),
            top=self._top.to_dict() if self._top else None,
            bottom=self._bottom.to_dict() if self._bottom else None,
        )

    def serialize(self) -> dict:
        if self.context.get_data:
            return self.data().to_dict()
        return self.view().to_dict()

    def to_dict(self) -> dict:
        return self.serialize()
