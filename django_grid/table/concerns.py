"""Option groups mixed into :class:`django_grid.grid.Grid`."""
from __future__ import annotations

import logging
from functools import reduce
from operator import or_
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from django.db import models
from django.db.models import Q

from ..conf import settings
from ..exceptions import GridConfigurationError
from .attributes import SIZES, Attributes
from .column import to_lookup
from .filter import Filter
from .model import leaf_field

log = logging.getLogger(__name__)


class HasGridAttributes:
    attributes: Attributes

    def stripe(self, stripe: bool = True):
        self.attributes.stripe = stripe
        return self

    def border(self, border: bool = True):
        self.attributes.border = border
        return self

    def size(self, size: str):
        if size not in SIZES:
            raise GridConfigurationError(f"Invalid table size '{size}'")
        self.attributes.size = size
        return self

    def fit(self, fit: bool = True):
        self.attributes.fit = fit
        return self

    def show_header(self, show: bool = True):
        self.attributes.show_header = show
        return self

    def highlight_current_row(self, highlight: bool = True):
        self.attributes.highlight_current_row = highlight
        return self

    def empty_text(self, text: str):
        self.attributes.empty_text = text
        return self

    def row_key(self, key: str):
        self.attributes.row_key = key
        return self

    def height(self, height):
        self.attributes.height = height
        return self

    def max_height(self, height):
        self.attributes.max_height = height
        return self

    def selection(self, selection: bool = True):
        """Show a checkbox column so rows can be picked for batch actions."""
        self.attributes.selection = selection
        return self


class HasPageAttributes:
    _page_sizes: List[int]
    _per_page: int
    _page_background: bool

    def _init_page_attributes(self):
        self._page_sizes = list(settings.GRID_PAGE_SIZES)
        self._per_page = settings.GRID_PER_PAGE
        self._page_background = settings.GRID_PAGE_BACKGROUND

    def page_sizes(self, sizes: Sequence[int]):
        sizes = [int(s) for s in sizes]
        if not sizes or any(s < 1 for s in sizes):
            raise GridConfigurationError("Page sizes must be positive integers")
        self._page_sizes = sizes
        return self

    def per_page(self, per_page: int):
        per_page = int(per_page)
        if per_page < 1:
            raise GridConfigurationError("Rows per page must be >= 1")
        self._per_page = per_page
        if per_page not in self._page_sizes:
            self._page_sizes = sorted({*self._page_sizes, per_page})
        return self

    def page_background(self, background: bool = True):
        self._page_background = background
        return self

    def get_per_page(self) -> int:
        return self._per_page


class HasDefaultSort:
    _default_sort: Dict[str, str]

    def default_sort(self, prop: str, order: str = "asc"):
        if order not in {"asc", "desc"}:
            raise GridConfigurationError(f"Invalid default sort order '{order}'")
        self._default_sort = {"sort_prop": prop, "sort_order": order}
        return self

    def get_default_sort(self) -> Dict[str, str]:
        return self._default_sort


class HasQuickSearch:
    """Free-text search across fields, read from the ``quick_search`` param."""

    _quick_search: Optional[Union[Sequence[str], Callable[[Any, str], Any]]] = None
    _quick_search_placeholder: str = ""

    def quick_search(self, fields=None, placeholder: str = ""):
        """Enable quick search.

        ``fields`` is a list of column names (matched with ``icontains`` and
        OR-ed together) or a callable ``fn(queryset, value) -> queryset``.
        Without fields every text column of the grid is searched.
        """
        if isinstance(fields, str):
            fields = [fields]
        self._quick_search = fields if fields is not None else []
        self._quick_search_placeholder = placeholder or "Search"
        return self

    def _quick_search_fields(self) -> List[str]:
        if self._quick_search:
            return [to_lookup(f) for f in self._quick_search]
        model = self.model.model
        return [
            c.column_key
            for c in self.get_columns()
            if isinstance(leaf_field(model, c.column_key), (models.CharField, models.TextField))
        ]

    def get_quick_search(self):
        if self._quick_search is None:
            return False
        return {"placeholder": self._quick_search_placeholder}

    def apply_quick_search(self) -> bool:
        if self._quick_search is None:
            return False
        value = (self.context.param(settings.GRID_QUICK_SEARCH_PARAM) or "").strip()
        if not value:
            return False
        if callable(self._quick_search):
            fn = self._quick_search
            self.model.scope(lambda qs: fn(qs, value))
        else:
            fields = self._quick_search_fields()
            if not fields:
                return False
            condition = reduce(or_, (Q(**{f"{f}__icontains": value}) for f in fields))
            self.model.scope(lambda qs: qs.filter(condition).distinct())
        log.debug("Quick search %r on %s", value, self.model.model.__name__)
        return True


class HasFilter:
    _filter: Filter

    def filter(self, fn: Callable[[Filter], Any]):
        """Declare filters: ``grid.filter(lambda f: f.like("title"))``."""
        fn(self._filter)
        return self

    def disable_filter(self, disabled: bool = True):
        self._filter.disable(disabled)
        return self

    def get_filter(self) -> Filter:
        return self._filter

    def apply_filter(self) -> int:
        return self._filter.apply(self.context)
