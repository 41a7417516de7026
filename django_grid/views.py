from __future__ import annotations

import logging

from django.http import HttpRequest, JsonResponse
from django.views import View

from .context import GridContext
from .exceptions import InvalidGridRequest
from .grid import Grid

log = logging.getLogger(__name__)


class GridJsonView(View):
    """Serve a grid's view configuration, or its rows when ``get_data=true``.

    Subclasses implement :meth:`get_grid`::

        class BookGridView(GridJsonView):
            def get_grid(self, request, context):
                grid = Grid(Book, context)
                grid.column("title").sortable()
                return grid
    """

    http_method_names = ["get"]

    def get_context(self, request: HttpRequest) -> GridContext:
        return GridContext.from_request(request)

    def get_grid(self, request: HttpRequest, context: GridContext) -> Grid:
        raise NotImplementedError("You must override get_grid()")

    def get(self, request: HttpRequest, *args, **kwargs) -> JsonResponse:
        context = self.get_context(request)
        grid = self.get_grid(request, context)
        try:
            payload = grid.data().to_dict() if context.get_data else grid.view().to_dict()
        except InvalidGridRequest as exc:
            log.info("Rejected grid request %s: %s", request.get_full_path(), exc)
            return JsonResponse({"code": 400, "message": str(exc)}, status=400)
        return JsonResponse(payload)
