from django_grid.grid import Grid
from django_grid.table.actions import ActionButton
from django_grid.views import GridJsonView

from .models import Book, Category


class BookGridView(GridJsonView):
    def get_grid(self, request, context):
        grid = Grid(Book, context)
        grid.column("id", "ID").sortable().width(80)
        grid.column("title", "Title").sortable()
        grid.column("author.name", "Author").sortable()
        grid.column("author.publisher.name", "Publisher")
        grid.column("pages", "Pages").sortable().align("right")
        grid.quick_search(["title", "author.name"], placeholder="Title or author")
        grid.filter(lambda f: (f.equal("status").select(Book.STATUS_CHOICES), f.gte("pages").number()))
        grid.actions(lambda actions: actions.add(ActionButton("Preview", url=f"{context.resource}/{{key}}/preview")))
        return grid


class CategoryGridView(GridJsonView):
    def get_grid(self, request, context):
        grid = Grid(Category, context)
        grid.column("name", "Name")
        grid.tree().hide_actions()
        return grid
