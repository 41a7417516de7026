from django.http import QueryDict
from django.test import TestCase, override_settings

from django_grid.components import Html, Tag
from django_grid.context import GridContext
from django_grid.exceptions import GridConfigurationError
from django_grid.grid import Grid
from django_grid.table.actions import ActionButton
from django_grid.table.toolbars import ToolButton
from testproject.library.models import Author, Book, Category, Publisher


def make_context(query="", get_data=False, path="/admin/books"):
    return GridContext(uri=f"http://testserver{path}?{query}", path=path, params=QueryDict(query), get_data=get_data)


class GridColumnTests(TestCase):
    def test_columns_keep_insertion_order(self):
        grid = Grid(Book, make_context())
        names = ["id", "title", "status", "pages", "price"]
        for name in names:
            grid.column(name)
        self.assertEqual([c.name for c in grid.get_columns()], names)

    def test_relation_column_eager_loads_relation(self):
        grid = Grid(Book, make_context())
        column = grid.column("author.name", "Name")

        self.assertIn("author", grid.model.eager_loads)
        self.assertEqual(grid.model.select_related, ["author"])
        self.assertEqual(column.column_key, "author__name")
        result = grid.relation_results[0]
        self.assertTrue(result.ok)
        self.assertEqual(result.loader, "select_related")

        attrs = grid.view().to_dict()["columnAttributes"]
        self.assertEqual([a["prop"] for a in attrs], ["author.name"])
        self.assertEqual(attrs[0]["label"], "Name")

    def test_nested_and_many_relations_choose_loader(self):
        grid = Grid(Book, make_context())
        grid.column("author.publisher.name")
        grid.column("tags.name")
        self.assertEqual(grid.model.select_related, ["author__publisher"])
        self.assertEqual(grid.model.prefetch_related, ["tags"])

    def test_unknown_relation_still_adds_column(self):
        grid = Grid(Book, make_context())
        with self.assertLogs("django_grid.grid", level="WARNING"):
            grid.column("editor.name", "Editor")
            grid.column("title.upper")

        self.assertEqual([c.name for c in grid.get_columns()], ["editor.name", "title.upper"])
        self.assertEqual(grid.model.eager_loads, [])
        failed = [r for r in grid.relation_results if not r]
        self.assertEqual(len(failed), 2)
        self.assertIn("no field 'editor'", failed[0].reason)
        self.assertIn("not a relation", failed[1].reason)

    @override_settings(GRID_STRICT_RELATIONS=True)
    def test_strict_relations_raise(self):
        grid = Grid(Book, make_context())
        with self.assertRaises(GridConfigurationError):
            grid.column("editor.name")

    def test_add_relation_column_returns_result(self):
        grid = Grid(Author, make_context())
        result = grid.add_relation_column("books.title")
        self.assertTrue(result)
        self.assertEqual(result.relation, "books")
        self.assertEqual(result.loader, "prefetch_related")
        # only the eager load, no column
        self.assertEqual(grid.get_columns(), [])

    def test_column_attributes(self):
        grid = Grid(Book, make_context())
        grid.column("status", "Status").sortable().width(120).align("center").component(Tag(type="success"))
        attrs = grid.view().column_attributes[0]
        self.assertEqual(attrs["prop"], "status")
        self.assertTrue(attrs["sortable"])
        self.assertEqual(attrs["width"], 120)
        self.assertEqual(attrs["align"], "center")
        self.assertEqual(attrs["component"], {"componentName": "Tag", "type": "success", "size": "small"})

    def test_default_label_is_humanized(self):
        grid = Grid(Book, make_context())
        self.assertEqual(grid.column("published_on").label, "Published On")
        self.assertEqual(grid.column("author.name").label, "Name")

    def test_invalid_align_rejected(self):
        grid = Grid(Book, make_context())
        with self.assertRaises(ValueError):
            grid.column("title").align("middle")


class GridSerializeTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        publisher = Publisher.objects.create(name="Allen & Unwin")
        author = Author.objects.create(name="J. R. R. Tolkien", publisher=publisher)
        Book.objects.create(title="The Hobbit", author=author, pages=310)

    def test_view_mode_keys(self):
        grid = Grid(Book, make_context("page=1"))
        grid.column("title")
        data = grid.serialize()
        for key in ("componentName", "keyName", "columnAttributes", "dataUrl"):
            self.assertIn(key, data)
        self.assertNotIn("code", data)
        self.assertEqual(data["componentName"], "Grid")
        self.assertEqual(data["keyName"], "id")
        self.assertEqual(data["dataUrl"], "http://testserver/admin/books?page=1")
        self.assertEqual(data["routers"], {"resource": "/admin/books"})
        self.assertEqual(data["defaultSort"], {"sort_prop": "id", "sort_order": "asc"})
        self.assertEqual(data["perPage"], 10)
        self.assertFalse(data["quickSearch"])
        self.assertIsNone(data["filter"])
        self.assertIsNone(data["top"])

    def test_data_mode_payload(self):
        grid = Grid(Book, make_context(get_data=True))
        grid.column("title")
        data = grid.serialize()
        self.assertEqual(data["code"], 200)
        self.assertIn("data", data)
        self.assertEqual(data["data"]["total"], 1)
        self.assertEqual(data["data"]["data"][0]["title"], "The Hobbit")

    def test_data_url_override(self):
        grid = Grid(Book, make_context()).data_url("/api/books")
        self.assertEqual(grid.view().data_url, "/api/books")

    def test_grid_from_instance_and_queryset(self):
        book = Book.objects.get()
        self.assertEqual(Grid(book, make_context()).get_key_name(), "id")
        grid = Grid(Book.objects.filter(pages__gt=1000), make_context(get_data=True))
        self.assertEqual(grid.data().page["total"], 0)

    def test_rejects_non_models(self):
        with self.assertRaises(TypeError):
            Grid(object(), make_context())

    def test_table_and_page_attributes(self):
        grid = Grid(Book, make_context())
        grid.stripe().border().size("small").selection().empty_text("Nothing yet")
        grid.per_page(25).page_background(False)
        view = grid.view().to_dict()
        self.assertTrue(view["selection"])
        self.assertTrue(view["attributes"]["stripe"])
        self.assertEqual(view["attributes"]["size"], "small")
        self.assertEqual(view["attributes"]["emptyText"], "Nothing yet")
        self.assertEqual(view["perPage"], 25)
        self.assertIn(25, view["pageSizes"])
        self.assertFalse(view["pageBackground"])

    def test_bad_configuration_rejected(self):
        grid = Grid(Book, make_context())
        with self.assertRaises(GridConfigurationError):
            grid.default_sort("title", "up")
        with self.assertRaises(GridConfigurationError):
            grid.size("huge")
        with self.assertRaises(GridConfigurationError):
            grid.page_sizes([0, 10])

    def test_toolbars_and_batch_actions(self):
        grid = Grid(Book, make_context())
        grid.toolbars(lambda t: t.add_left(ToolButton("Export", url="/export")))
        grid.batch_actions(lambda b: b.add(ActionButton("Publish", url="/admin/books/{keys}/publish")))
        view = grid.view().to_dict()

        self.assertEqual(view["toolbars"]["left"][0]["content"], "Export")
        self.assertEqual(view["toolbars"]["right"][0]["uri"], "/admin/books/create")
        self.assertEqual([a["content"] for a in view["batchActions"]], ["Delete selected", "Publish"])

        grid.toolbars(lambda t: t.hide_create_button())
        grid.batch_actions(lambda b: b.hide_batch_delete())
        view = grid.view().to_dict()
        self.assertEqual(view["toolbars"]["right"], [])
        self.assertEqual([a["content"] for a in view["batchActions"]], ["Publish"])

    def test_top_and_bottom_content(self):
        grid = Grid(Book, make_context())
        grid.top(lambda c: c.row(Html("<b>Books</b>")))
        grid.bottom(lambda c: c.row(lambda r: r.column(12, "left").column(12, "right")))
        view = grid.view().to_dict()

        self.assertEqual(view["top"]["rows"][0]["columns"][0]["items"][0]["html"], "<b>Books</b>")
        spans = [c["span"] for c in view["bottom"]["rows"][0]["columns"]]
        self.assertEqual(spans, [12, 12])

    def test_filter_definition(self):
        grid = Grid(Book, make_context())
        grid.filter(lambda f: (f.like("title").placeholder("Title"), f.between("published_on").date()))
        definition = grid.view().filter
        self.assertEqual([d["column"] for d in definition["filters"]], ["title", "published_on"])
        self.assertEqual(definition["filters"][0]["component"]["placeholder"], "Title")
        self.assertEqual(definition["filterFormData"]["published_on"], {"start": None, "end": None})

        grid.disable_filter()
        self.assertIsNone(grid.view().filter)


class GridActionsTests(TestCase):
    def test_default_row_actions(self):
        grid = Grid(Book, make_context())
        actions = grid.get_actions(None, 7)
        self.assertEqual([a["content"] for a in actions], ["Edit", "Delete"])
        self.assertEqual(actions[0]["uri"], "/admin/books/7/edit")
        self.assertEqual(actions[1]["uri"], "/admin/books/7")
        self.assertEqual(actions[1]["method"], "delete")

    def test_row_actions_closure_sees_row(self):
        seen = []

        def configure(actions):
            seen.append((actions.row, actions.key))
            actions.hide_delete_action()
            actions.prepend(ActionButton("Copy", url="/admin/books/{key}/copy"))

        grid = Grid(Book, make_context()).actions(configure)
        actions = grid.get_actions("row", 3)
        self.assertEqual(seen, [("row", 3)])
        self.assertEqual([a["content"] for a in actions], ["Copy", "Edit"])
        self.assertEqual(actions[0]["uri"], "/admin/books/3/copy")

    def test_hide_all_row_actions(self):
        grid = Grid(Book, make_context()).actions(lambda a: a.hide_actions())
        self.assertEqual(grid.get_actions(None, 1), [])


class GridTreeTests(TestCase):
    def test_tree_rows_nest_children(self):
        root = Category.objects.create(name="Fiction")
        child = Category.objects.create(name="Fantasy", parent=root)
        Category.objects.create(name="High fantasy", parent=child)
        Category.objects.create(name="Non-fiction")

        grid = Grid(Category, make_context(get_data=True)).tree().hide_actions()
        grid.column("name")
        page = grid.data().page

        self.assertTrue(grid.view().tree)
        self.assertEqual(page["total"], 4)
        self.assertEqual([r["name"] for r in page["data"]], ["Fiction", "Non-fiction"])
        fantasy = page["data"][0]["children"][0]
        self.assertEqual(fantasy["name"], "Fantasy")
        self.assertEqual(fantasy["children"][0]["name"], "High fantasy")
        self.assertNotIn("grid_actions", fantasy)
