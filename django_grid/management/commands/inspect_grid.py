import json

from django.apps import apps
from django.core.management.base import BaseCommand, CommandError
from django.core.serializers.json import DjangoJSONEncoder
from django.http import QueryDict

from django_grid.context import GridContext
from django_grid.grid import Grid


class Command(BaseCommand):
    help = "Print the view configuration (or a data page) of a grid over a model"

    def add_arguments(self, parser):
        parser.add_argument("model", help="Model as app_label.ModelName")
        parser.add_argument("columns", nargs="+", help="Column names; dot paths follow relations")
        parser.add_argument("--data", action="store_true", help="Print rows instead of the view configuration")
        parser.add_argument("--page", type=int, default=1)
        parser.add_argument("--per-page", type=int, default=None)
        parser.add_argument("--search", default="", help="Quick search value across text columns")
        parser.add_argument("--resource", default="/admin/grid", help="Resource path used for action URLs")

    def handle(self, *args, **options):
        try:
            model = apps.get_model(options["model"])
        except (LookupError, ValueError) as exc:
            raise CommandError(f"Unknown model '{options['model']}': {exc}")

        params = QueryDict(mutable=True)
        params["page"] = str(options["page"])
        if options["per_page"]:
            params["per_page"] = str(options["per_page"])
        if options["search"]:
            params["quick_search"] = options["search"]
        context = GridContext(
            uri=f"{options['resource']}?{params.urlencode()}",
            path=options["resource"],
            params=params,
            get_data=options["data"],
        )

        grid = Grid(model, context)
        for name in options["columns"]:
            grid.column(name)
        grid.quick_search()
        for result in grid.relation_results:
            if not result.ok:
                self.stderr.write(self.style.WARNING(f"{result.path}: {result.reason}"))

        payload = grid.serialize()
        self.stdout.write(json.dumps(payload, cls=DjangoJSONEncoder, indent=2))
