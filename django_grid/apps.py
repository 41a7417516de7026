from django.apps import AppConfig


class DjangoGridConfig(AppConfig):
    name = "django_grid"
    verbose_name = "Django Grid"
