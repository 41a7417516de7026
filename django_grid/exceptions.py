from django.core.exceptions import ImproperlyConfigured


class GridError(Exception):
    """Base class for grid errors."""


class GridConfigurationError(GridError, ImproperlyConfigured):
    """The grid was declared with options it cannot honour."""


class InvalidGridRequest(GridError, ValueError):
    """Request params (page, sort, ...) could not be applied."""
