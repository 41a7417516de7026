from django.urls import path

from testproject.library.views import BookGridView, CategoryGridView

urlpatterns = [
    path("admin/books", BookGridView.as_view(), name="book_grid"),
    path("admin/categories", CategoryGridView.as_view(), name="category_grid"),
]
