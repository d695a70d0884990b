from django.urls import path

from .views import ApiIndex, ParseReceipts, SearchReceipts, UpdateReceipt

urlpatterns = [
    path("", ApiIndex.as_view(), name="api_index"),
    path("parse/", ParseReceipts.as_view(), name="parse_receipts"),
    path("update-receipt/", UpdateReceipt.as_view(), name="update_receipt"),
    path("search/", SearchReceipts.as_view(), name="search_receipts"),
]
