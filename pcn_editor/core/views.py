import hmac
import json
import logging

from django.conf import settings
from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from .editor import update_allocation
from .errors import InvalidAllocation, LineNotFound, NotARecordLine
from .forms import ParseRequestForm, SearchForm, UpdateReceiptForm, first_error
from .layouts import LAYOUT_CHOICES
from .parsers import parse_file
from .search import find_by_record_and_entity, find_by_record_number
from .serializers import serialize_issue, serialize_receipt

logger = logging.getLogger(__name__)


class BadRequest(Exception):
    pass


def error_response(message, code, status=400, field=None):
    body = {"success": False, "error": message, "code": code}
    if field:
        body["field"] = field
    return JsonResponse(body, status=status)


def success_response(data):
    return JsonResponse({"success": True, "data": data})


def validation_error(form):
    field, message = first_error(form)
    return error_response(message, "VALIDATION_ERROR", field=field)


@method_decorator(csrf_exempt, name="dispatch")
class ApiView(View):
    """Token check and JSON body handling shared by the receipt endpoints."""

    def dispatch(self, request, *args, **kwargs):
        if not self.is_authorized(request):
            return error_response("Unauthorized", "UNAUTHORIZED", status=401)
        try:
            return super().dispatch(request, *args, **kwargs)
        except BadRequest as e:
            return error_response(str(e), "VALIDATION_ERROR")
        except Exception:
            logger.exception("Unexpected error in %s", type(self).__name__)
            return error_response("Unexpected server error", "SERVER_ERROR", status=500)

    def is_authorized(self, request):
        token = settings.PCN_API_TOKEN
        if not token:
            return True
        header = request.headers.get("Authorization", "")
        scheme, _, value = header.partition(" ")
        return scheme == "Token" and hmac.compare_digest(value.strip(), token)

    def request_data(self, request):
        if request.content_type == "application/json":
            try:
                data = json.loads(request.body or b"{}")
            except ValueError:
                raise BadRequest("Request body is not valid JSON")
            if not isinstance(data, dict):
                raise BadRequest("Request body must be a JSON object")
            return data
        return request.POST


class ApiIndex(View):
    def get(self, request):
        """API documentation"""
        return JsonResponse({
            "api_name": "PCN874 Receipt Editor API",
            "version": "1.0",
            "description": "Parse PCN874 VAT reports, search receipts and set allocation numbers",
            "endpoints": {
                "POST /api/parse/": {
                    "description": "Parse a file and list its receipt rows",
                    "parameters": {
                        "file": "PCN874 file (.txt), multipart upload",
                        "file_content": "File text, when sending JSON instead of a file",
                        "layout": "Row layout, default from server settings",
                    },
                },
                "POST /api/update-receipt/": {
                    "description": "Set the allocation number of one receipt",
                    "parameters": {
                        "file_content": "Current file text",
                        "row_index": "Receipt index as returned by /api/parse/",
                        "allocation_number": "1 to 9 digits, left-padded with zeros",
                        "layout": "Row layout",
                    },
                },
                "POST /api/search/": {
                    "description": "Find receipts by receipt number and optional business number",
                    "parameters": {
                        "file_content": "File text",
                        "receipt_number": "Digits, leading zeros ignored",
                        "business_number": "Optional, 9 digits",
                        "layout": "Row layout",
                    },
                },
            },
            "layouts": dict(LAYOUT_CHOICES),
            "default_layout": settings.PCN_LAYOUT,
        })


class ParseReceipts(ApiView):
    def post(self, request):
        form = ParseRequestForm(self.request_data(request), request.FILES)
        if not form.is_valid():
            return validation_error(form)

        layout = form.cleaned_data["layout"]
        outcome = parse_file(form.cleaned_data["file_content"], layout)
        if not outcome.has_receipts:
            return error_response(outcome.errors[0], "NO_RECEIPTS")

        return success_response({
            "receipts": [serialize_receipt(r) for r in outcome.receipts],
            "total_receipts": len(outcome.receipts),
            "errors": [serialize_issue(i) for i in outcome.issues],
            "layout": layout,
            "file_name": form.cleaned_data.get("file_name") or "",
            "encoding": form.cleaned_data.get("encoding"),
        })


class UpdateReceipt(ApiView):
    def post(self, request):
        form = UpdateReceiptForm(self.request_data(request))
        if not form.is_valid():
            return validation_error(form)

        content = form.cleaned_data["file_content"]
        layout = form.cleaned_data["layout"]
        row_index = form.cleaned_data["row_index"]
        allocation = form.cleaned_data["allocation_number"]

        target = parse_file(content, layout).receipt_at(row_index)
        if target is None:
            return error_response(f"Receipt at row index {row_index} not found", "ROW_NOT_FOUND")

        try:
            modified = update_allocation(content, target.source_line_number, allocation, layout)
        except InvalidAllocation as e:
            return error_response(str(e), "INVALID_ALLOCATION", field="allocation_number")
        except LineNotFound as e:
            return error_response(str(e), "ROW_NOT_FOUND")
        except NotARecordLine as e:
            return error_response(str(e), "UPDATE_ERROR")

        # Parse again to confirm the row still reads back with the new value
        updated = parse_file(modified, layout).receipt_at(row_index)
        if updated is None or updated.allocation_code != allocation:
            logger.error("Allocation update on row %d could not be verified", row_index)
            return error_response("Failed to verify update", "UPDATE_ERROR", status=500)

        return success_response({
            "modified_content": modified,
            "modified_receipt": serialize_receipt(updated),
        })


class SearchReceipts(ApiView):
    def post(self, request):
        form = SearchForm(self.request_data(request))
        if not form.is_valid():
            return validation_error(form)

        outcome = parse_file(form.cleaned_data["file_content"], form.cleaned_data["layout"])
        if not outcome.has_receipts:
            return error_response(outcome.errors[0], "NO_RECEIPTS")

        receipt_number = form.cleaned_data["receipt_number"]
        business_number = form.cleaned_data["business_number"]

        if business_number:
            match = find_by_record_and_entity(outcome.receipts, receipt_number, business_number)
            return success_response({"receipt": serialize_receipt(match) if match else None})

        matches = find_by_record_number(outcome.receipts, receipt_number)
        return success_response({
            "receipts": [serialize_receipt(r) for r in matches],
            "total": len(matches),
        })
