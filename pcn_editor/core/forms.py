# pcn_editor/core/forms.py
from django import forms
from django.conf import settings
from django.core.exceptions import NON_FIELD_ERRORS

from .layouts import LAYOUT_CHOICES
from .parsers import split_lines
from .services.encoding import UndecodableUpload, decode_upload
from .services.validator import pad_allocation

ALLOWED_EXTENSIONS = (".txt",)


def first_error(form):
    """(field, message) of the first validation error, field None for form-wide errors."""
    for field, errors in form.errors.items():
        return (None if field == NON_FIELD_ERRORS else field), errors[0]
    return None, "Invalid request"


def check_content_limits(content):
    max_bytes = settings.PCN_MAX_UPLOAD_BYTES
    if len(content.encode("utf-8")) > max_bytes:
        raise forms.ValidationError(f"File exceeds maximum size of {max_bytes} bytes")
    max_rows = settings.PCN_MAX_ROWS
    if len(split_lines(content.strip())) > max_rows:
        raise forms.ValidationError(f"File exceeds maximum of {max_rows} rows")


class ContentForm(forms.Form):
    file_content = forms.CharField(strip=False, error_messages={"required": "File content is required"})
    layout = forms.ChoiceField(choices=LAYOUT_CHOICES, required=False)

    def clean_file_content(self):
        content = self.cleaned_data["file_content"]
        if content:
            check_content_limits(content)
        return content

    def clean_layout(self):
        return self.cleaned_data["layout"] or settings.PCN_LAYOUT


class ParseRequestForm(ContentForm):
    """Takes either an uploaded file or the file text itself."""
    file_content = forms.CharField(strip=False, required=False)
    file = forms.FileField(required=False)
    file_name = forms.CharField(required=False, max_length=255)

    def clean_file(self):
        f = self.cleaned_data["file"]
        if f is None:
            return f
        if not f.name.lower().endswith(ALLOWED_EXTENSIONS):
            raise forms.ValidationError("Upload a .txt file")
        if f.size > settings.PCN_MAX_UPLOAD_BYTES:
            raise forms.ValidationError(
                f"File exceeds maximum size of {settings.PCN_MAX_UPLOAD_BYTES} bytes"
            )
        return f

    def clean(self):
        cleaned = super().clean()
        upload = cleaned.get("file")
        if upload is not None:
            try:
                content, encoding = decode_upload(upload.read())
            except UndecodableUpload as e:
                raise forms.ValidationError(str(e))
            check_content_limits(content)
            cleaned["file_content"] = content
            cleaned["encoding"] = encoding
            cleaned["file_name"] = cleaned.get("file_name") or upload.name
        elif not cleaned.get("file_content") and not self.errors:
            raise forms.ValidationError("File is empty")
        return cleaned


class UpdateReceiptForm(ContentForm):
    row_index = forms.IntegerField(min_value=0, error_messages={"min_value": "Invalid row index"})
    allocation_number = forms.CharField(max_length=9, error_messages={
        "required": "Allocation number is required",
        "max_length": "Allocation number must not exceed 9 digits",
    })

    def clean_allocation_number(self):
        try:
            return pad_allocation(self.cleaned_data["allocation_number"])
        except ValueError:
            raise forms.ValidationError("Allocation number must contain only digits")


class SearchForm(ContentForm):
    receipt_number = forms.RegexField(
        regex=r"^[0-9]+$",
        max_length=20,
        error_messages={"invalid": "Receipt number must contain only digits"},
    )
    business_number = forms.RegexField(
        regex=r"^[0-9]{9}$",
        required=False,
        error_messages={"invalid": "Business number must be exactly 9 digits"},
    )
