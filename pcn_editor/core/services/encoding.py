# pcn_editor/core/services/encoding.py
import logging

import chardet

logger = logging.getLogger(__name__)

# PCN874 files come out of Israeli accounting software, usually cp1255
FALLBACK_ENCODINGS = ["utf-8", "windows-1255", "iso-8859-8", "cp1252", "latin-1"]
MIN_CONFIDENCE = 0.7


class UndecodableUpload(ValueError):
    pass


def decode_upload(raw: bytes, encodings=None):
    """
    Decode uploaded bytes.
    Returns the text and the encoding that was used.
    """
    if encodings is None:
        encodings = FALLBACK_ENCODINGS

    # utf-8-sig keeps the BOM out of the text; the parser strips it anyway
    if raw.startswith(b"\xef\xbb\xbf"):
        return raw.decode("utf-8-sig"), "utf-8-sig"

    detected = chardet.detect(raw[:10000])
    encoding = detected.get("encoding")
    if encoding and (detected.get("confidence") or 0) > MIN_CONFIDENCE:
        try:
            return raw.decode(encoding), encoding
        except (UnicodeDecodeError, LookupError):
            logger.debug("Detected encoding %s failed, trying fallbacks", encoding)

    for encoding in encodings:
        try:
            return raw.decode(encoding), encoding
        except UnicodeDecodeError:
            continue

    raise UndecodableUpload(
        f"Could not decode the file with encodings: {', '.join(encodings)}"
    )
