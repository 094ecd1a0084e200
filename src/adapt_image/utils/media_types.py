import mimetypes
from pathlib import Path

import magic

DEFAULT_MIME_TYPE = "application/octet-stream"

# enough for libmagic to recognise any of the bitmap signatures
_SNIFF_BYTES = 2048


def guess_mime_from_extension(pathname: str | Path) -> str:
    mime_type, _ = mimetypes.guess_type(str(pathname), strict=False)
    return mime_type or DEFAULT_MIME_TYPE


def determine_mime(path: str | Path) -> str:
    """Sniff the MIME type of a file from its content using libmagic."""
    with open(path, "rb") as f:
        header = f.read(_SNIFF_BYTES)

    if not header:
        return DEFAULT_MIME_TYPE

    mime = magic.Magic(mime=True)
    file_type = mime.from_buffer(header)
    return file_type or DEFAULT_MIME_TYPE
