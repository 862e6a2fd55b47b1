import base64
import random
import re
import string
from io import BytesIO

from PIL import Image, UnidentifiedImageError

DATA_URI_RE = re.compile(r"data:([^;]+)")


def new_request_id() -> str:
    """Short random id used to tag log lines of one request."""
    return "".join(random.choices(string.ascii_lowercase + string.digits, k=6))


def to_data_uri(data: bytes, mime_type: str) -> str:
    """Encode bytes as a base64 data URI.

    Example: (b"abc", "image/png") -> "data:image/png;base64,YWJj"
    """
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def split_data_uri(value: str) -> tuple[str | None, str]:
    """Split a data URI into (mime_type, base64 payload).

    Strings without a "base64," marker are returned as (None, value).
    """
    if "base64," not in value:
        return None, value
    header, payload = value.split("base64,", 1)
    match = DATA_URI_RE.search(header)
    return (match.group(1) if match else None), payload


def from_data_uri(value: str) -> tuple[bytes, str | None]:
    """Decode a data URI (or bare base64) into (bytes, mime_type)."""
    mime_type, payload = split_data_uri(value)
    return base64.b64decode(payload), mime_type


def is_http_url(value: str) -> bool:
    return value.startswith("http://") or value.startswith("https://")


def truncate_for_log(payload: dict, limit: int = 100) -> dict:
    """Shorten long string values (data URIs) so payloads can be logged."""
    result = {}
    for key, value in payload.items():
        if isinstance(value, str) and len(value) > limit:
            result[key] = f"{value[:limit]}... ({len(value)} chars)"
        else:
            result[key] = value
    return result


def to_label(name: str) -> str:
    """Convert a schema property name to a UI label.

    Example: "tail_image_url" -> "Tail Image"
    """
    label = re.sub(r"_url$", "", name).replace("_", " ")
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), label)


def sniff_image_mime(data: bytes, fallback: str = "image/png") -> str:
    """Detect an image's MIME type from its bytes."""
    try:
        with Image.open(BytesIO(data)) as img:
            return Image.MIME.get(img.format or "", fallback)
    except (UnidentifiedImageError, OSError):
        return fallback
