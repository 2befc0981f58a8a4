"""
Image input resolution for edit/analyze requests.

Architectural role:
- Convert an image reference (`data:` URL or local path) into the MIME type
  and base64 payload carried by an inline data request part.
- Provide the MIME classifier used for local files.

Processing lifecycle:
1. `data:` references are split into MIME type and payload without decoding.
2. Local paths are read in full and base64-encoded.
3. MIME type is sniffed from the file header, then the extension, then
   defaults to `image/png`.

Error handling strategy:
- Unreadable paths and malformed data URLs raise `ImageIOError`.

Side effects:
- Reads local files only; nothing is written or cached.
"""

import base64
import io
import mimetypes
import os
from dataclasses import dataclass

from PIL import Image, UnidentifiedImageError

from agent_tools.errors import ImageIOError


DEFAULT_MIME = "image/png"


@dataclass
class ParsedImage:
    mime: str
    base64: str


# ============================================================
# PUBLIC ENTRYPOINT
# ============================================================

def parse_image(source: str) -> ParsedImage:
    """
    Resolve `source` into an inline-data ready `ParsedImage`.

    Supported formats:
    - data URL (`data:<mime>;base64,<payload>`), payload passed through unchanged
    - plain local path (`~` is expanded)
    """
    if source.startswith("data:"):
        return _parse_data_url(source)

    path = os.path.expanduser(source)
    try:
        with open(path, "rb") as f:
            raw = f.read()
    except OSError as e:
        raise ImageIOError(f"Cannot read image {source}: {e.strerror or e}") from e

    return ParsedImage(
        mime=classify(raw, name=path),
        base64=base64.b64encode(raw).decode("ascii"),
    )


def _parse_data_url(data_url: str) -> ParsedImage:
    header, sep, encoded = data_url.partition(",")
    if not sep:
        raise ImageIOError("Malformed data URL: missing ',' separator")
    mime = header[len("data:"):].split(";", 1)[0]
    return ParsedImage(mime=mime, base64=encoded)


# ============================================================
# MIME CLASSIFICATION
# ============================================================

def classify(data, name=None) -> str:
    """Return the MIME type of image bytes or of the file at a path.

    Header sniffing (Pillow) wins over the extension; anything unrecognised
    is reported as `image/png`.
    """
    if isinstance(data, (bytes, bytearray)):
        raw = bytes(data)
    else:
        name = name or data
        try:
            with open(data, "rb") as f:
                raw = f.read()
        except OSError:
            raw = b""

    mime = _sniff(raw)
    if mime:
        return mime

    if name:
        guessed, _ = mimetypes.guess_type(name)
        if guessed:
            return guessed

    return DEFAULT_MIME


def _sniff(raw: bytes):
    if not raw:
        return None
    try:
        with Image.open(io.BytesIO(raw)) as img:
            return Image.MIME.get(img.format)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError):
        return None
