"""Gemini `generateContent` HTTP client.

Processing flow:
    1. Format the model endpoint from `config.GEMINI_URL_TEMPLATE`.
    2. Assemble `contents[0].parts` from the prompt and an optional inline image.
    3. POST with the `x-goog-api-key` header.
    4. Return parsed JSON, or raise `APIError` on any non-2xx status.

Base64:
    Inline image payloads are forwarded as already-encoded strings; nothing
    is decoded here.

Retry behavior:
    None. Each call is attempted once with `config.REQUEST_TIMEOUT`.

Security considerations:
    `APIError` messages include the upstream response body.
"""

import requests

from agent_tools import config
from agent_tools.errors import APIError, ResponseError


def build_payload(text, image=None):
    """Build a single-turn request body.

    Args:
        text: Prompt or question text.
        image: Optional `ParsedImage` appended as an `inlineData` part.
    """
    parts = [{"text": text}]
    if image is not None:
        parts.append({"inlineData": {"mimeType": image.mime, "data": image.base64}})
    return {"contents": [{"parts": parts}]}


def send_generate_content(model: str, payload: dict, api_key: str) -> dict:
    """Send one `generateContent` request and return the decoded JSON body.

    Error handling:
        - Non-2xx HTTP response -> `APIError(status, body)`
        - Transport failures propagate as `requests` exceptions
    """
    url = config.GEMINI_URL_TEMPLATE.format(model=model)
    headers = {
        "Content-Type": "application/json",
        "x-goog-api-key": api_key,
    }

    response = requests.post(
        url,
        headers=headers,
        json=payload,
        timeout=config.REQUEST_TIMEOUT,
    )

    if not response.ok:
        raise APIError(response.status_code, response.text)

    return response.json()


def _as_dict(value):
    return value if isinstance(value, dict) else {}


def first_parts(data: dict) -> list:
    """Return `candidates[0].content.parts`, raising `ResponseError` when absent."""
    candidates = _as_dict(data).get("candidates") or []
    if not isinstance(candidates, list) or not candidates:
        raise ResponseError("No candidates in response")

    parts = _as_dict(_as_dict(candidates[0]).get("content")).get("parts") or []
    if not isinstance(parts, list) or not parts:
        raise ResponseError("No parts in response")
    return parts


def extract_inline_data(data: dict) -> str:
    """Return the base64 payload of the first part carrying inline image data."""
    for part in first_parts(data):
        inline = _as_dict(_as_dict(part).get("inlineData"))
        if inline.get("data"):
            return inline["data"]
    raise ResponseError("No image data returned from image model")


def extract_text(data: dict) -> str:
    """Return `candidates[0].content.parts[0].text`."""
    try:
        text = _as_dict(first_parts(data)[0]).get("text")
    except ResponseError:
        text = None
    if not text:
        raise ResponseError("No analysis returned")
    return text
