"""Image operations behind the `generate`, `edit` and `analyze` tools.

Role in pipeline:
    credential -> (mock mode: describe the would-be result and stop) ->
    request body -> `client.send_generate_content` -> response extraction ->
    file materialization (generate/edit) or text (analyze).

Mock mode:
    `Mode.MOCK` performs no network I/O and writes no image bytes. Output
    directories are still created and a unique path is still chosen, so the
    reported path is the one a live call would use at that moment.

Error handling strategy:
    `ToolError` subclasses propagate to the caller unchanged.
"""

import base64
import logging
import os
from dataclasses import dataclass
from typing import Optional

from agent_tools import config
from agent_tools.config import Mode, resolve_api_key
from agent_tools.errors import ImageIOError
from agent_tools.image import client, paths
from agent_tools.image.input import parse_image

logger = logging.getLogger(__name__)

OUTPUT_EXTENSION = ".png"
PREVIEW_CHARS = 50


@dataclass
class ImageConfig:
    output_dir: Optional[str] = None
    custom_name: Optional[str] = None


def _preview(text):
    return f"{text[:PREVIEW_CHARS]}..."


def _write_image(output_path, b64, label):
    logger.info("Saving %s image to: %s", label, output_path)
    try:
        with open(output_path, "wb") as f:
            f.write(base64.b64decode(b64))
    except OSError as e:
        raise ImageIOError(f"Failed to save file to {output_path}: {e.strerror or e}") from e

    if not os.path.exists(output_path):
        raise ImageIOError(f"Failed to save file to {output_path}")
    return os.path.getsize(output_path)


def generate_image(prompt: str, image_config: Optional[ImageConfig] = None, mode: Mode = Mode.LIVE) -> str:
    """Generate an image from `prompt` and save it under `generations/`.

    Returns:
        `Generated image saved: <path> (<size> bytes)`, or a `[TEST MODE]`
        description in mock mode.
    """
    image_config = image_config or ImageConfig()
    api_key = resolve_api_key(mode=mode)
    base_name = paths.strip_image_extension(image_config.custom_name or "generated")

    if mode is Mode.MOCK:
        directory = paths.resolve_output_dir(image_config, paths.GENERATIONS)
        output_path = paths.unique_filename(directory, base_name, OUTPUT_EXTENSION, is_edit=False)
        return f'[TEST MODE] Would generate image: {output_path} for prompt: "{_preview(prompt)}"'

    data = client.send_generate_content(config.IMAGE_MODEL, client.build_payload(prompt), api_key)
    b64 = client.extract_inline_data(data)

    directory = paths.resolve_output_dir(image_config, paths.GENERATIONS)
    output_path = paths.unique_filename(directory, base_name, OUTPUT_EXTENSION, is_edit=False)
    size = _write_image(output_path, b64, "generated")
    return f"Generated image saved: {output_path} ({size} bytes)"


def edit_image(source: str, prompt: str, image_config: Optional[ImageConfig] = None, mode: Mode = Mode.LIVE) -> str:
    """Edit the image at `source` (path or data URL) and save the next `_edit_NNN` variant."""
    image_config = image_config or ImageConfig()
    api_key = resolve_api_key(mode=mode)
    base_name = paths.edit_base_name(source, image_config.custom_name)

    if mode is Mode.MOCK:
        directory = paths.resolve_output_dir(image_config, paths.EDITS)
        output_path = paths.unique_filename(directory, base_name, OUTPUT_EXTENSION, is_edit=True)
        return (
            f"[TEST MODE] Would edit image: {source} -> {output_path} "
            f'with prompt: "{_preview(prompt)}"'
        )

    image = parse_image(source)
    data = client.send_generate_content(config.IMAGE_MODEL, client.build_payload(prompt, image), api_key)
    b64 = client.extract_inline_data(data)

    directory = paths.resolve_output_dir(image_config, paths.EDITS)
    output_path = paths.unique_filename(directory, base_name, OUTPUT_EXTENSION, is_edit=True)
    size = _write_image(output_path, b64, "edited")
    return f"Edited image saved: {output_path} ({size} bytes)"


def analyze_image(source: str, question: str, mode: Mode = Mode.LIVE) -> str:
    """Answer `question` about the image at `source`; returns the model's text."""
    api_key = resolve_api_key(mode=mode)

    if mode is Mode.MOCK:
        return (
            f'[TEST MODE] Would analyze image: {source} with question: "{_preview(question)}" '
            "- Mock analysis: This is a test image analysis response."
        )

    image = parse_image(source)
    data = client.send_generate_content(config.VISION_MODEL, client.build_payload(question, image), api_key)
    return client.extract_text(data)
