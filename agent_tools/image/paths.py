"""Output location and collision-safe naming for saved images.

Layout:
    `<root>/<YYYY-MM-DD>/generations/*.png` and `<root>/<YYYY-MM-DD>/edits/*.png`
    by default, `<output_dir>/<generations|edits>` when the caller supplies a
    directory.

Naming:
    - Generations use `<base>.png`, or `<base>_<timestamp>.png` when the plain
      name is taken. The timestamped name is not re-checked.
    - Edits use the first free `<base>_edit_NNN.png`, counting from 001.

Concurrency:
    Existence checks and writes are not atomic. Two concurrent calls with the
    same base name can settle on the same path and the later write wins.
"""

import os
from datetime import datetime, timezone

from agent_tools import config


IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg")
GENERATIONS = "generations"
EDITS = "edits"


def default_root():
    if config.OUTPUT_ROOT:
        return config.OUTPUT_ROOT
    return os.path.abspath(
        os.path.join(os.getcwd(), config.REPO_ROOT_ASCENT, config.DEFAULT_OUTPUT_SUBDIR)
    )


def date_based_path(base_dir=None, today=None):
    """Return `<base_dir>/<YYYY-MM-DD>`; `base_dir` defaults to the assets root."""
    today = today or datetime.now(timezone.utc).date()
    return os.path.join(base_dir or default_root(), today.isoformat())


def ensure_directory(path):
    os.makedirs(path, exist_ok=True)
    return path


def resolve_output_dir(image_config, kind, today=None):
    """Return (and create) the directory a generation or edit is saved into.

    Args:
        image_config: `ImageConfig`; `output_dir` is used verbatim when set.
        kind: `GENERATIONS` or `EDITS`.
        today: Date override, defaults to the current UTC date.
    """
    base_dir = image_config.output_dir if image_config.output_dir else date_based_path(today=today)
    return ensure_directory(os.path.join(base_dir, kind))


def strip_image_extension(name):
    """Drop one trailing .png/.jpg/.jpeg from a caller-supplied base name."""
    if name.endswith(IMAGE_EXTENSIONS):
        return name[:name.rindex(".")]
    return name


def edit_base_name(source, custom_name=None):
    """Base name for an edit: custom name, else the source file's stem."""
    if custom_name:
        return strip_image_extension(custom_name)
    if source.startswith("data:"):
        return "image"
    stem, _ = os.path.splitext(os.path.basename(source))
    return strip_image_extension(stem or "image")


def timestamp_suffix(now=None):
    """ISO-8601 UTC time with ':'/'.' -> '-' and milliseconds+zone trimmed."""
    now = now or datetime.now(timezone.utc)
    iso = now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S")
    return iso.replace(":", "-").replace(".", "-")


def unique_filename(directory, base_name, extension, is_edit=False, now=None):
    """Pick an output path in `directory` that does not overwrite earlier output.

    Generations return `<base><ext>` when free, else a timestamped variant.
    Edits check `<base>_edit_001<ext>`, `_002`, ... and return the first free
    slot; the n-th edit of a base name costs n existence checks.
    """
    ensure_directory(directory)

    if not is_edit:
        candidate = os.path.join(directory, f"{base_name}{extension}")
        if not os.path.exists(candidate):
            return candidate
        return os.path.join(directory, f"{base_name}_{timestamp_suffix(now)}{extension}")

    counter = 1
    while True:
        candidate = os.path.join(directory, f"{base_name}_edit_{counter:03d}{extension}")
        if not os.path.exists(candidate):
            return candidate
        counter += 1
