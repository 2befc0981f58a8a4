"""Runtime configuration for the image tools and the idle notifier.

Architectural role:
    Centralizes endpoint/model selection, output locations and credential
    lookup for `agent_tools.image` and `agent_tools.notify`.

Call flow integration:
    - `image.service` consumes the model names and `resolve_api_key`.
    - `image.client` consumes `GEMINI_URL_TEMPLATE` and `REQUEST_TIMEOUT`.
    - `tools`, `api.cli` and `api.http_api` consult `mode_from_env` once at
      the outer boundary; operations receive the mode explicitly.

Determinism:
    Deterministic for a fixed process environment and key files. Values are
    resolved at import time (plus key-file reads in `resolve_api_key`).
"""

import enum
import os

from dotenv import load_dotenv

from agent_tools.errors import AuthError

load_dotenv()


class Mode(enum.Enum):
    """Execution mode threaded through every image operation."""

    LIVE = "live"
    MOCK = "mock"


GEMINI_URL_TEMPLATE = (
    "https://generativelanguage.googleapis.com/v1beta/models/"
    "{model}:generateContent"
)

# Image-capable model for generate/edit, text model for analysis.
IMAGE_MODEL = os.getenv("GEMINI_IMAGE_MODEL", "gemini-2.5-flash-image-preview")
VISION_MODEL = os.getenv("GEMINI_VISION_MODEL", "gemini-1.5-flash")

API_KEY_NAME = "GEMINI_API_KEY"
TEST_API_KEY = "test-api-key"
KEY_DIR = "config"

REQUEST_TIMEOUT = 120

# Output files land in `<root>/<YYYY-MM-DD>/<generations|edits>`.
OUTPUT_ROOT = os.getenv("IMAGE_OUTPUT_ROOT")
DEFAULT_OUTPUT_SUBDIR = os.path.join("assets", "images")
# Tools run from `<repo>/.opencode/tool`, two levels below the repository root.
REPO_ROOT_ASCENT = os.path.join("..", "..")

IDLE_MESSAGE = "Your code is done!"


def mode_from_env():
    """Return `Mode.MOCK` only when `GEMINI_TEST_MODE` is exactly "true"."""
    if os.getenv("GEMINI_TEST_MODE") == "true":
        return Mode.MOCK
    return Mode.LIVE


def flag_from_env(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def key_file_for(name):
    """Map an env var name to its key file (`GEMINI_API_KEY` -> `config/gemini.key`)."""
    stem = name[:-len("_API_KEY")] if name.endswith("_API_KEY") else name
    return os.path.join(KEY_DIR, stem.lower() + ".key")


def resolve_api_key(name=API_KEY_NAME, mode=Mode.LIVE):
    """Resolve the named API credential.

    Lookup order is the environment (including `.env`), then the key file
    named after it (`GEMINI_API_KEY` -> `config/gemini.key`).

    Args:
        name: Environment variable holding the key.
        mode: `Mode.MOCK` short-circuits to a fixed placeholder credential.

    Error handling:
        Missing/empty credential -> `AuthError`.
    """
    if mode is Mode.MOCK:
        return TEST_API_KEY

    api_key = os.getenv(name)
    key_file = key_file_for(name)
    if not api_key and os.path.isfile(key_file):
        with open(key_file, "r") as f:
            api_key = f.read().strip()

    if not api_key:
        raise AuthError(f"{name} is not set (environment, .env or {key_file})")
    return api_key
