"""
Host-facing tool registry for the image operations.

Each entry pairs a description and a pydantic argument schema with an
`execute` callable. The schema feeds host registration (`tool_schemas`); the
callable is the error boundary: validation failures and every exception
raised by the operation come back as `"Error: <message>"` strings instead of
propagating to the host.

Mode selection:
- `execute(args, mode=None)` resolves the mode from `GEMINI_TEST_MODE` once,
  here, and passes it explicitly to the operation.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Type

from pydantic import BaseModel, Field, ValidationError

from agent_tools.config import Mode, mode_from_env
from agent_tools.image.service import ImageConfig, analyze_image, edit_image, generate_image

logger = logging.getLogger(__name__)


# ============================================================
# Argument Schemas
# ============================================================

class GenerateArgs(BaseModel):
    prompt: str = Field(description="Text description of the image to generate")
    outputDir: Optional[str] = Field(
        default=None,
        description="Custom output directory (default: assets/images/YYYY-MM-DD/)",
    )
    filename: Optional[str] = Field(default=None, description="Custom filename (default: generated)")


class EditArgs(BaseModel):
    image: str = Field(description="File path or data URL of image to edit")
    prompt: str = Field(description="Edit instruction")
    outputDir: Optional[str] = Field(
        default=None,
        description="Custom output directory (default: assets/images/YYYY-MM-DD/)",
    )
    filename: Optional[str] = Field(
        default=None,
        description="Custom filename (default: original name with _edit_XXX)",
    )


class AnalyzeArgs(BaseModel):
    image: str = Field(description="File path or data URL of image to analyze")
    question: str = Field(description="What to analyze about the image")


# ============================================================
# Runners
# ============================================================

def _run_generate(args: GenerateArgs, mode: Mode) -> str:
    image_config = ImageConfig(output_dir=args.outputDir, custom_name=args.filename)
    return generate_image(args.prompt, image_config, mode=mode)


def _run_edit(args: EditArgs, mode: Mode) -> str:
    image_config = ImageConfig(output_dir=args.outputDir, custom_name=args.filename)
    return edit_image(args.image, args.prompt, image_config, mode=mode)


def _run_analyze(args: AnalyzeArgs, mode: Mode) -> str:
    return analyze_image(args.image, args.question, mode=mode)


def _format_validation_error(err: ValidationError) -> str:
    problems = []
    for item in err.errors():
        field = ".".join(str(loc) for loc in item.get("loc", ())) or "args"
        problems.append(f"{field}: {item.get('msg')}")
    return "Invalid arguments: " + "; ".join(problems)


@dataclass
class Tool:
    name: str
    description: str
    args: Type[BaseModel]
    run: Callable[[BaseModel, Mode], str]

    def execute(self, args: Optional[dict] = None, mode: Optional[Mode] = None) -> str:
        """Validate `args`, run the tool and return its result or an error string."""
        if mode is None:
            mode = mode_from_env()
        try:
            parsed = self.args.model_validate(args or {})
        except ValidationError as e:
            return f"Error: {_format_validation_error(e)}"

        try:
            return self.run(parsed, mode)
        except Exception as e:
            logger.exception("Tool %s failed", self.name)
            return f"Error: {e}"

    def schema(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.args.model_json_schema(),
        }


# ============================================================
# Registry
# ============================================================

TOOLS: Dict[str, Tool] = {
    "generate": Tool(
        name="generate",
        description="Generate an image using Gemini from a text prompt",
        args=GenerateArgs,
        run=_run_generate,
    ),
    "edit": Tool(
        name="edit",
        description="Edit an existing image using Gemini",
        args=EditArgs,
        run=_run_edit,
    ),
    "analyze": Tool(
        name="analyze",
        description="Analyze an image using Gemini (text analysis only)",
        args=AnalyzeArgs,
        run=_run_analyze,
    ),
}


def get_tool(name: str) -> Optional[Tool]:
    return TOOLS.get(name)


def tool_schemas() -> list:
    """Return name/description/JSON-schema entries for host registration."""
    return [tool.schema() for tool in TOOLS.values()]
