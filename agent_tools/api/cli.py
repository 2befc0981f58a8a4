"""
Terminal adapter running one image tool per invocation.

Interface responsibilities:
- Parse a subcommand (`generate`, `edit`, `analyze`) and its arguments.
- Hand the arguments to the tool registry, which owns validation and error
  rendering.
- Print the tool result; exit with status 1 when the result is an error.

Mode selection:
- `--test-mode` forces mock mode; otherwise `GEMINI_TEST_MODE` decides.
"""

from dotenv import load_dotenv

load_dotenv()

import argparse
import logging
import os
import sys

from agent_tools.config import Mode, mode_from_env
from agent_tools.tools import TOOLS


def build_parser():
    parser = argparse.ArgumentParser(prog="agent-tools", description="Gemini image tools")
    parser.add_argument("--test-mode", action="store_true", help="Compute paths only; no API calls or file writes")
    sub = parser.add_subparsers(dest="command")

    gen = sub.add_parser("generate", help=TOOLS["generate"].description)
    gen.add_argument("prompt")
    gen.add_argument("--output-dir", default=None)
    gen.add_argument("--filename", default=None)

    edit = sub.add_parser("edit", help=TOOLS["edit"].description)
    edit.add_argument("image", help="File path or data URL")
    edit.add_argument("prompt")
    edit.add_argument("--output-dir", default=None)
    edit.add_argument("--filename", default=None)

    analyze = sub.add_parser("analyze", help=TOOLS["analyze"].description)
    analyze.add_argument("image", help="File path or data URL")
    analyze.add_argument("question")

    return parser


def tool_args(ns):
    """Map parsed CLI options onto the registry's argument names."""
    if ns.command == "generate":
        return {"prompt": ns.prompt, "outputDir": ns.output_dir, "filename": ns.filename}
    if ns.command == "edit":
        return {"image": ns.image, "prompt": ns.prompt, "outputDir": ns.output_dir, "filename": ns.filename}
    return {"image": ns.image, "question": ns.question}


def main(argv=None):
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "WARNING").upper())

    parser = build_parser()
    ns = parser.parse_args(argv)

    if not ns.command:
        parser.print_help()
        return 2

    mode = Mode.MOCK if ns.test_mode else mode_from_env()
    result = TOOLS[ns.command].execute(tool_args(ns), mode=mode)
    print(result)
    return 1 if result.startswith("Error:") else 0


if __name__ == "__main__":
    sys.exit(main())
