"""Error taxonomy shared by the image tools.

Every failure inside an operation is raised as a `ToolError` subclass and
surfaces unchanged until the tool boundary (`agent_tools.tools`), where it is
rendered as an `"Error: <message>"` string.
"""


class ToolError(Exception):
    """Base class for failures raised by image operations."""


class AuthError(ToolError):
    """Required API credential is missing."""


class ImageIOError(ToolError, OSError):
    """Input image could not be read or output image could not be written."""


class APIError(ToolError):
    """Remote API answered with a non-success HTTP status."""

    def __init__(self, status, body):
        self.status = status
        self.body = body
        super().__init__(f"API error ({status}): {body}")


class ResponseError(ToolError):
    """Successful response that lacks the expected content."""
