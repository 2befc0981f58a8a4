"""Agent tools adapter package.

Architectural role:
- Exposes the tool registry and the idle hook over HTTP and the terminal.
- Performs transport-level validation and response shaping only.
"""
