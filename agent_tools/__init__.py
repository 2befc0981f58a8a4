"""Agent host integrations: Gemini image tools and an idle-session notifier.

Module split:
    - `config`: environment-driven settings, `Mode` and credential lookup.
    - `image`: generate/edit/analyze pipelines and output naming.
    - `tools`: host-facing tool registry with argument schemas.
    - `notify`: idle-session spoken notification hook.
    - `api`: HTTP and CLI adapters over `tools` and `notify`.
"""

__version__ = "0.1.0"
