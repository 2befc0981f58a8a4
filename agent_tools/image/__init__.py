"""Gemini image tool adapters.

Scope:
    Provides the generate/edit/analyze pipelines, the HTTP client they share,
    input-image resolution and output-path naming.

Non-goals:
    - No local image processing (resizing, re-encoding, thumbnails).
    - No caching of API responses and no retry policy.
"""
