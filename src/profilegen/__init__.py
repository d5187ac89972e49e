"""Profilegen - profile template rendering engine.

Profilegen renders a user's profile data through a template into a typed
intermediate representation: an ordered list of sections, each a tree of
content blocks, ready for a Markdown or HTML exporter.

Core properties:
- Deterministic: same template, profile and options produce the same blocks
- Exhaustive: every section type has a renderer, checked at startup
- Resilient: recoverable section failures become warnings, not aborts
- Pure: no network access, no shared state between renders
"""

__version__ = "0.1.0"
__author__ = "Profilegen Contributors"
