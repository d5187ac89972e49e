"""Render summary reports.

Jinja2-based Markdown summary of a render output (used by
``profilegen render --format summary``).
"""

from profilegen.templates.renderer import SummaryRenderer, describe_block, format_datetime

__all__ = ["SummaryRenderer", "describe_block", "format_datetime"]
