"""Violation renderers."""

from report.render import render_json, render_text

__all__ = ["render_json", "render_text"]
