"""Command-line view of the catalog page."""

from langcat.view.render import render_text, state_to_dict

__all__ = ["render_text", "state_to_dict"]
