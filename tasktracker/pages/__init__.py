"""Static HTML pages served outside the API."""

from tasktracker.pages.root import render_root_page

__all__ = ["render_root_page"]
