"""Server-rendered page helpers: navbar and templates."""

from anon_feedback.web.navbar import NavbarView, build_navbar
from anon_feedback.web.templating import render_page

__all__ = ["NavbarView", "build_navbar", "render_page"]
