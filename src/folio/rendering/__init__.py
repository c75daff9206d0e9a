"""Markdown pages generated from the corpus for the static-site generator."""

from folio.rendering.pages import post_url, render_tags_page, render_toc, write_tags_page

__all__ = ["post_url", "render_tags_page", "render_toc", "write_tags_page"]
