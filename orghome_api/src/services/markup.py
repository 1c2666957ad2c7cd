from __future__ import annotations

import logging

from markdown_it import MarkdownIt

from src.core.exceptions import RenderError

logger = logging.getLogger(__name__)

RENDER_MODES = ("document", "comment")


class MarkdownRenderer:
    """
    Render user-supplied markdown to HTML.

    Raw HTML in the source is escaped, never passed through. ``document`` mode
    keeps CommonMark line handling; ``comment`` mode turns single newlines
    into ``<br>``.
    """

    def __init__(self) -> None:
        self._parsers = {mode: self._build(breaks=mode == "comment") for mode in RENDER_MODES}

    @staticmethod
    def _build(breaks: bool) -> MarkdownIt:
        return (
            MarkdownIt("commonmark", {"html": False, "linkify": False, "breaks": breaks})
            .enable("table")
            .enable("strikethrough")
        )

    # PUBLIC_INTERFACE
    def render_string(self, text: str, mode: str = "document") -> str:
        """Render text to HTML; raises RenderError on unknown mode or parser failure."""
        if mode not in RENDER_MODES:
            raise RenderError(f"Unknown render mode: {mode}")
        try:
            return self._parsers[mode].render(text)
        except Exception as exc:
            logger.exception("Markdown rendering failed")
            raise RenderError(str(exc)) from exc
