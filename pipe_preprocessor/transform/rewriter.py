"""Rewrites `{expr | pipe:args}` blocks into nested pipe function calls."""

from __future__ import annotations

import logging

from pipe_preprocessor.models import InterpolationBlock, RewriteOptions, RewriteRecord

from .chain import parse_chain
from .generator import render_block
from .locator import iter_segments
from .pipeline import Transform

logger = logging.getLogger(__name__)


class PipeRewriter(Transform):
    def __init__(self, options: RewriteOptions | None = None):
        self.options = options or RewriteOptions()

    def apply(self, content: str, metadata: dict) -> str:
        filename = metadata.get("filename", "")
        out: list[str] = []

        for segment in iter_segments(content):
            if isinstance(segment, str):
                out.append(segment)
                continue

            replacement = self.rewrite_block(segment, filename)
            if replacement is None:
                out.append(segment.raw_match)
                continue

            out.append(replacement)
            metadata["rewritten"] = metadata.get("rewritten", 0) + 1
            if self.options.debug:
                metadata.setdefault("rewrites", []).append(
                    RewriteRecord(filename=filename, original=segment.raw_match, rewritten=replacement)
                )

        return "".join(out)

    def rewrite_block(self, block: InterpolationBlock, filename: str = "") -> str | None:
        """Build the replacement for one block, or None if it must stay as is."""
        try:
            stages = parse_chain(block.pipe_chain_text)
            replacement = render_block(block.base_expression, stages, self.options.name_prefix)
        except Exception as exc:
            logger.error("Error transforming pipe %r in %s: %s", block.raw_match, filename or "<string>", exc)
            return None

        if self.options.debug:
            logger.debug("Transformed %s -> %s", block.raw_match, replacement)
        return replacement
