"""Finds `{expression | chain}` interpolation blocks in markup."""

from __future__ import annotations

import re
from collections.abc import Iterator

from pipe_preprocessor.models import InterpolationBlock

from .scanner import split_top_level

# A single brace pair with no braces inside. Blocks do not nest.
_BRACE_BLOCK_RE = re.compile(r"\{([^{}]*)\}")


def match_block(m: re.Match) -> InterpolationBlock | None:
    """Turn one brace match into a block, or None if it is not pipe syntax."""
    parts = split_top_level(m.group(1), "|", maxsplit=1)
    if len(parts) != 2:
        return None

    expression, chain = parts[0].strip(), parts[1].strip()
    if not expression or not chain:
        return None

    return InterpolationBlock(
        raw_match=m.group(0),
        base_expression=expression,
        pipe_chain_text=chain,
        start_offset=m.start(),
        end_offset=m.end(),
    )


def iter_segments(content: str) -> Iterator[str | InterpolationBlock]:
    """Yield literal spans and pipe blocks in document order.

    Joining the literal spans with each block's ``raw_match`` gives back
    *content* exactly. Brace groups that are not pipe syntax stay inside
    the literal spans.
    """
    pos = 0
    for m in _BRACE_BLOCK_RE.finditer(content):
        block = match_block(m)
        if block is None:
            continue
        if block.start_offset > pos:
            yield content[pos:block.start_offset]
        yield block
        pos = block.end_offset
    if pos < len(content):
        yield content[pos:]


def find_blocks(content: str) -> list[InterpolationBlock]:
    return [seg for seg in iter_segments(content) if isinstance(seg, InterpolationBlock)]
