"""Parses a pipe chain (`a:1,2 | b | c:'x'`) into ordered stages."""

from __future__ import annotations

from pipe_preprocessor.models import PipeStage, PipeSyntaxError

from .scanner import split_top_level


def tokenize_arguments(args_text: str) -> list[str]:
    """Split an argument string on top-level commas.

    >>> tokenize_arguments("'x,y', z")
    ["'x,y'", 'z']
    >>> tokenize_arguments("(a,b), c")
    ['(a,b)', 'c']
    """
    if not args_text.strip():
        return []

    *head, tail = split_top_level(args_text, ",")
    args = [piece.strip() for piece in head]
    # Trailing remainder only counts when it holds something
    if tail.strip():
        args.append(tail.strip())
    return args


def parse_stage(stage_text: str) -> PipeStage:
    """Split one stage on its first top-level colon into name and args."""
    parts = split_top_level(stage_text, ":", maxsplit=1)
    name = parts[0].strip()
    args_text = parts[1].strip() if len(parts) == 2 else ""

    if not name:
        raise PipeSyntaxError(stage_text, "stage has no pipe name")

    return PipeStage(name=name, args_text=args_text)


def parse_chain(chain_text: str) -> list[PipeStage]:
    """Split a chain on top-level `|` and parse each stage, in order."""
    segments = [s.strip() for s in split_top_level(chain_text, "|")]
    stages = [parse_stage(s) for s in segments if s]
    if not stages:
        raise PipeSyntaxError(chain_text, "chain has no stages")
    return stages
