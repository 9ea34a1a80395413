"""Transform pipeline for rewriting pipe syntax in template markup."""

from .pipeline import Transform, TransformPipeline
from .rewriter import PipeRewriter
from .chain import parse_chain, parse_stage, tokenize_arguments
from .generator import generate_expression, render_block
from .locator import find_blocks, iter_segments
from .scanner import split_top_level

__all__ = [
    "Transform",
    "TransformPipeline",
    "PipeRewriter",
    "parse_chain",
    "parse_stage",
    "tokenize_arguments",
    "generate_expression",
    "render_block",
    "find_blocks",
    "iter_segments",
    "split_top_level",
]
