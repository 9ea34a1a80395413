"""Rewrites {value | pipe:args} template interpolations into nested function calls."""

from .models import (
    InterpolationBlock,
    PipeStage,
    PipeSyntaxError,
    PipeUsage,
    PreprocessResult,
    ProcessReport,
    RewriteOptions,
    RewriteRecord,
)
from .preprocessor import PipePreprocessor, create_pipe_preprocessor, transform_pipes

__all__ = [
    "InterpolationBlock",
    "PipePreprocessor",
    "PipeStage",
    "PipeSyntaxError",
    "PipeUsage",
    "PreprocessResult",
    "ProcessReport",
    "RewriteOptions",
    "RewriteRecord",
    "create_pipe_preprocessor",
    "transform_pipes",
]
