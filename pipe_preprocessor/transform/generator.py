"""Folds a base expression and pipe stages into nested call syntax."""

from __future__ import annotations

from pipe_preprocessor.models import PipeStage


def generate_expression(base_expression: str, stages: list[PipeStage], prefix: str = "") -> str:
    """`a`, [f, g:1] -> `g(f(a), 1)`; the first stage is applied innermost."""
    result = base_expression
    for stage in stages:
        call_args = ", ".join([result, *stage.args])
        result = f"{prefix}{stage.name}({call_args})"
    return result


def render_block(base_expression: str, stages: list[PipeStage], prefix: str = "") -> str:
    """Same as generate_expression, wrapped back in template braces."""
    return "{" + generate_expression(base_expression, stages, prefix) + "}"
