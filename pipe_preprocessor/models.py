"""Pydantic models for pipe blocks, rewrite options, and processing reports."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, computed_field

# Paths the host build generates or vendors; never user templates.
DEFAULT_EXCLUDE: tuple[str, ...] = (
    ".svelte-kit/",
    "node_modules/",
    "generated/",
    "root.svelte",
)


class PipeSyntaxError(ValueError):
    """Raised when a pipe chain cannot be turned into call stages."""

    def __init__(self, chain: str, reason: str) -> None:
        self.chain = chain
        self.reason = reason
        super().__init__(f"invalid pipe chain {chain!r}: {reason}")


class RewriteOptions(BaseModel):
    """Options applied uniformly to every block of one document."""

    model_config = ConfigDict(frozen=True)

    name_prefix: str = ""
    debug: bool = False
    exclude: tuple[str, ...] = DEFAULT_EXCLUDE


class InterpolationBlock(BaseModel):
    """One `{expression | chain}` match inside a document."""

    raw_match: str
    base_expression: str
    pipe_chain_text: str
    start_offset: int
    end_offset: int


class PipeStage(BaseModel):
    """One `name[:args]` segment of a pipe chain."""

    name: str
    args_text: str = ""

    @computed_field
    @property
    def args(self) -> list[str]:
        """The ArgumentList, tokenized from args_text."""
        from pipe_preprocessor.transform.chain import tokenize_arguments

        return tokenize_arguments(self.args_text)


class RewriteRecord(BaseModel):
    filename: str = ""
    original: str
    rewritten: str


class PreprocessResult(BaseModel):
    """What the markup hook hands back to the template compiler."""

    code: str
    map: None = None
    rewritten: int = 0
    rewrites: list[RewriteRecord] = []
    skipped: bool = False


class PipeUsage(BaseModel):
    filename: str = ""
    pipes: dict[str, int] = {}


class ProcessError(BaseModel):
    file: str
    error: str


class ProcessReport(BaseModel):
    processed: int = 0
    unchanged: int = 0
    excluded: int = 0
    blocks: int = 0
    errors: list[ProcessError] = []
    duration: float = 0.0
