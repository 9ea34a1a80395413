"""PipePreprocessor — the markup hook that rewrites pipe syntax before compilation."""

from __future__ import annotations

import fnmatch
import logging
import time
from collections import Counter
from pathlib import Path

from pipe_preprocessor.models import (
    PipeSyntaxError,
    PipeUsage,
    PreprocessResult,
    ProcessError,
    ProcessReport,
    RewriteOptions,
)
from pipe_preprocessor.transform import PipeRewriter, TransformPipeline, find_blocks, parse_chain

logger = logging.getLogger(__name__)

_GLOB_CHARS = set("*?[")


def _matches_any(filename: str, patterns: tuple[str, ...]) -> bool:
    """Check whether *filename* matches one of *patterns*.

    Plain patterns match as substrings of the path; patterns with glob
    characters are matched with fnmatch against the full path.
    """
    path = filename.replace("\\", "/")
    for pattern in patterns:
        if _GLOB_CHARS & set(pattern):
            if fnmatch.fnmatch(path, pattern):
                return True
        elif pattern in path:
            return True
    return False


class PipePreprocessor:
    def __init__(self, options: RewriteOptions | None = None, pipeline: TransformPipeline | None = None):
        """
        Args:
            options: Prefix, debug and exclusion settings, fixed for the
                preprocessor's lifetime.
            pipeline: Transforms to run per document. Defaults to a single
                PipeRewriter built from *options*.
        """
        self.options = options or RewriteOptions()
        self.pipeline = pipeline or TransformPipeline([PipeRewriter(self.options)])

    # -- Public API ----------------------------------------------------------

    def is_excluded(self, filename: str) -> bool:
        return bool(filename) and _matches_any(filename, self.options.exclude)

    def markup(self, content: str, filename: str = "") -> PreprocessResult:
        """Rewrite every pipe block in *content*; excluded paths pass through."""
        if self.is_excluded(filename):
            return PreprocessResult(code=content, skipped=True)

        if self.options.debug:
            logger.debug("Processing pipes in: %s", filename or "<string>")

        metadata: dict = {"filename": filename}
        code = self.pipeline.apply(content, metadata)
        return PreprocessResult(
            code=code,
            rewritten=metadata.get("rewritten", 0),
            rewrites=metadata.get("rewrites", []),
        )

    def scan_usage(self, content: str, filename: str = "") -> PipeUsage:
        """Count the pipe names referenced by *content*, without rewriting it."""
        counts: Counter[str] = Counter()
        for block in find_blocks(content):
            try:
                stages = parse_chain(block.pipe_chain_text)
            except PipeSyntaxError as exc:
                logger.debug("Skipping %r in %s: %s", block.raw_match, filename or "<string>", exc)
                continue
            counts.update(stage.name for stage in stages)
        return PipeUsage(filename=filename, pipes=dict(counts))

    def process_file(
        self,
        source_path: Path,
        dest_path: Path | None = None,
        *,
        encoding: str = "utf-8",
        dry_run: bool = False,
    ) -> PreprocessResult:
        """Rewrite one file. Writes to *dest_path* unless it is None or dry_run."""
        content = source_path.read_text(encoding=encoding)
        result = self.markup(content, str(source_path))

        if dest_path is None or dry_run:
            return result

        dest_path.parent.mkdir(parents=True, exist_ok=True)
        dest_path.write_text(result.code, encoding=encoding)
        logger.info("wrote %s (%d bytes)", dest_path, len(result.code))
        return result

    def process_tree(
        self,
        source_dir: Path,
        out_dir: Path,
        *,
        glob: str = "*.svelte",
        encoding: str = "utf-8",
        dry_run: bool = False,
    ) -> ProcessReport:
        """Rewrite every file under *source_dir* matching *glob* into *out_dir*."""
        start = time.monotonic()
        report = ProcessReport()

        for source_path in sorted(source_dir.rglob(glob)):
            if not source_path.is_file():
                continue
            rel = source_path.relative_to(source_dir)
            dest_path = out_dir / rel
            try:
                if not dest_path.resolve().is_relative_to(out_dir.resolve()):
                    report.errors.append(ProcessError(file=str(rel), error="Path traversal detected"))
                    continue

                result = self.process_file(source_path, dest_path, encoding=encoding, dry_run=dry_run)
                if result.skipped:
                    report.excluded += 1
                    continue

                report.blocks += result.rewritten
                report.processed += 1
                if result.rewritten == 0:
                    report.unchanged += 1
            except (OSError, UnicodeDecodeError) as exc:
                report.errors.append(ProcessError(file=str(rel), error=str(exc)))
                logger.error("Error processing %s: %s", rel, exc)

        report.duration = time.monotonic() - start
        return report


def create_pipe_preprocessor(options: RewriteOptions | None = None, **overrides) -> PipePreprocessor:
    """Build a preprocessor; keyword overrides replace (validated) fields of *options*.

    >>> create_pipe_preprocessor(name_prefix="utils.").markup("{a | f}").code
    '{utils.f(a)}'
    """
    base = options or RewriteOptions()
    if overrides:
        base = RewriteOptions.model_validate({**base.model_dump(), **overrides})
    return PipePreprocessor(base)


def transform_pipes(content: str, options: RewriteOptions | None = None) -> str:
    """Rewrite pipe blocks in *content* and return the code only."""
    return PipePreprocessor(options).markup(content).code
