"""TransformPipeline — ordered markup transforms run once per template document."""

from __future__ import annotations

from abc import ABC, abstractmethod


class Transform(ABC):
    @abstractmethod
    def apply(self, content: str, metadata: dict) -> str:
        """Return the transformed markup.

        metadata is created fresh for each document. It carries
        ``filename`` in, and transforms may add entries (``rewritten``,
        ``rewrites``) out.
        """
        ...


class TransformPipeline:
    def __init__(self, transforms: list[Transform] | None = None):
        self.transforms = list(transforms or [])

    def add(self, transform: Transform) -> TransformPipeline:
        self.transforms.append(transform)
        return self

    def apply(self, content: str, metadata: dict | None = None) -> str:
        if metadata is None:
            metadata = {}
        for t in self.transforms:
            content = t.apply(content, metadata)
        return content
