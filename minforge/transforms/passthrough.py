"""Passthrough: copies source text verbatim."""

from __future__ import annotations

from typing import ClassVar

from minforge.models.sources import SourceFile
from minforge.transforms.base import BaseTransform, TransformKind, TransformOutput


class PassthroughTransform(BaseTransform):
    """Identity transform used when minification is disabled."""

    kind: ClassVar[TransformKind] = TransformKind.PASSTHROUGH

    def apply(self, source: SourceFile, text: str) -> TransformOutput:
        return TransformOutput(text=text)

    def lint(self, source: SourceFile, text: str) -> list:
        return []
