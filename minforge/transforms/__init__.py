"""minforge transforms: registry mapping TransformKind to transform class.

Usage::

    from minforge.transforms import get_transform, select_kind

    kind = select_kind(AssetKind.CSS, nominify=False)
    transform = get_transform(kind, options)
    with engine_session(transform):
        output = transform.apply(source, text)
"""

from __future__ import annotations

from typing import Any

from minforge.models.config import AssetKind, TransformOptions
from minforge.transforms.base import (
    BaseTransform,
    EngineIssue,
    EngineSyntaxError,
    TransformKind,
    TransformOutput,
    engine_session,
)
from minforge.transforms.css import CssMinifyTransform
from minforge.transforms.js import JsMinifyTransform
from minforge.transforms.lint import LintTransform
from minforge.transforms.passthrough import PassthroughTransform

# ---------------------------------------------------------------------------
# Transform registry: kind -> transform class
# ---------------------------------------------------------------------------

TRANSFORM_REGISTRY: dict[TransformKind, type[BaseTransform]] = {
    TransformKind.PASSTHROUGH: PassthroughTransform,
    TransformKind.CSS_MINIFY: CssMinifyTransform,
    TransformKind.JS_MINIFY: JsMinifyTransform,
    TransformKind.LINT: LintTransform,
}

_MINIFY_KINDS: dict[AssetKind, TransformKind] = {
    AssetKind.CSS: TransformKind.CSS_MINIFY,
    AssetKind.JS: TransformKind.JS_MINIFY,
}


def select_kind(asset_kind: AssetKind, *, nominify: bool = False) -> TransformKind:
    """Pick the aggregate transform for an asset kind."""
    if nominify:
        return TransformKind.PASSTHROUGH
    return _MINIFY_KINDS[asset_kind]


def get_transform(
    kind: TransformKind,
    options: TransformOptions | None = None,
    engine: Any = None,
) -> BaseTransform:
    """Instantiate the transform registered for *kind*.

    Raises ``KeyError`` if the kind is not registered.
    """
    try:
        cls = TRANSFORM_REGISTRY[kind]
    except KeyError:
        raise KeyError(
            f"Unknown transform kind {kind!r}. "
            f"Registered kinds: {sorted(k.value for k in TRANSFORM_REGISTRY)}"
        ) from None
    return cls(options, engine=engine)


__all__ = [
    "BaseTransform",
    "EngineIssue",
    "EngineSyntaxError",
    "TransformKind",
    "TransformOutput",
    "engine_session",
    "TRANSFORM_REGISTRY",
    "select_kind",
    "get_transform",
    "CssMinifyTransform",
    "JsMinifyTransform",
    "LintTransform",
    "PassthroughTransform",
]
