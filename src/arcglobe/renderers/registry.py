# SPDX-License-Identifier: Apache-2.0
"""Slug-keyed registry of globe renderers."""

from __future__ import annotations

from typing import Any, Iterable, TypeVar

from .base import InteractiveRenderer

_RendererT = TypeVar("_RendererT", bound=InteractiveRenderer)

_REGISTRY: dict[str, type[InteractiveRenderer]] = {}


def _normalize(slug: str) -> str:
    return slug.strip().lower()


def register(renderer_cls: type[_RendererT]) -> type[_RendererT]:
    """Class decorator adding ``renderer_cls`` under its ``slug``."""

    if not issubclass(renderer_cls, InteractiveRenderer):
        raise TypeError("renderer must inherit InteractiveRenderer")
    slug = _normalize(renderer_cls.slug or "")
    if not slug:
        raise ValueError("renderer slug must be non-empty")
    if slug in _REGISTRY:
        raise ValueError(f"renderer slug already registered: {slug}")
    _REGISTRY[slug] = renderer_cls
    return renderer_cls


def get(slug: str) -> type[InteractiveRenderer]:
    try:
        return _REGISTRY[_normalize(slug)]
    except KeyError as exc:
        known = ", ".join(slugs()) or "none"
        raise KeyError(f"unknown renderer slug: {slug} (available: {known})") from exc


def create(slug: str, **options: Any) -> InteractiveRenderer:
    """Instantiate the renderer registered under ``slug`` with ``options``."""

    return get(slug)(**options)


def available() -> Iterable[type[InteractiveRenderer]]:
    return _REGISTRY.values()


def slugs() -> list[str]:
    return sorted(_REGISTRY)
