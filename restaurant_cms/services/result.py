"""Discriminated load result consumed by page rendering."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Loading:
    """Data has been requested but not delivered yet."""


@dataclass(frozen=True)
class Loaded(Generic[T]):
    data: T


@dataclass(frozen=True)
class Failed:
    error: str


LoadResult = Loading | Loaded[T] | Failed


def load(fetch: Callable[[], T], *, label: str = "data") -> Loaded[T] | Failed:
    """Run ``fetch`` and wrap the outcome; unexpected errors become ``Failed``."""
    try:
        return Loaded(fetch())
    except Exception:
        logger.exception("[LOAD] Failed to load %s", label)
        return Failed(f"Could not load {label}")
