"""Ambient locale for the service boundary.

Repositories and query helpers never read this; they take ``locale`` as an
argument. Services call :func:`resolve_locale` once per operation.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

from blogcore.core.config import settings

_current_locale: ContextVar[Optional[str]] = ContextVar("blog_locale", default=None)


def get_locale() -> str:
    return _current_locale.get() or settings.DEFAULT_LOCALE


def set_locale(locale: Optional[str]) -> None:
    _current_locale.set(normalize_locale(locale) if locale else None)


@contextmanager
def use_locale(locale: str) -> Iterator[str]:
    token = _current_locale.set(normalize_locale(locale))
    try:
        yield get_locale()
    finally:
        _current_locale.reset(token)


def resolve_locale(locale: Optional[str] = None) -> str:
    if locale:
        return normalize_locale(locale)
    return get_locale()


def normalize_locale(locale: str) -> str:
    return locale.strip().replace("_", "-")
