import logging
import re
from typing import Callable

logger = logging.getLogger(__name__)

SLUG_MAX_LENGTH = 255

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """
    Lowercase the text, collapse every run of characters outside [a-z0-9]
    into one hyphen and trim hyphens from both ends.
    """
    return _NON_ALNUM.sub("-", text.lower()).strip("-")


def _fit(base: str, suffix: str = "") -> str:
    room = SLUG_MAX_LENGTH - len(suffix)
    return base[:room].rstrip("-") + suffix


def resolve_unique_slug(
    text: str, exists: Callable[[str], bool], fallback: str = "item"
) -> str:
    """
    Return the first slug derived from `text` for which `exists` is false,
    trying base, base-1, base-2, ...

    Best-effort only: nothing reserves the returned slug, so a concurrent
    writer can still claim it first and hit the unique constraint.
    """
    base = slugify(text) or fallback
    candidate = _fit(base)
    counter = 1
    while exists(candidate):
        logger.debug(f"Slug '{candidate}' taken, trying next suffix")
        candidate = _fit(base, f"-{counter}")
        counter += 1
    return candidate
