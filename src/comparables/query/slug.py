"""URL slugs for marketplace search paths.

Marketplaces expect brand and model as lowercase ASCII tokens joined
by dashes ("Land Rover" -> "land-rover", "Citroën" -> "citroen").
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Mapping

_WHITESPACE_RE = re.compile(r"\s+")
_DISALLOWED_RE = re.compile(r"[^a-z0-9-]")


def slugify(text: str) -> str:
    """Lowercase, strip accents, dash-join words, drop other characters.

    Never fails: input with nothing sluggable gives an empty string.
    """
    text = unicodedata.normalize("NFD", text.lower())
    text = "".join(c for c in text if not unicodedata.combining(c))
    text = _WHITESPACE_RE.sub("-", text.strip())
    return _DISALLOWED_RE.sub("", text).strip("-")


def brand_slug(brand: str, aliases: Mapping[str, str]) -> str:
    """Map a free-text brand onto a marketplace's brand token.

    The alias table is keyed by lowercase spelling ("vw", "citroën",
    "land rover"); unknown brands fall back to :func:`slugify`.
    """
    key = _WHITESPACE_RE.sub(" ", brand.lower().strip())
    if key in aliases:
        return aliases[key]
    slug = slugify(brand)
    return aliases.get(slug, slug)


def model_slug(model: str) -> str:
    return slugify(model)
