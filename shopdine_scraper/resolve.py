"""
URL and asset helpers shared by the listing and detail parsers.
"""
import re
from typing import Optional

from bs4 import Tag

from .config import GENERIC_IMAGE_PATTERNS, GENERIC_NAMES

# Lazy-load attributes win over src
IMAGE_SOURCE_ATTRS = ("data-original", "data-src", "data-lazy", "src")

_PARENT_SEGMENT = re.compile(r"[^/]+/\.\./")
_LEADING_PARENTS = re.compile(r"^(?:\.\./)+")


def resolve_url(src: str, base_url: str) -> str:
    """
    Turn a site-relative image or link path into an absolute URL.

    images/../images/poster/x.jpg -> {base_url}/images/poster/x.jpg
    """
    if not src:
        return ""
    if src.startswith("http"):
        return src
    if src.startswith("//"):
        return "https:" + src

    cleaned = src[1:] if src.startswith("/") else src
    while "../" in cleaned:
        collapsed = _PARENT_SEGMENT.sub("", cleaned)
        if collapsed == cleaned:
            # leading ../ with nothing to collapse into
            collapsed = _LEADING_PARENTS.sub("", cleaned)
        if collapsed == cleaned:
            # "../" inside a segment name, e.g. a/b../x
            break
        cleaned = collapsed
    return f"{base_url.rstrip('/')}/{cleaned}"


def get_image_source(img: Optional[Tag]) -> str:
    """Image URL from the first populated lazy-load or src attribute, '' if none"""
    if img is None:
        return ""
    for attr in IMAGE_SOURCE_ATTRS:
        value = img.get(attr)
        if value:
            return str(value).strip()
    return ""


def is_generic_image(src: str) -> bool:
    """True for empty sources and site-wide chrome images"""
    if not src:
        return True
    return any(pattern in src for pattern in GENERIC_IMAGE_PATTERNS)


def is_generic_name(name: Optional[str]) -> bool:
    """True if the text is a navigation/chrome label rather than a business name"""
    if name is None:
        return False
    return name.strip().lower() in GENERIC_NAMES
