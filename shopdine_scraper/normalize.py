"""
Normalization layer: address inference and merging of listing + detail data
into the final Business records.
"""
import re
import logging
from typing import Dict, Iterable, Iterator, List, Optional, Tuple
from datetime import datetime, timezone

from .config import ScraperConfig, NEIGHBORHOODS, CITIES
from .models import Business, DetailFragment, ListingItem
from .resolve import is_generic_name

logger = logging.getLogger(__name__)

ZIP_PATTERN = re.compile(r'\b(9\d{4})\b')


def now_iso() -> str:
    """Current UTC timestamp in ISO-8601 format"""
    return datetime.now(timezone.utc).isoformat()


def placeholder_name(business_id: int) -> str:
    return f"Business {business_id}"


def extract_neighborhood(address: str) -> Optional[str]:
    """First known neighborhood contained in the address (case-insensitive)"""
    if not address:
        return None

    address_lower = address.lower()
    for neighborhood in NEIGHBORHOODS:
        if neighborhood.lower() in address_lower:
            return neighborhood

    return None


def extract_city(address: str) -> Optional[str]:
    """First known city contained in the address; longer names are listed first"""
    if not address:
        return None

    for city in CITIES:
        if city in address:
            return city

    return None


def extract_zip(address: str) -> Optional[str]:
    """First 5-digit Bay Area zip code in the address"""
    if not address:
        return None

    match = ZIP_PATTERN.search(address)
    return match.group(1) if match else None


def merge_business(
    listing: ListingItem,
    detail: DetailFragment,
    config: ScraperConfig
) -> Business:
    """
    Combine a listing card and its parsed detail page into one Business.

    Name: detail name > listing name > "Business {id}".
    Poster: first gallery image > detail logo > listing logo.
    """
    name = detail.name
    if not name or is_generic_name(name):
        name = listing.name
    if not name or is_generic_name(name):
        name = placeholder_name(listing.id)

    gallery_urls = list(detail.gallery_urls)
    poster_url = (
        (gallery_urls[0] if gallery_urls else None)
        or detail.logo_url
        or listing.logo_url
        or None
    )

    return Business(
        id=listing.id,
        name=name,
        section=listing.section,
        address=detail.address,
        city=detail.city,
        neighborhood=detail.neighborhood,
        state=detail.state or config.default_state,
        zip=detail.zip,
        phone=detail.phone,
        website=detail.website,
        logo_url=detail.logo_url or listing.logo_url or None,
        poster_url=poster_url,
        banner_url=detail.banner_url,
        qr_code_url=detail.qr_code_url,
        gallery_urls=gallery_urls,
        google_maps_url=detail.google_maps_url,
        facebook_url=detail.facebook_url,
        instagram_url=detail.instagram_url,
        yelp_url=detail.yelp_url,
        description=detail.description,
        like_count=listing.like_count,
        is_ad=listing.is_ad,
        order_url=detail.order_url,
        fetched_at=now_iso(),
    )


def fallback_business(listing: ListingItem, config: ScraperConfig) -> Business:
    """Degraded record built from listing data alone, used when the detail page fails"""
    return Business(
        id=listing.id,
        name=listing.name or placeholder_name(listing.id),
        section=listing.section,
        state=config.default_state,
        logo_url=listing.logo_url or None,
        poster_url=listing.logo_url or None,
        gallery_urls=[],
        like_count=listing.like_count,
        is_ad=listing.is_ad,
        fetched_at=now_iso(),
    )


class ListingCollector:
    """Accumulates listings across pages, keyed by (id, is_ad)"""

    def __init__(self):
        self._items: Dict[Tuple[int, bool], ListingItem] = {}

    def add_section(self, items: Iterable[ListingItem]) -> int:
        """
        Add items from a section page. A later section replaces an earlier
        entry for the same key.

        Returns:
            Number of keys not seen before
        """
        added = 0
        for item in items:
            if item.key not in self._items:
                added += 1
            self._items[item.key] = item
        return added

    def add_filter(self, items: Iterable[ListingItem]) -> int:
        """
        Add items from a filter page. Keys already collected are kept as-is.

        Returns:
            Number of keys added
        """
        added = 0
        for item in items:
            if item.key not in self._items:
                self._items[item.key] = item
                added += 1
        return added

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ListingItem]:
        return iter(list(self._items.values()))

    def __contains__(self, key: Tuple[int, bool]) -> bool:
        return key in self._items

    def items(self) -> List[ListingItem]:
        return list(self._items.values())
