"""
ShopDineGuide content scraper package
"""
from .config import ScraperConfig
from .models import ListingItem, DetailFragment, Business
from .parse import parse_listing_page, parse_detail_page
from .normalize import ListingCollector, merge_business, fallback_business
from .export import JSONExporter

__version__ = "1.0.0"

__all__ = [
    "ScraperConfig",
    "ListingItem",
    "DetailFragment",
    "Business",
    "parse_listing_page",
    "parse_detail_page",
    "ListingCollector",
    "merge_business",
    "fallback_business",
    "JSONExporter",
]
