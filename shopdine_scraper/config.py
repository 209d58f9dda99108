"""
Configuration module for the ShopDineGuide scraper.
All settings can be overridden via CLI arguments, environment variables or a YAML file.
"""
import os
from typing import List, Optional
from dataclasses import dataclass, field
from pathlib import Path


# Content sections, fetched in this order
SECTIONS = ["shop", "dine", "guide"]

# Filter pages re-list businesses already shown in a section
FILTER_PAGES = ["hot", "free", "deals", "coupons"]

# Site-wide chrome images - DO NOT use for logos or galleries
GENERIC_IMAGE_PATTERNS = [
    "poster0.jpg",    # placeholder on every listing card
    "logo3.png",      # footer logo
    "logo4.png",      # footer logo
    "histats.com",    # tracking pixel
    "favicon",
    "bk11.jpg",       # background
]

# Navigation / page chrome labels that are never business names
GENERIC_NAMES = [
    "about us", "about", "hot deals", "deals", "news", "order",
    "home", "contact", "contact us", "log in", "login", "promote",
    "free promote", "shop", "dine", "guide", "brands", "coupons",
    "menu", "hours", "location", "reviews", "photos", "map",
    "all", "hot", "free", "search",
]

NEIGHBORHOODS = [
    "Chinatown",
    "Fishermans Wharf",
    "Hayes Valley",
    "Mission",
    "Richmond",
    "Silver",
    "Sunset",
]

# Order matters: South San Francisco must be checked before San Francisco
CITIES = [
    "South San Francisco",
    "San Francisco",
    "San Mateo",
    "Daly City",
    "Millbrae",
    "Napa",
]

# Listing card markup
CARD_CONTAINER_CLASSES = ["food1", "imgholder", "grid"]
CARD_NAME_CLASS = "itemleft-ss"
CARD_LIKES_CLASS = "itemleft-s"

# Detail page link markers
SITE_DOMAIN_MARKER = "shopdineguide"
WEBSITE_EXCLUDED_MARKERS = [
    SITE_DOMAIN_MARKER,
    "google",
    "facebook",
    "instagram",
    "yelp",
    "histats",
    "goo.gl",
]
MAPS_MARKERS = ["google.com/maps", "goo.gl/maps", "maps.google"]
ADDRESS_LINK_MARKERS = ["goo.gl/maps", "google.com/maps"]
ORDER_MARKERS = ["order", "menu", "toasttab"]


@dataclass
class ScraperConfig:
    """Main configuration class for the scraper"""

    # Source site
    base_url: str = "https://shopdineguide.com"
    index_path: str = "index.php"
    detail_path: str = "showpon.php"
    ad_detail_path: str = "adshowpon.php"
    sections: List[str] = field(default_factory=lambda: list(SECTIONS))
    filter_pages: List[str] = field(default_factory=lambda: list(FILTER_PAGES))
    filter_section: str = "dine"  # section tag for items only found on filter pages

    # Rate Limiting
    delay_between_requests: float = 0.3  # seconds, minimum gap between requests
    request_timeout: int = 30  # seconds
    user_agent: str = "ShopDineGuide-App/1.0 (Content Sync)"

    # Output
    output_path: str = "assets/data/businesses.json"

    # Extraction
    default_state: str = "CA"
    max_description_length: int = 1000
    limit: Optional[int] = None  # max detail pages, None = all

    # Logging
    log_level: str = "INFO"
    log_file: str = ""
    debug_mode: bool = False

    def listing_url(self, page: str) -> str:
        """URL of a section or filter index page"""
        return f"{self.base_url}/{self.index_path}?s={page}"

    def detail_url(self, business_id: int, is_ad: bool = False) -> str:
        """URL of a business detail page (organic or ad variant)"""
        path = self.ad_detail_path if is_ad else self.detail_path
        return f"{self.base_url}/{path}?id={business_id}"


def load_config_from_env(config: Optional[ScraperConfig] = None) -> ScraperConfig:
    """Load configuration from environment variables"""
    if config is None:
        config = ScraperConfig()

    # Override from environment
    if os.getenv("SCRAPER_BASE_URL"):
        config.base_url = os.getenv("SCRAPER_BASE_URL").rstrip("/")

    if os.getenv("SCRAPER_DELAY"):
        config.delay_between_requests = float(os.getenv("SCRAPER_DELAY"))

    if os.getenv("SCRAPER_LIMIT"):
        config.limit = int(os.getenv("SCRAPER_LIMIT"))

    if os.getenv("SCRAPER_OUTPUT"):
        config.output_path = os.getenv("SCRAPER_OUTPUT")

    if os.getenv("SCRAPER_LOG_LEVEL"):
        config.log_level = os.getenv("SCRAPER_LOG_LEVEL")

    return config


def load_config_from_file(config_path: str) -> ScraperConfig:
    """Load configuration from YAML file"""
    import yaml

    config = ScraperConfig()

    if not Path(config_path).exists():
        return config

    with open(config_path, 'r') as f:
        yaml_config = yaml.safe_load(f)

    if yaml_config:
        for key, value in yaml_config.items():
            if hasattr(config, key):
                setattr(config, key, value)

    config.base_url = config.base_url.rstrip("/")
    return config
