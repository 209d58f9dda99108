"""
Parsing layer for ShopDineGuide pages.
Listing pages yield lightweight ListingItems; detail pages yield a DetailFragment.
"""
import re
import logging
from typing import List, Optional, Iterable, Set, Tuple
from bs4 import BeautifulSoup, Tag

from .config import (
    ScraperConfig,
    CARD_CONTAINER_CLASSES,
    CARD_NAME_CLASS,
    CARD_LIKES_CLASS,
    SITE_DOMAIN_MARKER,
    WEBSITE_EXCLUDED_MARKERS,
    MAPS_MARKERS,
    ADDRESS_LINK_MARKERS,
    ORDER_MARKERS,
)
from .models import ListingItem, DetailFragment
from .normalize import extract_neighborhood, extract_city, extract_zip, placeholder_name
from .resolve import (
    IMAGE_SOURCE_ATTRS,
    resolve_url,
    get_image_source,
    is_generic_image,
    is_generic_name,
)

logger = logging.getLogger(__name__)

NUMERIC_ONLY = re.compile(r'^\d+$')
FIRST_NUMBER = re.compile(r'(\d+)')
TITLE_SELECTOR = 'h2.title, .title h2, h2[class*="title"]'
DESCRIPTION_SELECTOR = 'p, .about, .description, .intro'
DESCRIPTION_SKIP_PHRASES = ("Log in", "Promote")


def clean_text(s: Optional[str]) -> str:
    """Collapse whitespace runs and strip"""
    if not s:
        return ""
    s = re.sub(r"\s+", " ", s)
    return s.strip()


def safe_text(element: Optional[Tag], default: str = "") -> str:
    """Safely extract text from BeautifulSoup element"""
    if element is None:
        return default
    text = clean_text(element.get_text()) if hasattr(element, 'get_text') else str(element)
    return text or default


def safe_attr(element: Optional[Tag], attr: str, default: str = "") -> str:
    """Safely extract attribute from BeautifulSoup element"""
    if element is None:
        return default
    value = element.get(attr, default)
    return str(value).strip() if value else default


def _has_class(tag: Tag, class_name: str) -> bool:
    return class_name in (tag.get('class') or [])


def _closest(tag: Tag, class_name: str) -> Optional[Tag]:
    """Nearest element (the tag itself or an ancestor) carrying class_name"""
    if _has_class(tag, class_name):
        return tag
    return tag.find_parent(class_=class_name)


def _href_contains(tag: Tag, markers: Iterable[str]) -> bool:
    href = safe_attr(tag, 'href')
    return any(marker in href for marker in markers)


# ---------------------------------------------------------------------------
# Listing pages
# ---------------------------------------------------------------------------

def _detail_link_pattern(config: ScraperConfig) -> re.Pattern:
    # ad path first: "adshowpon.php" also contains "showpon.php"
    return re.compile(
        rf'({re.escape(config.ad_detail_path)}|{re.escape(config.detail_path)})\?id=(\d+)'
    )


def find_card(anchor: Tag) -> Tag:
    """Card container for a listing anchor; falls back to the anchor's parent"""
    for class_name in CARD_CONTAINER_CLASSES:
        card = _closest(anchor, class_name)
        if card is not None:
            return card
    return anchor.parent if anchor.parent is not None else anchor


def _first_text(elements: Iterable[Tag], max_length: int, styled_only: bool = False) -> str:
    for child in elements:
        text = safe_text(child)
        if not text or len(text) < 2 or len(text) >= max_length:
            continue
        if NUMERIC_ONLY.match(text):
            continue
        if styled_only:
            style = safe_attr(child, 'style').lower()
            if 'font-weight' not in style and 'font-size' not in style:
                continue
        return text
    return ""


def extract_listing_name(anchor: Tag, card: Tag, business_id: int) -> str:
    """
    Best-effort business name for a listing card.

    Priority: name label in the card, emphasized div inside the anchor
    (deals pages), any text element inside the anchor, any text element in
    the card, then the "Business {id}" placeholder.
    """
    name = safe_text(card.find(class_=CARD_NAME_CLASS))

    if not name:
        name = _first_text(anchor.find_all('div'), 120, styled_only=True)

    if not name:
        name = _first_text(anchor.find_all(['div', 'span']), 100)

    if not name:
        name = _first_text(card.find_all(['div', 'span']), 100)

    if not name or is_generic_name(name):
        name = placeholder_name(business_id)

    return name


def extract_listing_logo(card: Tag, base_url: str) -> str:
    """Last non-generic image in the card; the business logo sits over a generic poster"""
    logo_url = ""
    for img in card.find_all('img'):
        src = get_image_source(img)
        if src and not is_generic_image(src):
            logo_url = resolve_url(src, base_url)
    return logo_url


def extract_like_count(card: Tag) -> int:
    count_el = card.find(class_=CARD_LIKES_CLASS)
    match = FIRST_NUMBER.search(safe_text(count_el))
    return int(match.group(1)) if match else 0


def parse_listing_page(html: str, section: str, config: ScraperConfig) -> List[ListingItem]:
    """
    Parse a section or filter index page into listing cards

    Returns:
        ListingItems in document order, one per (id, is_ad)
    """
    soup = BeautifulSoup(html, 'lxml')
    pattern = _detail_link_pattern(config)
    items: List[ListingItem] = []
    seen: Set[Tuple[int, bool]] = set()

    for anchor in soup.find_all('a', href=True):
        match = pattern.search(safe_attr(anchor, 'href'))
        if not match:
            continue

        business_id = int(match.group(2))
        is_ad = match.group(1) == config.ad_detail_path
        if (business_id, is_ad) in seen:
            continue

        card = find_card(anchor)
        items.append(ListingItem(
            id=business_id,
            name=extract_listing_name(anchor, card, business_id),
            logo_url=extract_listing_logo(card, config.base_url),
            like_count=extract_like_count(card),
            is_ad=is_ad,
            section=section,
        ))
        seen.add((business_id, is_ad))

    logger.debug(f"Parsed {len(items)} listings for section '{section}'")
    return items


# ---------------------------------------------------------------------------
# Detail pages
# ---------------------------------------------------------------------------

def _acceptable_name(text: str) -> bool:
    return 1 < len(text) < 200 and not is_generic_name(text)


def extract_detail_name(soup: BeautifulSoup) -> Optional[str]:
    """Title heading, then first non-generic h2, then first non-generic h1"""
    title_el = soup.select_one(TITLE_SELECTOR)
    if title_el is not None:
        text = safe_text(title_el)
        if _acceptable_name(text):
            return text

    for tag_name in ('h2', 'h1'):
        for heading in soup.find_all(tag_name):
            text = safe_text(heading)
            if _acceptable_name(text):
                return text

    return None


def extract_phone(soup: BeautifulSoup) -> Optional[str]:
    link = soup.select_one('a[href^="tel:"]')
    if link is None:
        return None
    phone = safe_attr(link, 'href').replace('tel:', '', 1).replace('\\', '').strip()
    return phone or None


def extract_website(soup: BeautifulSoup) -> Optional[str]:
    """First external link that is not the site itself or a social/maps/tracking domain"""
    for link in soup.find_all('a', href=True):
        href = safe_attr(link, 'href')
        if not (href.startswith('http') or href.startswith('www.')):
            continue
        if any(marker in href for marker in WEBSITE_EXCLUDED_MARKERS):
            continue
        return f"https://{href}" if href.startswith('www.') else href
    return None


def extract_maps_and_address(soup: BeautifulSoup) -> Tuple[Optional[str], Optional[str]]:
    """Google Maps URL and the street address shown as the maps link text"""
    maps_url = None
    address = None

    for link in soup.find_all('a', href=True):
        if maps_url is None and _href_contains(link, MAPS_MARKERS):
            maps_url = safe_attr(link, 'href') or None
        if address is None and _href_contains(link, ADDRESS_LINK_MARKERS):
            text = safe_text(link)
            if 5 < len(text) < 200:
                address = text
        if maps_url and address:
            break

    return maps_url, address


def extract_social_link(soup: BeautifulSoup, domain: str) -> Optional[str]:
    for link in soup.find_all('a', href=True):
        if domain in safe_attr(link, 'href'):
            return safe_attr(link, 'href')
    return None


def _image_attr_contains(img: Tag, markers: Iterable[str]) -> bool:
    for attr in IMAGE_SOURCE_ATTRS:
        value = safe_attr(img, attr)
        if value and any(marker in value for marker in markers):
            return True
    return False


def extract_images(soup: BeautifulSoup, fragment: DetailFragment, base_url: str) -> None:
    """Fill logo, gallery, banner and QR code fields on the fragment"""
    images = soup.find_all('img')
    sources = [get_image_source(img) for img in images]

    # Business logo lives under images/logo/, unlike the generic footer logos
    for src in sources:
        if 'logo/' in src and not is_generic_image(src):
            fragment.logo_url = resolve_url(src, base_url)
            break

    gallery: List[str] = []

    def add(src: str) -> None:
        resolved = resolve_url(src, base_url)
        if resolved not in gallery:
            gallery.append(resolved)

    for src in sources:
        if is_generic_image(src):
            continue
        if 'poster/' in src or 'adposter/' in src:
            add(src)

    for src in sources:
        if is_generic_image(src):
            continue
        if any(marker in src for marker in ('logo', 'qrcode', 'bk', 'icon')):
            continue
        if any(marker in src for marker in ('upload', 'photo', 'image')):
            add(src)

    fragment.gallery_urls = gallery

    for img, src in zip(images, sources):
        if _image_attr_contains(img, ('bk',)) and not is_generic_image(src):
            fragment.banner_url = resolve_url(src, base_url)
            break

    for img, src in zip(images, sources):
        if src and _image_attr_contains(img, ('qrcode', 'qr')):
            fragment.qr_code_url = resolve_url(src, base_url)
            break


def extract_description(soup: BeautifulSoup, max_length: int) -> Optional[str]:
    for block in soup.select(DESCRIPTION_SELECTOR):
        text = safe_text(block)
        if not (20 < len(text) < 2000) or is_generic_name(text):
            continue
        if any(phrase in text for phrase in DESCRIPTION_SKIP_PHRASES):
            continue
        return text[:max_length]
    return None


def extract_order_url(soup: BeautifulSoup) -> Optional[str]:
    for link in soup.find_all('a', href=True):
        href = safe_attr(link, 'href')
        if not href or SITE_DOMAIN_MARKER in href:
            continue
        if any(marker in href for marker in ORDER_MARKERS):
            return href
    return None


def parse_detail_page(html: str, business_id: int, config: ScraperConfig) -> DetailFragment:
    """
    Parse a business detail page

    Every field is best-effort: anything not found stays None.
    """
    soup = BeautifulSoup(html, 'lxml')
    fragment = DetailFragment(id=business_id)

    fragment.name = extract_detail_name(soup)
    fragment.phone = extract_phone(soup)
    fragment.website = extract_website(soup)

    fragment.google_maps_url, fragment.address = extract_maps_and_address(soup)
    if fragment.address:
        fragment.neighborhood = extract_neighborhood(fragment.address)
        fragment.city = extract_city(fragment.address)
        fragment.state = config.default_state
        fragment.zip = extract_zip(fragment.address)

    fragment.facebook_url = extract_social_link(soup, 'facebook.com')
    fragment.instagram_url = extract_social_link(soup, 'instagram.com')
    fragment.yelp_url = extract_social_link(soup, 'yelp.com')

    extract_images(soup, fragment, config.base_url)

    fragment.description = extract_description(soup, config.max_description_length)
    fragment.order_url = extract_order_url(soup)

    logger.debug(
        f"Parsed detail id={business_id}: name={fragment.name!r}, "
        f"{len(fragment.gallery_urls)} gallery images"
    )
    return fragment
