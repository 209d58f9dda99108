from shopdine_scraper.parse import parse_detail_page

BASE_URL = "https://shopdineguide.com"


def test_detail_fields(config, detail_html):
    detail = parse_detail_page(detail_html, 42, config)

    assert detail.id == 42
    assert detail.name == "Joe's Deli"
    assert detail.phone == "(415) 555-0100"
    assert detail.website == "https://www.joesdeli.com"
    assert detail.google_maps_url == "https://goo.gl/maps/abc123"
    assert detail.address == "1234 Mission St, San Francisco, CA 94103"
    assert detail.neighborhood == "Mission"
    assert detail.city == "San Francisco"
    assert detail.state == "CA"
    assert detail.zip == "94103"
    assert detail.facebook_url == "https://www.facebook.com/joesdeli"
    assert detail.instagram_url == "https://instagram.com/joesdeli"
    assert detail.yelp_url == "https://www.yelp.com/biz/joes-deli"
    assert detail.order_url == "https://joesdeli.toasttab.com/order"
    assert detail.description == "Family-run deli serving sandwiches in the Mission since 1985."


def test_detail_images(config, detail_html):
    detail = parse_detail_page(detail_html, 42, config)

    assert detail.logo_url == f"{BASE_URL}/images/logo/42.png"
    assert detail.gallery_urls == [
        f"{BASE_URL}/images/poster/42-1.jpg",
        f"{BASE_URL}/images/poster/42-2.jpg",
        f"{BASE_URL}/uploads/photo-42.jpg",
    ]
    assert detail.banner_url == f"{BASE_URL}/images/bk42.jpg"
    assert detail.qr_code_url == f"{BASE_URL}/images/qrcode/42.png"


def test_gallery_dedup_across_passes(config):
    html = """
    <img src="uploads/poster/9.jpg">
    <img src="images/upload/9b.jpg">
    <img src="/uploads/poster/9.jpg">
    """
    detail = parse_detail_page(html, 9, config)
    assert detail.gallery_urls == [
        f"{BASE_URL}/uploads/poster/9.jpg",
        f"{BASE_URL}/images/upload/9b.jpg",
    ]


def test_empty_page_leaves_fields_absent(config):
    detail = parse_detail_page("<html><body></body></html>", 3, config)
    assert detail.name is None
    assert detail.phone is None
    assert detail.website is None
    assert detail.address is None
    assert detail.city is None
    assert detail.state is None
    assert detail.gallery_urls == []
    assert detail.description is None
    assert detail.order_url is None


def test_name_fallbacks(config):
    html = "<h1>Contact</h1><h2>Menu</h2><h2>Sunset Florist</h2>"
    assert parse_detail_page(html, 1, config).name == "Sunset Florist"

    html = "<h1>Home</h1><h1>Napa Wine Bar</h1><h2>Hours</h2>"
    assert parse_detail_page(html, 1, config).name == "Napa Wine Bar"

    html = "<h2>X</h2><h1>About</h1>"
    assert parse_detail_page(html, 1, config).name is None


def test_south_san_francisco_wins(config):
    html = '<a href="https://www.google.com/maps/place/x">88 Grand Ave, South San Francisco, CA 94080</a>'
    detail = parse_detail_page(html, 1, config)
    assert detail.city == "South San Francisco"
    assert detail.zip == "94080"
    assert detail.neighborhood is None


def test_first_neighborhood_wins(config):
    html = '<a href="https://goo.gl/maps/q">1 Sunset Blvd, Richmond District, San Francisco</a>'
    detail = parse_detail_page(html, 1, config)
    assert detail.neighborhood == "Richmond"
    assert detail.zip is None


def test_short_maps_text_is_not_an_address(config):
    html = '<a href="https://maps.google.com/?q=1">Map</a>'
    detail = parse_detail_page(html, 1, config)
    assert detail.google_maps_url == "https://maps.google.com/?q=1"
    assert detail.address is None
    assert detail.state is None


def test_website_skips_site_and_social_links(config):
    html = """
    <a href="https://shopdineguide.com/promote.php">Promote</a>
    <a href="https://www.google.com/search?q=x">Google</a>
    <a href="http://histats.com/1">Stats</a>
    <a href="/relative/page">Relative</a>
    <a href="http://mission-hardware.example">Site</a>
    <a href="https://second.example">Second</a>
    """
    assert parse_detail_page(html, 1, config).website == "http://mission-hardware.example"


def test_description_is_truncated(config):
    config.max_description_length = 50
    html = f"<div class='about'>{'word ' * 100}</div>"
    detail = parse_detail_page(html, 1, config)
    assert len(detail.description) == 50


def test_order_url_ignores_site_links(config):
    html = """
    <a href="https://shopdineguide.com/order.php">Order</a>
    <a href="https://example.com/menu.pdf">Menu</a>
    """
    assert parse_detail_page(html, 1, config).order_url == "https://example.com/menu.pdf"
