import pytest

from shopdine_scraper.config import ScraperConfig

BASE_URL = "https://shopdineguide.com"


@pytest.fixture
def config(tmp_path):
    return ScraperConfig(
        base_url=BASE_URL,
        delay_between_requests=0,
        output_path=str(tmp_path / "businesses.json"),
    )


_LISTING_HTML = """
<html><body>
  <div class="nav"><a href="index.php?s=shop">Shop</a></div>
  <div class="food1">
    <a href="showpon.php?id=42">
      <img src="images/poster0.jpg">
      <img data-original="images/../images/logo/42.png" src="images/blank.gif">
    </a>
    <div class="itemleft-ss">Joe's Deli</div>
    <div class="itemleft-s">&#9829; 17 likes</div>
  </div>
  <div class="food1">
    <a href="adshowpon.php?id=42">
      <img src="/images/adposter/42.jpg">
    </a>
    <div class="itemleft-ss">Joe's Deli (Sponsored)</div>
    <div class="itemleft-s">3</div>
  </div>
  <div class="food1">
    <a href="showpon.php?id=42"><div class="itemleft-ss">Duplicate</div></a>
    <div class="itemleft-s">99</div>
  </div>
  <div class="grid">
    <a href="https://shopdineguide.com/showpon.php?id=7">
      <div style="font-weight: bold">Golden Gate Bakery</div>
      <div>123</div>
    </a>
  </div>
  <div class="grid">
    <a href="showpon.php?id=8"><span>Home</span></a>
  </div>
</body></html>
"""


_DETAIL_HTML = """
<html><head><title>Joe's Deli</title></head><body>
  <h1>Home</h1>
  <h2>Menu</h2>
  <h2 class="title">Joe's Deli</h2>
  <img src="images/logo3.png">
  <img src="images/logo/42.png">
  <img data-src="images/poster/42-1.jpg">
  <img src="images/../images/poster/42-2.jpg">
  <img src="uploads/photo-42.jpg">
  <img src="images/poster/42-1.jpg">
  <img src="images/bk42.jpg">
  <img src="images/bk11.jpg">
  <img src="images/qrcode/42.png">
  <img src="https://c.histats.com/pixel.gif">
  <a href="tel:(415)\\ 555-0100">Call</a>
  <a href="https://www.facebook.com/joesdeli">Facebook</a>
  <a href="https://instagram.com/joesdeli">Instagram</a>
  <a href="https://www.yelp.com/biz/joes-deli">Yelp</a>
  <a href="https://shopdineguide.com/index.php">Back</a>
  <a href="https://goo.gl/maps/abc123">1234 Mission St, San Francisco, CA 94103</a>
  <a href="www.joesdeli.com">Website</a>
  <a href="https://www.other-site.com">Other</a>
  <a href="https://joesdeli.toasttab.com/order">Order Online</a>
  <p>Log in to Promote your business today on our site</p>
  <p>Short</p>
  <p>Family-run deli serving sandwiches in the Mission since 1985.</p>
</body></html>
"""


@pytest.fixture
def listing_html():
    return _LISTING_HTML


@pytest.fixture
def detail_html():
    return _DETAIL_HTML
