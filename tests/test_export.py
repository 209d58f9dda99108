import json

import pytest

from shopdine_scraper.export import JSONExporter, load_artifact, summarize
from shopdine_scraper.models import Business


def _business(**overrides):
    data = dict(id=1, name="Joe's Deli", section="shop", fetched_at="2026-01-01T00:00:00+00:00")
    data.update(overrides)
    return Business(**data)


def test_record_uses_camel_case_and_omits_absent(config):
    record = _business(logo_url="L", poster_url="L", gallery_urls=["G"]).to_record()
    assert record["logoUrl"] == "L"
    assert record["posterUrl"] == "L"
    assert record["galleryUrls"] == ["G"]
    assert record["likeCount"] == 0
    assert record["isAd"] is False
    assert record["fetchedAt"] == "2026-01-01T00:00:00+00:00"
    assert "address" not in record
    assert "qrCodeUrl" not in record
    assert record["categories"] == []


def test_export_writes_document(config, tmp_path):
    output = tmp_path / "nested" / "dir" / "businesses.json"
    exporter = JSONExporter(config)
    path = exporter.export([_business(), _business(id=2, is_ad=True)], str(output))

    document = load_artifact(path)
    assert document["total"] == 2
    assert [b["id"] for b in document["businesses"]] == [1, 2]
    assert document["businesses"][1]["isAd"] is True
    assert "scrapedAt" in document


def test_export_replaces_previous_file(config):
    exporter = JSONExporter(config)
    exporter.export([_business(), _business(id=2)])
    exporter.export([_business(id=3)])
    with open(config.output_path, encoding="utf-8") as f:
        document = json.load(f)
    assert document["total"] == 1
    assert document["businesses"][0]["id"] == 3


def test_export_failure_propagates(config, tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("not a directory")
    with pytest.raises(OSError):
        JSONExporter(config).export([_business()], str(blocker / "businesses.json"))


def test_validate_data(config):
    exporter = JSONExporter(config)
    assert exporter.validate_data([_business().to_record()])
    assert exporter.validate_data([])

    bad = _business().to_record()
    bad["id"] = "1"
    assert not exporter.validate_data([bad])

    bad = _business().to_record()
    bad["likeCount"] = True
    assert not exporter.validate_data([bad])

    bad = _business().to_record()
    del bad["galleryUrls"]
    assert not exporter.validate_data([bad])


def test_summarize():
    records = [
        _business(poster_url="https://x/images/poster/1.jpg", address="1 Main", phone="1").to_record(),
        _business(id=2, name="Business 2", poster_url="https://x/images/poster0.jpg").to_record(),
        _business(id=3).to_record(),
    ]
    assert summarize(records) == {
        "total": 3,
        "with_images": 1,
        "with_names": 2,
        "with_address": 1,
        "with_phone": 1,
    }
