"""
Export layer for writing the businesses.json artifact consumed by the app.
"""
import json
import logging
from typing import List, Dict, Any, Optional
from pathlib import Path

from .config import ScraperConfig
from .models import Business
from .normalize import now_iso

logger = logging.getLogger(__name__)

# Keys every record must carry, with their JSON types
REQUIRED_FIELDS = {
    "id": int,
    "name": str,
    "section": str,
    "galleryUrls": list,
    "categories": list,
    "likeCount": int,
    "isHot": bool,
    "isFree": bool,
    "isAd": bool,
    "fetchedAt": str,
}


def summarize(businesses: List[Dict[str, Any]]) -> Dict[str, int]:
    """Coverage statistics over artifact records"""
    return {
        "total": len(businesses),
        "with_images": sum(
            1 for b in businesses
            if b.get("posterUrl") and "poster0" not in b["posterUrl"]
        ),
        "with_names": sum(
            1 for b in businesses
            if b.get("name") and not b["name"].startswith("Business ")
        ),
        "with_address": sum(1 for b in businesses if b.get("address")),
        "with_phone": sum(1 for b in businesses if b.get("phone")),
    }


def load_artifact(path: str) -> Dict[str, Any]:
    """Read a previously written artifact"""
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


class JSONExporter:
    """Writes the scraped businesses as a single JSON document"""

    def __init__(self, config: ScraperConfig):
        self.config = config

    def build_document(self, businesses: List[Business]) -> Dict[str, Any]:
        records = [business.to_record() for business in businesses]
        return {
            "businesses": records,
            "scrapedAt": now_iso(),
            "total": len(records),
        }

    def export(self, businesses: List[Business], output_path: Optional[str] = None) -> str:
        """
        Export businesses to the JSON artifact, replacing any previous file

        Args:
            businesses: Final merged records
            output_path: Output file path (uses config default if None)

        Returns:
            Path to the written file
        """
        if output_path is None:
            output_path = self.config.output_path

        # Ensure output directory exists
        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)

        document = self.build_document(businesses)
        with open(output_file, 'w', encoding='utf-8') as f:
            json.dump(document, f, indent=2, ensure_ascii=False)

        logger.info(f"Exported {document['total']} businesses to {output_file}")
        return str(output_file)

    def validate_data(self, records: List[Dict[str, Any]]) -> bool:
        """
        Validate that every record has the required keys and types

        Returns:
            True if valid, False otherwise
        """
        problems = []
        for index, record in enumerate(records):
            for key, expected in REQUIRED_FIELDS.items():
                value = record.get(key)
                # bool is a subclass of int
                if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
                    problems.append(f"record {index} (id={record.get('id')}): bad {key!r}")
            like_count = record.get("likeCount")
            if isinstance(like_count, int) and like_count < 0:
                problems.append(f"record {index} (id={record.get('id')}): negative likeCount")

        if problems:
            for problem in problems[:20]:
                logger.error(problem)
            return False

        return True
