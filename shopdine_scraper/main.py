"""
Main CLI entry point for the ShopDineGuide scraper.
Fetches every section and filter page, then every business detail page,
and writes the merged records to businesses.json.
"""
import argparse
import asyncio
import logging
import sys
from typing import List, Optional

import httpx
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from .config import ScraperConfig, load_config_from_env, load_config_from_file
from .fetch import Fetcher, FetchError
from .parse import parse_listing_page, parse_detail_page
from .normalize import ListingCollector, merge_business, fallback_business
from .models import Business
from .export import JSONExporter, summarize, load_artifact

console = Console()
logger = logging.getLogger(__name__)


def setup_logging(config: ScraperConfig):
    """Setup structured logging"""
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper()),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(console=console, rich_tracebacks=True),
            logging.FileHandler(config.log_file) if config.log_file else logging.NullHandler()
        ],
        force=True,
    )


async def collect_listings(config: ScraperConfig, fetcher: Fetcher) -> ListingCollector:
    """
    Fetch section pages, then filter pages, into one listing map.

    A page that fails to fetch is skipped; the run continues.
    """
    collector = ListingCollector()

    pages = [(section, False) for section in config.sections]
    pages += [(page, True) for page in config.filter_pages]

    for page, is_filter in pages:
        try:
            html = await fetcher.fetch(config.listing_url(page))
        except FetchError as e:
            logger.warning(f"Skipping {page} page: {e}")
            continue

        section = config.filter_section if is_filter else page
        items = parse_listing_page(html, section, config)
        if is_filter:
            added = collector.add_filter(items)
            logger.info(f"Found {len(items)} items in {page} filter ({added} new)")
        else:
            added = collector.add_section(items)
            logger.info(f"Found {len(items)} items in {page} ({added} new)")

    logger.info(f"Total unique listings found: {len(collector)}")
    return collector


async def collect_businesses(
    collector: ListingCollector,
    config: ScraperConfig,
    fetcher: Fetcher
) -> List[Business]:
    """Fetch each listing's detail page and merge it into a Business"""
    businesses: List[Business] = []
    listings = collector.items()
    if config.limit is not None:
        listings = listings[:config.limit]
    total = len(listings)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console
    ) as progress:
        task = progress.add_task("Fetching detail pages...", total=total)

        for count, listing in enumerate(listings, start=1):
            url = config.detail_url(listing.id, listing.is_ad)
            progress.update(task, description=f"[{count}/{total}] id={listing.id}")
            try:
                html = await fetcher.fetch(url)
                detail = parse_detail_page(html, listing.id, config)
                business = merge_business(listing, detail, config)
                logger.info(
                    f"[{count}/{total}] {business.name} (id={listing.id}) - "
                    f"{len(business.gallery_urls)} images, "
                    f"poster: {'YES' if business.poster_url else 'NO'}"
                )
            except FetchError as e:
                logger.error(f"[{count}/{total}] Failed id={listing.id}: {e}")
                business = fallback_business(listing, config)
            except Exception as e:
                logger.error(f"[{count}/{total}] Could not parse id={listing.id}: {e}")
                if config.debug_mode:
                    logger.exception("Parse failure")
                business = fallback_business(listing, config)

            businesses.append(business)
            progress.advance(task)

    return businesses


async def run_scrape(
    config: ScraperConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> List[Business]:
    """Full pipeline: listing pages, detail pages, merge"""
    async with Fetcher(config, transport=transport) as fetcher:
        collector = await collect_listings(config, fetcher)
        return await collect_businesses(collector, config, fetcher)


def print_summary(stats: dict, output_file: Optional[str] = None):
    table = Table(title="Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Total", str(stats["total"]))
    table.add_row("With real images", str(stats["with_images"]))
    table.add_row("With names", str(stats["with_names"]))
    table.add_row("With address", str(stats["with_address"]))
    table.add_row("With phone", str(stats["with_phone"]))
    if output_file:
        table.add_row("Output File", output_file)

    console.print(table)


def build_config(args) -> ScraperConfig:
    """Defaults <- YAML file <- environment <- CLI flags"""
    config = load_config_from_file(args.config) if args.config else ScraperConfig()
    config = load_config_from_env(config)

    if args.output:
        config.output_path = args.output
    if args.base_url:
        config.base_url = args.base_url.rstrip("/")
    if args.delay is not None:
        config.delay_between_requests = args.delay
    if args.limit is not None:
        config.limit = args.limit
    if args.debug:
        config.debug_mode = True
        config.log_level = "DEBUG"

    return config


async def main_async(args):
    """Main async function"""
    config = build_config(args)
    setup_logging(config)

    if args.stats:
        document = load_artifact(args.stats)
        console.print(f"[cyan]Artifact scraped at {document.get('scrapedAt', '?')}[/cyan]")
        print_summary(summarize(document.get("businesses", [])), args.stats)
        return

    console.print("[bold green]=== ShopDineGuide Content Scraper ===[/bold green]")
    console.print(f"Source: {config.base_url}")
    console.print(f"Output: {config.output_path}")

    businesses = await run_scrape(config)

    exporter = JSONExporter(config)
    records = [business.to_record() for business in businesses]
    if not exporter.validate_data(records):
        console.print("[red]Error: Data validation failed[/red]")
        sys.exit(1)

    console.print("[cyan]Writing output...[/cyan]")
    output_file = exporter.export(businesses)

    console.print("\n[bold green]Scraping Complete![/bold green]")
    print_summary(summarize(records), output_file)


def main():
    """CLI entry point"""
    parser = argparse.ArgumentParser(
        description="Scrape ShopDineGuide listings into the app's businesses.json dataset",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        '--config',
        help='Path to YAML configuration file'
    )

    parser.add_argument(
        '--output',
        '-o',
        help='Output JSON file path (default: assets/data/businesses.json)'
    )

    parser.add_argument(
        '--base-url',
        help='Source site origin (default: https://shopdineguide.com)'
    )

    parser.add_argument(
        '--delay',
        type=float,
        help='Seconds to wait after every request (default: 0.3)'
    )

    parser.add_argument(
        '--limit',
        type=int,
        help='Maximum number of detail pages to fetch'
    )

    parser.add_argument(
        '--stats',
        metavar='PATH',
        help='Print coverage statistics for an existing artifact and exit'
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug mode with verbose logging'
    )

    args = parser.parse_args()

    try:
        asyncio.run(main_async(args))
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user, no output written[/yellow]")
        sys.exit(1)
    except Exception as e:
        console.print(f"\n[red]Fatal error: {e}[/red]")
        if args.debug:
            import traceback
            console.print(traceback.format_exc())
        sys.exit(1)


if __name__ == '__main__':
    main()
