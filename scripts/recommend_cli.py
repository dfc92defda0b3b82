"""CLI script for getting skincare recommendations.

Useful for checking the ranking against a seeded database. Prints the ranked
products with their match scores.
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from glowmatch.catalog.database import SessionLocal
from glowmatch.catalog.repository import fetch_published_catalog
from glowmatch.recommender.recommend import DEFAULT_LIMIT, recommend

# Setup logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s: %(message)s"
)
logger = logging.getLogger(__name__)


def main() -> None:
    """Main CLI function."""
    parser = argparse.ArgumentParser(
        description="Get skincare product recommendations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/recommend_cli.py --skin-type oily
  python scripts/recommend_cli.py --skin-type dry --concerns dryness,redness
  python scripts/recommend_cli.py --concerns acne --category serum --limit 5
        """
    )

    parser.add_argument("--skin-type", type=str, default=None, help="Skin type tag")
    parser.add_argument(
        "--concerns",
        type=str,
        default=None,
        help="Comma-separated concern tags",
    )
    parser.add_argument("--category", type=str, default=None, help="Category filter")
    parser.add_argument(
        "--limit",
        type=int,
        default=DEFAULT_LIMIT,
        help=f"Number of products to return (default: {DEFAULT_LIMIT})",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging"
    )

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.INFO)

    try:
        with SessionLocal() as session:
            catalog = fetch_published_catalog(session)
    except Exception as e:
        print(f"Error: failed to read catalog: {e}", file=sys.stderr)
        sys.exit(1)

    result = recommend(
        catalog,
        skin_type=args.skin_type,
        concerns=args.concerns,
        category=args.category,
        limit=args.limit,
    )

    print(f"\nTop {result.returned} of {result.total} products:")
    for rank, item in enumerate(result.items, start=1):
        product = item.product
        print(
            f"  {rank:>3}. [{item.match_score:>2}] {product.name}"
            f" ({product.category or 'uncategorized'}, {item.view_count} views)"
        )
    print()


if __name__ == "__main__":
    main()
