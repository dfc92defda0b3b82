"""Load a catalog CSV into the GlowMatch database.

Example:
    $ python scripts/generate_fake_catalog.py
    $ python scripts/seed_catalog.py data/fake_catalog.csv

    Seed a different database:
        $ GLOWMATCH_DATABASE_URL=postgresql://localhost/glowmatch \\
            python scripts/seed_catalog.py data/catalog.csv
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to Python path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from glowmatch.catalog.database import SessionLocal, init_db
from glowmatch.catalog.loader import load_catalog_csv, seed_catalog


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the script.

    Args:
        verbose: If True, set log level to DEBUG. Otherwise, use INFO.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def main() -> int:
    """Main entry point for seeding."""
    parser = argparse.ArgumentParser(description="Load a catalog CSV into the database.")
    parser.add_argument("csv_path", type=str, help="Path to the catalog CSV file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    setup_logging(verbose=args.verbose)
    logger = logging.getLogger(__name__)

    try:
        catalog = load_catalog_csv(args.csv_path)
        init_db()
        with SessionLocal() as session:
            product_ids = seed_catalog(session, catalog)
        logger.info(f"Seeded {len(product_ids)} products from {args.csv_path}")
        return 0

    except FileNotFoundError as e:
        logging.error(f"File error: {e}")
        return 1
    except ValueError as e:
        logging.error(f"Validation error: {e}")
        return 1
    except KeyboardInterrupt:
        logging.warning("Seeding interrupted by user")
        return 130
    except Exception as e:
        logging.error(f"Unexpected error: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
