"""Generate a fake skincare catalog CSV for development.

Example:
    Write 100 products to data/fake_catalog.csv:
        $ python scripts/generate_fake_catalog.py

    Or choose the size, seed and destination:
        $ python scripts/generate_fake_catalog.py --num-products 500 --seed 7 \\
            --output data/catalog.csv
"""

import argparse
import sys
from pathlib import Path

# Add project root to Python path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from glowmatch.catalog.loader import (
    DEFAULT_NUM_PRODUCTS,
    DEFAULT_RANDOM_SEED,
    generate_fake_catalog,
)


def main() -> int:
    """Main entry point for the catalog generation script."""
    parser = argparse.ArgumentParser(description="Generate a fake skincare catalog CSV.")
    parser.add_argument(
        "--num-products",
        type=int,
        default=DEFAULT_NUM_PRODUCTS,
        help=f"Number of products to generate (default: {DEFAULT_NUM_PRODUCTS})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=DEFAULT_RANDOM_SEED,
        help=f"Random seed (default: {DEFAULT_RANDOM_SEED})",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=str(project_root / "data" / "fake_catalog.csv"),
        help="Output CSV path (default: data/fake_catalog.csv)",
    )
    args = parser.parse_args()

    print(f"Generating {args.num_products} fake products...")

    try:
        df = generate_fake_catalog(num_products=args.num_products, random_seed=args.seed)
    except ValueError as e:
        print(f"Error generating catalog: {e}", file=sys.stderr)
        return 1

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(output_path, index=False)

    print(f"\nCatalog generated successfully!")
    print(f"Saved to: {output_path}")
    print(f"\nCatalog preview:")
    print(df[["name", "category", "skin_types", "concerns", "view_count"]].head(10))
    print(f"\nCatalog summary:")
    print(f"  Total products: {len(df)}")
    print(f"  Published: {int(df['published'].sum())}")
    print(f"  Categories: {df['category'].value_counts().to_dict()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
