"""Re-run ingredient analysis for recipes whose match records lost their raw-line link.

Match records point back to the raw ingredient line they came from. When a
recipe's raw lines are re-imported the link is set to NULL, so those recipes
need their match records rebuilt. This script finds them (or every recipe
with --all), deletes their match records and analyzes them again in
throttled batches.
"""

import argparse
import logging
from itertools import chain

from dotenv import load_dotenv

from recipe_utils.batching import FixedDelayThrottle, NoThrottle
from recipe_utils.config import Settings
from recipe_utils.database import SQLiteIngredientStore
from recipe_utils.ingredients import (
    reanalyze_recipes,
    unmatched_frequency,
    write_match_records_csv,
)

TOP_UNMATCHED = 15


def parse_args(settings: Settings) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Re-analyze recipe ingredients against the ingredient catalog"
    )
    parser.add_argument(
        "--db-path",
        default=settings.db_path,
        help=f"Path to SQLite database (default: {settings.db_path})",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=settings.batch_size,
        help=f"Recipes per batch (default: {settings.batch_size})",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=settings.batch_delay,
        help=f"Seconds to wait between batches (default: {settings.batch_delay})",
    )
    parser.add_argument(
        "--max-retries",
        type=int,
        default=settings.max_retries,
        help=f"Attempts per recipe on store errors (default: {settings.max_retries})",
    )
    parser.add_argument(
        "--max-workers",
        type=int,
        default=settings.max_workers,
        help=f"Threads for matching a recipe's lines (default: {settings.max_workers})",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Re-analyze every recipe, not only those with unlinked match records",
    )
    parser.add_argument(
        "--report-csv",
        help="Write the new match records to this CSV file",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    return parser.parse_args()


def print_report(report) -> None:
    print("\n" + "=" * 70)
    print("RE-ANALYSIS SUMMARY")
    print("=" * 70)
    print(f"Total recipes: {report.total}")
    print(f"  Successful: {len(report.success)}")
    print(f"  Failed:     {len(report.failed)}")
    print(f"  Skipped:    {len(report.skipped)}")

    if report.success:
        matched = sum(entry["matched"] for entry in report.success)
        unmatched = sum(entry["unmatched"] for entry in report.success)
        print(f"\nIngredients matched:   {matched}")
        print(f"Ingredients unmatched: {unmatched}")

    if report.failed:
        print("\nFailed recipes:")
        for entry in report.failed:
            print(f"  [{entry['recipe_id']}] {entry['title']}: {entry['error']}")

    if report.skipped:
        print("\nSkipped recipes:")
        for entry in report.skipped:
            print(f"  [{entry['recipe_id']}] {entry['title']}: {entry['reason']}")

    frequency = unmatched_frequency(report.results)
    if frequency:
        print(f"\nMost common unmatched ingredients (top {TOP_UNMATCHED}):")
        for text, count in frequency[:TOP_UNMATCHED]:
            print(f"  {count:4d}  {text}")

    print("=" * 70)


def main():
    load_dotenv()
    settings = Settings.from_env()
    args = parse_args(settings)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    logger = logging.getLogger(__name__)

    store = SQLiteIngredientStore(args.db_path)
    if args.all:
        recipes = store.list_recipes()
    else:
        recipes = store.find_recipes_needing_reanalysis()

    if not recipes:
        print("No recipes need re-analysis.")
        return

    logger.info(f"Found {len(recipes)} recipes to re-analyze")

    throttle = FixedDelayThrottle(args.delay) if args.delay > 0 else NoThrottle()
    report = reanalyze_recipes(
        store,
        recipes,
        batch_size=args.batch_size,
        throttle=throttle,
        max_retries=args.max_retries,
        show_progress=True,
        acceptance_floor=settings.acceptance_floor,
        exact_threshold=settings.exact_threshold,
        max_workers=args.max_workers,
    )

    if args.report_csv:
        records = chain.from_iterable(result.match_records for result in report.results)
        count = write_match_records_csv(records, args.report_csv)
        print(f"Wrote {count} match records to {args.report_csv}")

    print_report(report)


if __name__ == "__main__":
    main()
