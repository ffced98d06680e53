"""Reporting helpers for ingredient analysis results."""

import logging
from collections import Counter
from typing import Iterable, List, Tuple

import pandas as pd

from recipe_utils.ingredients.models import AnalysisResult, MatchRecord

logger = logging.getLogger(__name__)

MATCH_RECORD_COLUMNS = [
    "recipe_id",
    "recipe_ingredient_id",
    "ingredient_id",
    "original_text",
    "matched_term",
    "match_type",
    "matched_alias",
]


def match_records_dataframe(records: Iterable[MatchRecord]) -> pd.DataFrame:
    """Build a DataFrame with one row per match record."""
    return pd.DataFrame(
        [record.to_dict() for record in records], columns=MATCH_RECORD_COLUMNS
    )


def write_match_records_csv(records: Iterable[MatchRecord], output_file: str) -> int:
    """Write match records to a CSV file.

    Args:
        records: Match records to write
        output_file: Path to output CSV file

    Returns:
        Number of rows written
    """
    df = match_records_dataframe(records)
    df.sort_values(["recipe_id", "original_text"], inplace=True, kind="stable")
    df.to_csv(output_file, index=False)

    logger.info(f"Wrote {len(df)} match records to {output_file}")
    return len(df)


def unmatched_frequency(results: Iterable[AnalysisResult]) -> List[Tuple[str, int]]:
    """Count how many recipes left each ingredient text unmatched.

    Texts are compared after trimming and lowercasing. The most frequent
    come first; ties keep first-seen order.
    """
    counts = Counter()
    for result in results:
        seen = dict.fromkeys(text.strip().lower() for text in result.unmatched_ingredients)
        for text in seen:
            counts[text] += 1
    return counts.most_common()
