import pandas as pd

from recipe_utils.ingredients.models import AnalysisResult, MatchRecord
from recipe_utils.ingredients.reporting import (
    MATCH_RECORD_COLUMNS,
    match_records_dataframe,
    unmatched_frequency,
    write_match_records_csv,
)


def make_records():
    return [
        MatchRecord(2, 21, 5, "salt", "salt", "exact"),
        MatchRecord(1, 12, 3, "3 tomatoes", "tomato", "alias", "tomato"),
        MatchRecord(1, 11, 1, "2 cups diced onion", "onion", "exact"),
    ]


def test_match_records_dataframe():
    df = match_records_dataframe(make_records())
    assert list(df.columns) == MATCH_RECORD_COLUMNS
    assert len(df) == 3


def test_match_records_dataframe_empty():
    df = match_records_dataframe([])
    assert list(df.columns) == MATCH_RECORD_COLUMNS
    assert df.empty


def test_write_match_records_csv(tmp_path):
    output_file = tmp_path / "matches.csv"
    assert write_match_records_csv(make_records(), str(output_file)) == 3

    df = pd.read_csv(output_file)
    assert list(df["original_text"]) == ["2 cups diced onion", "3 tomatoes", "salt"]
    assert df["matched_alias"].isna().tolist() == [True, False, True]


def test_unmatched_frequency():
    results = [
        AnalysisResult(1, [], ["1 Dragonfruit", "2 kumquats", "1 dragonfruit "]),
        AnalysisResult(2, [], ["2 kumquats"]),
        AnalysisResult(3, [], ["saffron"]),
    ]
    assert unmatched_frequency(results) == [
        ("2 kumquats", 2),
        ("1 dragonfruit", 1),
        ("saffron", 1),
    ]


def test_unmatched_frequency_empty():
    assert unmatched_frequency([]) == []
