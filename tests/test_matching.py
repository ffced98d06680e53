import pytest

from recipe_utils.ingredients.matching import (
    CatalogMatcher,
    classify_match_type,
    match_ingredient,
    suggest_matches,
)
from recipe_utils.ingredients.models import CatalogIngredient


def make_catalog(*names):
    return [CatalogIngredient(id=i, name=name) for i, name in enumerate(names, start=1)]


@pytest.fixture
def onion_catalog():
    return make_catalog("onion", "green onion")


def test_plural_match_scores_point_nine(onion_catalog):
    match = match_ingredient("diced yellow onions", onion_catalog)
    assert match.ingredient.id == 1
    assert match.score == 0.9
    assert match.strategy == "plural"
    assert classify_match_type(match.score) == "alias"


def test_exact_match_on_raw_text(onion_catalog):
    match = match_ingredient("onion", onion_catalog)
    assert match.ingredient.id == 1
    assert match.score == 1.0
    assert classify_match_type(match.score) == "exact"


def test_exact_match_on_normalized_text(onion_catalog):
    match = match_ingredient("2 cups diced yellow onion", onion_catalog)
    assert match.ingredient.name == "onion"
    assert match.score == 1.0


def test_singular_catalog_name_matches_plural_entry():
    match = match_ingredient("1 tomato", make_catalog("tomatoes"))
    assert match.ingredient.name == "tomatoes"
    assert match.score == 0.9


def test_exact_match_beats_earlier_containment():
    """A later exact entry wins over an earlier containment candidate."""
    match = match_ingredient("1 tsp kosher salt", make_catalog("salt", "kosher salt"))
    assert match.ingredient.name == "kosher salt"
    assert match.score == 1.0
    assert match.strategy == "exact"


def test_first_exact_entry_wins():
    catalog = [CatalogIngredient(1, "Garlic"), CatalogIngredient(2, "garlic")]
    assert match_ingredient("garlic", catalog).ingredient.id == 1


def test_containment_scores_by_length_ratio():
    match = match_ingredient("2 tbsp extra virgin olive oil", make_catalog("olive oil"))
    assert match.strategy == "contains"
    assert match.score == pytest.approx(9 / 16)
    assert classify_match_type(match.score) == "alias"


def test_raw_partial_match_beats_weaker_containment():
    # Normalization drops "hot", so the raw text gives the better ratio.
    match = match_ingredient("2 tbsp hot sauce", make_catalog("hot sauce"))
    assert match.strategy == "partial"
    assert match.score == pytest.approx(9 / 16)


@pytest.mark.parametrize(
    "names, expected",
    [
        (("wine", "rice"), "wine"),
        (("rice", "wine"), "rice"),
    ],
)
def test_ties_keep_first_catalog_entry(names, expected):
    match = match_ingredient("rice wine", make_catalog(*names))
    assert match.score == pytest.approx(4 / 9)
    assert match.ingredient.name == expected


def test_acceptance_floor_is_exclusive():
    # "oil" covers 3 of 10 characters of "canola oil": 0.3 exactly is rejected.
    assert match_ingredient("canola oil", make_catalog("oil")) is None
    assert match_ingredient("sesame seed oil dressing mix", make_catalog("oil")) is None


def test_custom_acceptance_floor():
    catalog = make_catalog("olive oil")
    assert match_ingredient("extra virgin olive oil", catalog, acceptance_floor=0.6) is None
    assert match_ingredient("extra virgin olive oil", catalog, acceptance_floor=0.5)


@pytest.mark.parametrize(
    "text, floor",
    [("onions", 0.9), ("onions", 0.95), ("onion", 1.0)],
)
def test_acceptance_floor_applies_to_exact_and_plural(text, floor):
    assert match_ingredient(text, make_catalog("onion"), acceptance_floor=floor) is None


def test_plural_match_above_raised_floor():
    match = match_ingredient("onions", make_catalog("onion"), acceptance_floor=0.85)
    assert match.score == 0.9


@pytest.mark.parametrize("text", ["", None, "   ", "2 cups", "(optional)"])
def test_empty_normalized_text_never_matches(text):
    assert match_ingredient(text, make_catalog("onion", "salt", "cup")) is None


def test_empty_catalog():
    assert match_ingredient("onion", []) is None


def test_no_match(onion_catalog):
    assert match_ingredient("1 dragonfruit", onion_catalog) is None


def test_blank_catalog_names_are_skipped():
    catalog = [CatalogIngredient(1, ""), CatalogIngredient(2, "   ")]
    assert match_ingredient("salt", catalog) is None


@pytest.mark.parametrize(
    "score, expected",
    [(1.0, "exact"), (0.95, "exact"), (0.9499, "alias"), (0.9, "alias"), (0.31, "alias")],
)
def test_classify_match_type(score, expected):
    assert classify_match_type(score) == expected


def test_matcher_exact_threshold_override():
    matcher = CatalogMatcher(make_catalog("onion"), exact_threshold=0.9)
    match = matcher.match("onions")
    assert matcher.match_type(match) == "exact"


def test_matcher_is_reusable(onion_catalog):
    matcher = CatalogMatcher(onion_catalog)
    assert matcher.match("onion").score == 1.0
    assert matcher.match("1 dragonfruit") is None
    assert matcher.match("diced yellow onions").score == 0.9


def test_suggest_matches_ranks_exact_first():
    catalog = make_catalog("oil", "olive", "vinegar", "olive oil")
    suggestions = suggest_matches("2 tbsp olive oil", catalog)
    names = [entry.name for entry, _ in suggestions]
    assert names == ["olive oil", "olive", "oil"]
    assert suggestions[0][1] == 1.0


def test_suggest_matches_limit():
    catalog = make_catalog("oil", "olive", "olive oil")
    assert len(suggest_matches("olive oil", catalog, limit=2)) == 2


def test_suggest_matches_threshold_keeps_similar_names():
    suggestions = suggest_matches("tomatos", make_catalog("tomatoes", "garlic"))
    assert [entry.name for entry, _ in suggestions] == ["tomatoes"]


def test_suggest_matches_empty_query():
    assert suggest_matches("", make_catalog("onion")) == []
    assert suggest_matches("2 cups", make_catalog("onion")) == []
