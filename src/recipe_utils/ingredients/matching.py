"""Matching raw ingredient lines against the canonical ingredient catalog."""

from difflib import SequenceMatcher
from typing import Iterable, List, Optional, Sequence, Tuple

from recipe_utils.ingredients.models import ALIAS, EXACT, CatalogIngredient, CatalogMatch
from recipe_utils.ingredients.normalization import normalize_ingredient_text

ACCEPTANCE_FLOOR = 0.3
EXACT_THRESHOLD = 0.95


def classify_match_type(score: float, exact_threshold: float = EXACT_THRESHOLD) -> str:
    """Return 'exact' for scores at or above ``exact_threshold``, else 'alias'."""
    return EXACT if score >= exact_threshold else ALIAS


class CatalogMatcher:
    """Scores free-text ingredient lines against an ingredient catalog.

    Each catalog entry is compared to the normalized text (and the raw
    lowercased text) with four strategies, strongest first:

    1. exact: the name equals the raw or normalized text (score 1.0). The
       first exact entry in catalog order wins outright.
    2. plural: the names differ only by a trailing "s" (score 0.9). The
       scan stops at the first such entry.
    3. contains: one of name and normalized text contains the other; the
       score is the shorter length over the longer one.
    4. partial: one of name and raw text contains the other, scored the
       same way.

    Containment scores only replace the running best when strictly higher
    and above the acceptance floor, so ties keep the entry seen first.

    Attributes:
        catalog: Catalog entries, scanned in the given order.
        acceptance_floor: A match must score above this to be returned.
        exact_threshold: Scores at or above this classify as 'exact'.
    """

    def __init__(
        self,
        catalog: Iterable[CatalogIngredient],
        acceptance_floor: float = ACCEPTANCE_FLOOR,
        exact_threshold: float = EXACT_THRESHOLD,
    ):
        self.catalog = list(catalog)
        self.acceptance_floor = acceptance_floor
        self.exact_threshold = exact_threshold
        # Lowercased names computed once per catalog snapshot; blank names
        # would contain-match every line and are never candidates.
        self._names = [
            (entry, entry.name.lower().strip())
            for entry in self.catalog
            if entry.name and entry.name.strip()
        ]

    def match(self, raw_text: Optional[str]) -> Optional[CatalogMatch]:
        """Find the best catalog entry for a raw ingredient line.

        Args:
            raw_text: The ingredient line as entered or scraped.

        Returns:
            The best CatalogMatch scoring above the acceptance floor, or None.
        """
        raw_lower = (raw_text or "").lower().strip()
        normalized = normalize_ingredient_text(raw_lower)

        for entry, name in self._names:
            if name == raw_lower or (normalized and name == normalized):
                return self._accept(CatalogMatch(entry, 1.0, "exact"))

        if not normalized:
            return None

        best: Optional[CatalogIngredient] = None
        best_score = 0.0
        best_strategy = ""

        for entry, name in self._names:
            is_plural = normalized.endswith("s") and name == normalized[:-1]
            is_singular = name.endswith("s") and normalized == name[:-1]
            if is_plural or is_singular:
                return self._accept(CatalogMatch(entry, 0.9, "plural"))

            for strategy, score in self._containment_scores(name, normalized, raw_lower):
                if score > best_score and score > self.acceptance_floor:
                    best, best_score, best_strategy = entry, score, strategy

        if best is not None and best_score > self.acceptance_floor:
            return CatalogMatch(best, best_score, best_strategy)
        return None

    def _accept(self, match: CatalogMatch) -> Optional[CatalogMatch]:
        # Short-circuit hits end the scan, so one at or below the floor
        # means no match at all.
        return match if match.score > self.acceptance_floor else None

    @staticmethod
    def _containment_scores(
        name: str, normalized: str, raw_lower: str
    ) -> List[Tuple[str, float]]:
        scores = []
        if name in normalized:
            scores.append(("contains", len(name) / len(normalized)))
        if normalized in name:
            scores.append(("contains", len(normalized) / len(name)))
        if name in raw_lower or raw_lower in name:
            scores.append(
                ("partial", min(len(name), len(raw_lower)) / max(len(name), len(raw_lower)))
            )
        return scores

    def match_type(self, match: CatalogMatch) -> str:
        return classify_match_type(match.score, self.exact_threshold)


def match_ingredient(
    raw_text: Optional[str],
    catalog: Sequence[CatalogIngredient],
    acceptance_floor: float = ACCEPTANCE_FLOOR,
) -> Optional[CatalogMatch]:
    """Match one raw ingredient line against ``catalog``.

    Convenience wrapper around CatalogMatcher for a single lookup. Build a
    CatalogMatcher once when matching many lines against the same catalog.

    Examples:
        >>> catalog = [CatalogIngredient(1, "onion"), CatalogIngredient(2, "green onion")]
        >>> match_ingredient("diced yellow onions", catalog).score
        0.9
    """
    return CatalogMatcher(catalog, acceptance_floor=acceptance_floor).match(raw_text)


def suggest_matches(
    raw_text: Optional[str],
    catalog: Iterable[CatalogIngredient],
    limit: int = 10,
    threshold: float = 0.6,
) -> List[Tuple[CatalogIngredient, float]]:
    """Rank catalog entries that look like ``raw_text`` for human review.

    Similarity is the difflib ratio between the normalized text and each
    catalog name. Entries at or above ``threshold``, or where either string
    contains the other, are kept. Exact name equality sorts first, then
    similarity.

    Returns:
        Up to ``limit`` (entry, similarity) pairs, best first.
    """
    normalized = normalize_ingredient_text(raw_text or "")
    if not normalized:
        return []

    suggestions = []
    for entry in catalog:
        name = (entry.name or "").lower().strip()
        if not name:
            continue

        similarity = SequenceMatcher(None, normalized, name).ratio()
        contains_match = normalized in name or name in normalized

        if similarity >= threshold or contains_match:
            suggestions.append((entry, similarity, name == normalized))

    suggestions.sort(key=lambda x: (x[2], x[1]), reverse=True)
    return [(entry, similarity) for entry, similarity, _ in suggestions[:limit]]
