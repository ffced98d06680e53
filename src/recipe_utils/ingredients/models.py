import dataclasses
from typing import Any, Dict, List, Optional

EXACT = "exact"
ALIAS = "alias"


@dataclasses.dataclass(frozen=True)
class RawIngredientLine:
    id: Any
    recipe_id: Any
    raw_text: Optional[str]
    amount: str = ""
    unit: str = ""

    @property
    def is_blank(self) -> bool:
        return not (self.raw_text or "").strip()


@dataclasses.dataclass(frozen=True)
class CatalogIngredient:
    id: Any
    name: str
    category_id: Optional[Any] = None


@dataclasses.dataclass(frozen=True)
class CatalogMatch:
    ingredient: CatalogIngredient
    score: float
    strategy: str  # 'exact', 'plural', 'contains', 'partial'


@dataclasses.dataclass
class MatchRecord:
    recipe_id: Any
    recipe_ingredient_id: Any
    ingredient_id: Optional[Any]
    original_text: str
    matched_term: str
    match_type: str  # 'exact' or 'alias'
    matched_alias: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)


@dataclasses.dataclass
class AnalysisResult:
    recipe_id: Any
    match_records: List[MatchRecord]
    unmatched_ingredients: List[str]

    @property
    def matched_count(self) -> int:
        return len(self.match_records)

    @property
    def unmatched_count(self) -> int:
        return len(self.unmatched_ingredients)


@dataclasses.dataclass(frozen=True)
class RecipeSummary:
    id: Any
    title: str


@dataclasses.dataclass
class ParsedIngredient:
    amount: str
    unit: str
    name: str
    original: str
