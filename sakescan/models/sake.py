"""
Sake data models.

ScrapedSake is a transient record produced by extraction, MatchDecision is
the matcher's classification of one scraped record, CatalogEntry is the
projection of a persisted catalog row the matcher reads, and SakeRow is the
full row written on insert.

The wire format (request/response bodies) uses camelCase keys and omits
empty fields.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any, Dict, List, Optional

# snake_case attribute -> camelCase wire key
_WIRE_KEYS = {
    "name": "name",
    "name_japanese": "nameJapanese",
    "brewery": "brewery",
    "type": "type",
    "prefecture": "prefecture",
    "image_url": "imageUrl",
    "taste": "taste",
    "food_pairing": "foodPairing",
    "is_new": "isNew",
    "existing_id": "existingId",
}


def _clean(value: Any) -> Optional[str]:
    """Normalize optional wire strings: blank becomes None."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


@dataclass
class ScrapedSake:
    """A candidate catalog entry extracted from a scraped page. Never persisted directly."""

    name: str
    name_japanese: Optional[str] = None
    brewery: Optional[str] = None
    type: Optional[str] = None
    prefecture: Optional[str] = None
    image_url: Optional[str] = None
    taste: Optional[str] = None
    food_pairing: List[str] = field(default_factory=list)

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Sake name is required")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the camelCase wire format, omitting empty fields."""
        data = {}
        for key, value in asdict(self).items():
            if value is None or value == []:
                continue
            data[_WIRE_KEYS[key]] = value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScrapedSake":
        """Build from a wire dict. Raises ValueError when name is missing."""
        return cls(**_scraped_kwargs(data))


def _scraped_kwargs(data: Dict[str, Any]) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ValueError("Sake entry must be an object")
    pairing = data.get("foodPairing") or []
    if not isinstance(pairing, list):
        raise ValueError("foodPairing must be a list")
    return {
        "name": _clean(data.get("name")) or "",
        "name_japanese": _clean(data.get("nameJapanese")),
        "brewery": _clean(data.get("brewery")),
        "type": _clean(data.get("type")),
        "prefecture": _clean(data.get("prefecture")),
        "image_url": _clean(data.get("imageUrl")),
        "taste": _clean(data.get("taste")),
        "food_pairing": [str(item) for item in pairing],
    }


@dataclass
class MatchDecision(ScrapedSake):
    """
    A scraped record classified against the existing catalog.

    Exactly one of is_new or existing_id holds: new records carry no id,
    matched records always reference the catalog row they matched.
    """

    is_new: bool = True
    existing_id: Optional[str] = None

    def __post_init__(self):
        super().__post_init__()
        if self.is_new and self.existing_id:
            raise ValueError("A new sake cannot reference an existing catalog entry")
        if not self.is_new and not self.existing_id:
            raise ValueError("A matched sake requires existing_id")

    @classmethod
    def new(cls, sake: ScrapedSake) -> "MatchDecision":
        """Classify a scraped record as new, carrying every field through."""
        return cls(**_sake_fields(sake), is_new=True)

    @classmethod
    def matched(cls, sake: ScrapedSake, existing_id: str, keep_image: bool) -> "MatchDecision":
        """Classify a scraped record as matching an existing entry."""
        values = _sake_fields(sake)
        if not keep_image:
            values["image_url"] = None
        return cls(**values, is_new=False, existing_id=existing_id)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["isNew"] = self.is_new
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchDecision":
        kwargs = _scraped_kwargs(data)
        existing_id = _clean(data.get("existingId"))
        is_new = data.get("isNew")
        if is_new is None:
            is_new = existing_id is None
        return cls(**kwargs, is_new=bool(is_new), existing_id=existing_id)


def _sake_fields(sake: ScrapedSake) -> Dict[str, Any]:
    """Copy the ScrapedSake fields of a record (food_pairing list copied)."""
    values = {f.name: getattr(sake, f.name) for f in fields(ScrapedSake)}
    values["food_pairing"] = list(values["food_pairing"])
    return values


@dataclass(frozen=True)
class CatalogEntry:
    """Projection of a persisted catalog row used for matching."""

    id: str
    name: Optional[str] = None
    name_japanese: Optional[str] = None
    brewery: Optional[str] = None
    has_label_image: bool = False
    has_bottle_image: bool = False

    @property
    def has_image(self) -> bool:
        return self.has_label_image or self.has_bottle_image

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "CatalogEntry":
        """Build from a storage row with label/bottle image URL columns."""
        return cls(
            id=str(row["id"]),
            name=row.get("name"),
            name_japanese=row.get("name_japanese"),
            brewery=row.get("brewery"),
            has_label_image=bool(row.get("label_image_url")),
            has_bottle_image=bool(row.get("bottle_image_url")),
        )


@dataclass
class SakeRow:
    """Full catalog row as written on insert (column names match the table)."""

    name: str
    brewery: str = "Unknown"
    name_japanese: Optional[str] = None
    type: Optional[str] = None
    subtype: Optional[str] = None
    region: Optional[str] = None
    prefecture: Optional[str] = None
    description: Optional[str] = None
    rice_variety: Optional[str] = None
    polishing_ratio: Optional[float] = None
    alcohol_percentage: Optional[float] = None
    smv: Optional[float] = None
    acidity: Optional[float] = None
    label_image_url: Optional[str] = None
    bottle_image_url: Optional[str] = None
    average_rating: Optional[float] = None
    total_ratings: int = 0

    @classmethod
    def from_sake(cls, sake: ScrapedSake) -> "SakeRow":
        """Build an insert row from a scraped record, applying catalog defaults."""
        return cls(
            name=sake.name,
            name_japanese=sake.name_japanese,
            brewery=sake.brewery or "Unknown",
            type=sake.type,
            prefecture=sake.prefecture,
            label_image_url=sake.image_url,
        )

    def to_row(self) -> Dict[str, Any]:
        return asdict(self)

    def with_label_image(self, url: Optional[str]) -> "SakeRow":
        return replace(self, label_image_url=url)
