"""Filter, sort and page contracts for the browsing engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from sentencias.db.repo.schemas import DIRECTIONS, RECORD_FIELDS, Cursor, DecisionRecord, Direction

# Defaults for UI paging
DEFAULT_PAGE_SIZE: int = 50
PAGE_SIZE_CHOICES = (10, 25, 50, 100)

DEFAULT_SORT_FIELD = "sala_num"
DEFAULT_SORT_DIRECTION: Direction = "desc"

EXACT_MATCH_FIELDS = ("anio", "sala_num")
PREFIX_FIELDS = ("expediente",)

FilterKind = Literal["year", "sala", "exp"]
FILTER_KINDS: tuple[str, ...] = ("year", "sala", "exp")
FILTER_LABELS = {"year": "Año", "sala": "Sala", "exp": "Expediente"}


@dataclass(slots=True, frozen=True)
class NoFilter:
    """No restriction: the whole collection."""


@dataclass(slots=True, frozen=True)
class ExactMatch:
    """Equality on the year (text) or the chamber number (integer)."""

    field: str
    value: str | int

    def __post_init__(self):
        if self.field not in EXACT_MATCH_FIELDS:
            raise ValueError(f"Exact match is not supported on field: {self.field}")
        if self.field == "sala_num" and not isinstance(self.value, int) and str(self.value).strip():
            raise ValueError("sala_num filter expects an integer")

    @classmethod
    def year(cls, text: str) -> ExactMatch:
        return cls("anio", text.strip())

    @classmethod
    def category(cls, text: str | int) -> ExactMatch:
        if isinstance(text, int):
            return cls("sala_num", text)
        raw = text.strip()
        if not raw:
            return cls("sala_num", "")
        try:
            return cls("sala_num", int(raw))
        except ValueError:
            raise ValueError(f"Sala must be a number, got {text!r}") from None


@dataclass(slots=True, frozen=True)
class PrefixRange:
    """String-prefix match on the case reference."""

    field: str = "expediente"
    prefix: str = ""

    def __post_init__(self):
        if self.field not in PREFIX_FIELDS:
            raise ValueError(f"Prefix match is not supported on field: {self.field}")

    @classmethod
    def case_reference(cls, prefix: str) -> PrefixRange:
        return cls("expediente", prefix)


FilterSpec = NoFilter | ExactMatch | PrefixRange


@dataclass(slots=True, frozen=True)
class FilterInputs:
    """
    Form state behind the filter bar.

    Holds one kind and one text, so two filter inputs can never be filled at once;
    switching kind always starts from an empty input.
    """

    kind: FilterKind | None = None
    text: str = ""

    def activate(self, kind: FilterKind | None) -> FilterInputs:
        if kind is not None and kind not in FILTER_KINDS:
            raise ValueError(f"Unknown filter kind: {kind}")
        return FilterInputs(kind=kind, text="")

    def with_text(self, text: str) -> FilterInputs:
        return FilterInputs(kind=self.kind, text=(text or "") if self.kind else "")

    @property
    def year_text(self) -> str:
        return self.text if self.kind == "year" else ""

    @property
    def sala_text(self) -> str:
        return self.text if self.kind == "sala" else ""

    @property
    def exp_text(self) -> str:
        return self.text if self.kind == "exp" else ""

    def active_label(self) -> tuple[str, str] | None:
        """(label, value) of the applied filter for the chip, or None."""
        if not self.kind or not self.text.strip():
            return None
        return FILTER_LABELS[self.kind], self.text.strip()

    def to_spec(self) -> FilterSpec:
        """May raise ValueError for a non-numeric Sala."""
        if not self.kind or not self.text.strip():
            return NoFilter()
        if self.kind == "year":
            return ExactMatch.year(self.text)
        if self.kind == "sala":
            return ExactMatch.category(self.text)
        return PrefixRange.case_reference(self.text.strip())


@dataclass(slots=True, frozen=True)
class SortSpec:
    field: str = DEFAULT_SORT_FIELD
    direction: Direction = DEFAULT_SORT_DIRECTION

    def __post_init__(self):
        if self.field not in RECORD_FIELDS:
            raise ValueError(f"Unknown sort field: {self.field}")
        if self.direction not in DIRECTIONS:
            raise ValueError(f"Unknown sort direction: {self.direction}")

    def toggled(self) -> SortSpec:
        return SortSpec(self.field, "asc" if self.direction == "desc" else "desc")


@dataclass(slots=True, frozen=True)
class Page:
    records: tuple[DecisionRecord, ...]
    next_cursor: Cursor | None = None

    @property
    def is_empty(self) -> bool:
        return not self.records
