"""Result dataclasses for normalization functions."""

from dataclasses import dataclass
from typing import NamedTuple

from bibfolio.models import Publication


@dataclass(frozen=True)
class NumericYear:
    """Year field holding a positive integer year."""

    year: int

    @property
    def label(self) -> str:
        return str(self.year)


@dataclass(frozen=True)
class YearLabel:
    """Year field holding a status such as "In review" or "Forthcoming"."""

    text: str

    @property
    def label(self) -> str:
        return self.text


YearValue = NumericYear | YearLabel


class YearResult(NamedTuple):
    """Flattened year pair exposed on publications.

    Attributes
    ----------
    year : int
        Numeric year, 0 when the field holds a status label.
    year_label : str
        Display text for the year.
    """

    year: int
    year_label: str

    @classmethod
    def from_value(cls, value: YearValue) -> "YearResult":
        """Flatten a tagged year value."""
        if isinstance(value, NumericYear):
            return cls(value.year, value.label)
        return cls(0, value.label)


@dataclass(frozen=True)
class OptionalFields:
    """Optional bibliographic fields of a publication.

    Every attribute is None when the entry has no usable value.
    """

    journal: str | None
    conference: str | None
    volume: str | None
    issue: str | None
    pages: str | None
    doi: str | None
    url: str | None
    code: str | None
    abstract: str | None
    description: str | None
    preview: str | None
    selected: bool


class NormalizationBatch(NamedTuple):
    """Publications from a batch of entries plus the flagged-entry count.

    Attributes
    ----------
    publications : list[Publication]
        One publication per entry, in source order.
    flagged_entries : int
        Number of entries that raised at least one normalization flag.
    """

    publications: list[Publication]
    flagged_entries: int
