"""Response types for Formdesk SDK."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union, overload

from formdesk.errors import FormdeskError

COLUMNS: Tuple[str, ...] = (
    "id",
    "name",
    "user_id",
    "resourceType",
    "created",
    "lastModified",
    "location",
)


@dataclass(frozen=True)
class FormRecord:
    """One form as listed by the API.

    Field names follow the API so that records line up with the table
    columns. Values are kept exactly as the server sent them.
    """

    id: Any = None
    name: Optional[str] = None
    user_id: Any = None
    resourceType: Optional[str] = None
    created: Optional[str] = None
    lastModified: Optional[str] = None
    location: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_response(cls, data: Dict[str, Any]) -> "FormRecord":
        """Parse one element of the forms array into a FormRecord."""
        meta = data.get("meta") if isinstance(data.get("meta"), dict) else {}
        return cls(
            id=data.get("id"),
            name=data.get("name"),
            user_id=data.get("user_id"),
            resourceType=meta.get("resourceType"),
            created=meta.get("created"),
            lastModified=meta.get("lastModified"),
            location=meta.get("location"),
            raw=data,
        )

    def as_tuple(self) -> Tuple[Any, ...]:
        return tuple(getattr(self, name) for name in COLUMNS)


@dataclass(frozen=True)
class ResultSet:
    """Ordered table of forms, one row per element of the server's array."""

    records: Tuple[FormRecord, ...] = ()

    @classmethod
    def from_response(cls, data: Sequence[Dict[str, Any]]) -> "ResultSet":
        return cls(records=tuple(FormRecord.from_response(item) for item in data))

    @property
    def columns(self) -> Tuple[str, ...]:
        return COLUMNS

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[FormRecord]:
        return iter(self.records)

    @overload
    def __getitem__(self, index: int) -> FormRecord: ...

    @overload
    def __getitem__(self, index: slice) -> "ResultSet": ...

    def __getitem__(self, index: Union[int, slice]) -> Union[FormRecord, "ResultSet"]:
        if isinstance(index, slice):
            return ResultSet(records=self.records[index])
        return self.records[index]

    def column(self, name: str) -> List[Any]:
        """Values of one column, in row order."""
        if name not in COLUMNS:
            raise KeyError(name)
        return [getattr(record, name) for record in self.records]

    def to_rows(self) -> List[Tuple[Any, ...]]:
        return [record.as_tuple() for record in self.records]

    def to_dicts(self) -> List[Dict[str, Any]]:
        return [dict(zip(COLUMNS, record.as_tuple())) for record in self.records]


@dataclass(frozen=True)
class FetchResult:
    """Outcome of a fetch: either ``forms`` or ``error`` is set, never both."""

    forms: Optional[ResultSet] = None
    error: Optional[FormdeskError] = None

    def __post_init__(self) -> None:
        if (self.forms is None) == (self.error is None):
            raise ValueError("FetchResult needs exactly one of forms or error")

    @classmethod
    def success(cls, forms: ResultSet) -> "FetchResult":
        return cls(forms=forms)

    @classmethod
    def failure(cls, error: FormdeskError) -> "FetchResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> Optional[str]:
        """Diagnostic naming the failed stage, or None on success."""
        if self.error is None:
            return None
        return f"{self.error.stage} error: {self.error.message}"

    def unwrap(self) -> ResultSet:
        """Return the forms, or raise the carried error."""
        if self.error is not None:
            raise self.error
        assert self.forms is not None
        return self.forms
