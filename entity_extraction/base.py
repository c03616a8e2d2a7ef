"""
Base types for entity extraction
"""
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional, Callable, Union
from enum import Enum

import regex as re


class EntityKind(Enum):
    """Fixed categories recognized by the extractor"""
    EMAIL = "email"
    URL = "url"
    MENTION = "mention"
    HASHTAG = "hashtag"
    PHONE = "phone"
    DATE = "date"
    PRICE = "price"

    @property
    def field_name(self) -> str:
        """Name of the ExtractionResult field holding this kind"""
        return f"{self.value}s"


KindLike = Union[EntityKind, str]


def kind_key(kind: KindLike) -> str:
    """Normalize an EntityKind or kind name to its registry key"""
    if isinstance(kind, EntityKind):
        return kind.value
    key = str(kind).strip().lower()
    # Accept result field names ("emails") for the fixed kinds
    for entity_kind in EntityKind:
        if key == entity_kind.field_name:
            return entity_kind.value
    return key


@dataclass
class Candidate:
    """A matched substring and where it was found"""
    kind: str
    text: str
    start: int
    end: int
    pattern_name: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kind': self.kind,
            'text': self.text,
            'start': self.start,
            'end': self.end,
            'pattern_name': self.pattern_name,
        }


@dataclass
class ValidationResult:
    """Result of an acceptance check on a candidate"""
    is_valid: bool
    value: Optional[str] = None  # replaces the matched text when set
    error_message: Optional[str] = None


Validator = Callable[[Candidate], Union[ValidationResult, bool]]


@dataclass
class Pattern:
    """Represents a pattern definition for one entity kind"""
    kind: KindLike
    name: str
    regex: str
    flags: int = 0
    description: Optional[str] = None
    validator: Optional[Validator] = None
    examples: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Compile regex pattern"""
        self.kind = kind_key(self.kind)
        if not self.kind:
            raise ValueError("Pattern kind must be a non-empty name")
        try:
            self.compiled_regex = re.compile(self.regex, self.flags)
        except re.error as e:
            raise ValueError(f"Invalid regex pattern '{self.regex}': {e}")


@dataclass
class ExtractionResult:
    """Entities found in a text, one ordered list of unique strings per kind"""
    emails: List[str] = field(default_factory=list)
    urls: List[str] = field(default_factory=list)
    mentions: List[str] = field(default_factory=list)
    hashtags: List[str] = field(default_factory=list)
    phones: List[str] = field(default_factory=list)
    dates: List[str] = field(default_factory=list)
    prices: List[str] = field(default_factory=list)
    extra: Dict[str, List[str]] = field(default_factory=dict)

    @classmethod
    def from_values(cls, values: Dict[str, List[str]]) -> "ExtractionResult":
        """Build a result from a mapping of kind key to values"""
        result = cls()
        for key, items in values.items():
            result.set(key, items)
        return result

    def get(self, kind: KindLike) -> List[str]:
        key = kind_key(kind)
        try:
            return getattr(self, EntityKind(key).field_name)
        except ValueError:
            return self.extra.get(key, [])

    def set(self, kind: KindLike, values: List[str]):
        key = kind_key(kind)
        try:
            setattr(self, EntityKind(key).field_name, list(values))
        except ValueError:
            self.extra[key] = list(values)

    def __getitem__(self, kind: KindLike) -> List[str]:
        return self.get(kind)

    @property
    def total(self) -> int:
        """Number of unique entities across all kinds"""
        return sum(len(self.get(kind)) for kind in EntityKind) + sum(
            len(values) for values in self.extra.values()
        )

    @property
    def is_empty(self) -> bool:
        return self.total == 0

    def to_dict(self) -> Dict[str, List[str]]:
        data = {kind.field_name: list(self.get(kind)) for kind in EntityKind}
        for key, values in self.extra.items():
            data[key] = list(values)
        return data
