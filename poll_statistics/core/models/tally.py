"""
Tally records supplied to the statistics engine.

Conventions:
- Counts: aggregate vote counts, never individual ballots
- Option IDs: String type, as issued by the storage layer
- Demographic values: free strings from a configured category set, with
  ``UNSPECIFIED`` as the sentinel for respondents who declined to answer
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Union


UNSPECIFIED = "unspecified"


class Dimension(Enum):
    """
    Demographic dimensions recorded alongside each vote tally.

    Supported dimensions:
    - AGE_RANGE: Age bucket (e.g. "18-24", "65+")
    - GENDER: Gender bucket
    - COUNTRY: Country code
    """
    AGE_RANGE = "age_range"
    GENDER = "gender"
    COUNTRY = "country"

    @classmethod
    def from_value(cls, value: Union["Dimension", str]) -> "Dimension":
        """Accept either a Dimension or its string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown demographic dimension: {value}") from None


@dataclass
class OptionTally:
    """
    Vote total for a single poll option.

    Attributes:
        id: Option identifier
        label: Human-readable option text
        position: Display order within the poll
        vote_count: Number of votes cast for this option (>= 0)
    """

    id: str
    label: str
    position: int = 0
    vote_count: int = 0

    def __post_init__(self):
        if not self.id:
            raise ValueError("Option ID cannot be empty")
        self.id = str(self.id)
        self.position = int(self.position)
        self.vote_count = int(self.vote_count)
        if self.vote_count < 0:
            raise ValueError(f"vote_count cannot be negative, got {self.vote_count}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "position": self.position,
            "vote_count": self.vote_count,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'OptionTally':
        """Create an OptionTally from a storage row."""
        return cls(
            id=data["id"],
            label=data.get("label", ""),
            position=data.get("position", 0),
            vote_count=data.get("vote_count", 0),
        )


@dataclass
class DemographicTallyRow:
    """
    Aggregate count of votes for one option within one demographic cell.

    Attributes:
        option_id: Option the votes were cast for
        age_range: Age bucket of the voters
        gender: Gender bucket of the voters
        country: Country code of the voters
        count: Number of votes in this cell (>= 0)
    """

    option_id: str
    age_range: str = UNSPECIFIED
    gender: str = UNSPECIFIED
    country: str = UNSPECIFIED
    count: int = 0

    def __post_init__(self):
        if not self.option_id:
            raise ValueError("option_id cannot be empty")
        self.option_id = str(self.option_id)
        self.age_range = self.age_range or UNSPECIFIED
        self.gender = self.gender or UNSPECIFIED
        self.country = self.country or UNSPECIFIED
        self.count = int(self.count)
        if self.count < 0:
            raise ValueError(f"count cannot be negative, got {self.count}")

    def group_for(self, dimension: Union[Dimension, str]) -> str:
        """Return this row's group within ``dimension``."""
        return getattr(self, Dimension.from_value(dimension).value)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "option_id": self.option_id,
            "age_range": self.age_range,
            "gender": self.gender,
            "country": self.country,
            "count": self.count,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DemographicTallyRow':
        """Create a DemographicTallyRow from a storage row."""
        return cls(
            option_id=data["option_id"],
            age_range=data.get("age_range") or UNSPECIFIED,
            gender=data.get("gender") or UNSPECIFIED,
            country=data.get("country") or UNSPECIFIED,
            count=data.get("count", 0),
        )
