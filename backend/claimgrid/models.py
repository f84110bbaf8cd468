from dataclasses import dataclass
from typing import Optional


def cell_key(row: int, col: int) -> str:
    return f"{row}:{col}"


@dataclass(frozen=True)
class Identity:
    name: str
    color: str

    def to_dict(self):
        return {
            'name': self.name,
            'color': self.color,
        }


@dataclass
class Cell:
    owner: str
    color: str
    claimed_at: float

    def to_dict(self):
        # claimed_at stays server-side
        return {
            'owner': self.owner,
            'color': self.color,
        }


@dataclass(frozen=True)
class ClaimResult:
    row: int
    col: int
    owner: str
    color: str
    previous_owner: Optional[str] = None

    @property
    def is_steal(self) -> bool:
        return self.previous_owner is not None

    def to_dict(self):
        return {
            'row': self.row,
            'col': self.col,
            'owner': self.owner,
            'color': self.color,
            'previousOwner': self.previous_owner,
        }


@dataclass(frozen=True)
class LeaderboardEntry:
    name: str
    color: str
    count: int

    def to_dict(self):
        return {
            'name': self.name,
            'color': self.color,
            'count': self.count,
        }
