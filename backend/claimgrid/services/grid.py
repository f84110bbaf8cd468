import math
import threading
import time
from typing import Callable, Dict, List, Optional

from claimgrid.errors import AlreadyOwned, InvalidCoordinate, OnCooldown
from claimgrid.models import Cell, ClaimResult, Identity, LeaderboardEntry, cell_key


DEFAULT_ROWS = 40
DEFAULT_COLS = 60
DEFAULT_COOLDOWN_MS = 3000
LEADERBOARD_SIZE = 10
NEUTRAL_COLOR = 'hsl(0, 0%, 50%)'

NOT_A_NUMBER = 'Row and col must be numbers'
NOT_AN_INTEGER = 'Row and col must be integers'
OUT_OF_BOUNDS = 'Cell out of bounds'


def _now_ms() -> float:
    return time.time() * 1000


class GridEngine:
    """Authoritative cell ownership, cooldowns and scoreboard.

    Cells, cooldowns and the scoreboard are only touched while holding
    ``self._lock``, so a claim's checks and its writes form one critical
    section and readers never see a decrement without the matching
    increment.
    """

    def __init__(self, rows: int = DEFAULT_ROWS, cols: int = DEFAULT_COLS,
                 cooldown_ms: int = DEFAULT_COOLDOWN_MS,
                 clock: Callable[[], float] = _now_ms):
        self.rows = rows
        self.cols = cols
        self.cooldown_ms = cooldown_ms
        self._clock = clock
        self._lock = threading.Lock()
        self._cells: Dict[str, Cell] = {}
        self._cooldowns: Dict[str, float] = {}
        # Insertion order is the tie-breaker for the leaderboard
        self._scoreboard: Dict[str, int] = {}

    def validate(self, row, col) -> None:
        for value in (row, col):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidCoordinate(NOT_A_NUMBER)
            if not isinstance(value, int):
                raise InvalidCoordinate(NOT_AN_INTEGER)
        if row < 0 or row >= self.rows or col < 0 or col >= self.cols:
            raise InvalidCoordinate(OUT_OF_BOUNDS)

    def remaining_cooldown(self, name: str, now: float) -> int:
        last_claim = self._cooldowns.get(name)
        if last_claim is None:
            return 0
        elapsed = now - last_claim
        if elapsed < self.cooldown_ms:
            return max(1, int(math.ceil(self.cooldown_ms - elapsed)))
        return 0

    def claim(self, row, col, identity: Identity, now: Optional[float] = None) -> ClaimResult:
        """Validate and apply a claim of ``(row, col)`` by ``identity``.

        Raises InvalidCoordinate, OnCooldown or AlreadyOwned without
        touching any state. On success returns the applied change along
        with the name of the owner it was taken from, if any.
        """
        self.validate(row, col)
        with self._lock:
            if now is None:
                now = self._clock()
            remaining = self.remaining_cooldown(identity.name, now)
            if remaining:
                raise OnCooldown(remaining)

            key = cell_key(row, col)
            existing = self._cells.get(key)
            if existing is not None and existing.owner == identity.name:
                raise AlreadyOwned()

            previous_owner = None
            if existing is not None:
                previous_owner = existing.owner
                prev_score = self._scoreboard.get(previous_owner, 0)
                if prev_score <= 1:
                    self._scoreboard.pop(previous_owner, None)
                else:
                    self._scoreboard[previous_owner] = prev_score - 1
                existing.owner = identity.name
                existing.color = identity.color
                existing.claimed_at = now
            else:
                self._cells[key] = Cell(owner=identity.name, color=identity.color, claimed_at=now)

            self._scoreboard[identity.name] = self._scoreboard.get(identity.name, 0) + 1
            self._cooldowns[identity.name] = now

        return ClaimResult(row=row, col=col, owner=identity.name,
                           color=identity.color, previous_owner=previous_owner)

    def get_state(self) -> Dict[str, Dict[str, str]]:
        with self._lock:
            return {key: cell.to_dict() for key, cell in self._cells.items()}

    def get_leaderboard(self, limit: int = LEADERBOARD_SIZE) -> List[Dict]:
        with self._lock:
            colors: Dict[str, str] = {}
            for cell in self._cells.values():
                colors.setdefault(cell.owner, cell.color)
            entries = [
                LeaderboardEntry(name=name, color=colors.get(name, NEUTRAL_COLOR), count=count)
                for name, count in self._scoreboard.items()
            ]
        # sorted() is stable, so equal counts keep scoreboard order
        entries = sorted(entries, key=lambda e: e.count, reverse=True)
        return [e.to_dict() for e in entries[:limit]]

    def get_config(self) -> Dict[str, int]:
        return {'rows': self.rows, 'cols': self.cols, 'cooldownMs': self.cooldown_ms}

    def scoreboard(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._scoreboard)

    def owned_cells(self) -> int:
        with self._lock:
            return len(self._cells)
