"""Recoverable errors reported back to the session that caused them."""

from typing import Any, Dict


class GridError(Exception):
    reason = 'Claim rejected'

    def __init__(self, reason: str = None):
        self.reason = reason or self.reason
        super().__init__(self.reason)

    def to_dict(self) -> Dict[str, Any]:
        return {'reason': self.reason}


class EngineRejection(GridError):
    """Refused by the claim engine; the reply also carries remainingMs."""

    remaining_ms = 0

    def to_dict(self) -> Dict[str, Any]:
        return {'reason': self.reason, 'remainingMs': self.remaining_ms}


class InvalidCoordinate(EngineRejection):
    reason = 'Cell out of bounds'


class OnCooldown(EngineRejection):
    reason = 'cooldown'

    def __init__(self, remaining_ms: int):
        super().__init__()
        self.remaining_ms = remaining_ms


class AlreadyOwned(EngineRejection):
    reason = 'You already own this cell'


class InvalidPayload(GridError):
    reason = 'Invalid payload'


class RateLimited(GridError):
    reason = 'rate-limited'


class UnknownSession(GridError):
    reason = 'Unknown user'


class ConnectionRefused(GridError):
    # Raised before a session exists, so it never reaches a claim handler
    reason = 'Too many connections from this address'
