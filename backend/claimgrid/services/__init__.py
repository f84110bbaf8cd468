"""Grid domain services: claim engine, identities and limits.

This package holds the authoritative in-memory state of the game. Each
service owns its tables and its own lock, and none of them know about
Flask or Socket.IO; socket handlers reach them through the session
coordinator.
"""

from .grid import GridEngine
from .identity import IdentityRegistry
from .limits import ConnectionAdmission, RateLimiter

__all__ = ['GridEngine', 'IdentityRegistry', 'ConnectionAdmission', 'RateLimiter']
