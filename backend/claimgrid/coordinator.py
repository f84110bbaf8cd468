import enum
import logging
import threading
from typing import Any, Dict, Optional

from claimgrid.errors import ConnectionRefused, GridError, RateLimited, UnknownSession
from claimgrid.schemas import parse_claim
from claimgrid.services import ConnectionAdmission, GridEngine, IdentityRegistry, RateLimiter


logger = logging.getLogger(__name__)

SHUTDOWN_MESSAGE = 'Server is restarting, please wait...'


class SessionState(enum.Enum):
    CONNECTING = 'connecting'
    ACTIVE = 'active'
    DISCONNECTED = 'disconnected'


class Session:
    def __init__(self, sid: str, address: str):
        self.sid = sid
        self.address = address
        self.state = SessionState.CONNECTING
        self.identity = None


class SessionCoordinator:
    """Drives connect / claim / disconnect for every session.

    Every event runs under one lock, and broadcasts are published before
    that lock is released, so all sessions see accepted claims in the
    order the engine applied them.

    ``transport`` needs ``send(event, data, to)`` for a single session,
    ``broadcast(event, data, skip=None)`` for all of them (optionally
    minus one) and ``close(sid)`` to drop a session from the server side.
    """

    def __init__(self, transport, grid: GridEngine, identities: IdentityRegistry,
                 rate_limiter: RateLimiter, admission: ConnectionAdmission):
        self.transport = transport
        self.grid = grid
        self.identities = identities
        self.rate_limiter = rate_limiter
        self.admission = admission
        self._lock = threading.RLock()
        self._sessions: Dict[str, Session] = {}

    def session(self, sid: str) -> Optional[Session]:
        return self._sessions.get(sid)

    def active_sessions(self) -> int:
        with self._lock:
            return len(self._sessions)

    def snapshot(self) -> Dict[str, Any]:
        return {
            'gridState': self.grid.get_state(),
            'leaderboard': self.grid.get_leaderboard(),
            'onlineCount': self.identities.online_count(),
            'config': self.grid.get_config(),
        }

    def connect(self, sid: str, address: str) -> Session:
        with self._lock:
            if not self.admission.try_admit(address):
                logger.warning(f"[refused] address={address} active={self.admission.active(address)}")
                raise ConnectionRefused()
            session = Session(sid, address)
            self._sessions[sid] = session
            session.identity = self.identities.assign(sid)
            online = self.identities.online_count()
            logger.info(f"[connect] {session.identity.name} connected ({online} online)")

            welcome = {'user': session.identity.to_dict()}
            welcome.update(self.snapshot())
            self.transport.send('welcome', welcome, to=sid)
            self.transport.broadcast('user-joined', {
                'name': session.identity.name,
                'onlineCount': online,
            }, skip=sid)
            session.state = SessionState.ACTIVE
            return session

    def claim(self, sid: str, payload) -> bool:
        """Handle one `claim-cell` message. Returns True if it was applied."""
        with self._lock:
            try:
                # Only live sessions get a rate window
                session = self._sessions.get(sid)
                if session is None or session.state is not SessionState.ACTIVE or session.identity is None:
                    raise UnknownSession()
                if not self.rate_limiter.allow(sid):
                    logger.info(f"[rate-limit] {session.identity.name} sid={sid}")
                    raise RateLimited()
                request = parse_claim(payload)
                result = self.grid.claim(request.row, request.col, session.identity)
            except GridError as exc:
                logger.debug(f"[claim-rejected] sid={sid} reason={exc.reason}")
                self.transport.send('claim-rejected', exc.to_dict(), to=sid)
                return False

            if result.is_steal:
                logger.debug(f"[steal] {result.owner} took {result.row}:{result.col} from {result.previous_owner}")
            else:
                logger.debug(f"[claim] {result.owner} took {result.row}:{result.col}")
            self.transport.broadcast('cell-claimed', result.to_dict())
            self.transport.broadcast('leaderboard-update', self.grid.get_leaderboard())
            return True

    def disconnect(self, sid: str) -> None:
        with self._lock:
            session = self._sessions.pop(sid, None)
            if session is None:
                return
            session.state = SessionState.DISCONNECTED
            identity = self.identities.release(sid)
            self.rate_limiter.cleanup(sid)
            self.admission.release(session.address)
            if identity is None:
                return
            online = self.identities.online_count()
            logger.info(f"[disconnect] {identity.name} disconnected ({online} online)")
            self.transport.broadcast('user-left', {
                'name': identity.name,
                'onlineCount': online,
            }, skip=sid)

    def shutdown(self, message: str = SHUTDOWN_MESSAGE) -> None:
        with self._lock:
            logger.info(f"[shutdown] notifying {len(self._sessions)} sessions")
            self.transport.broadcast('server-shutdown', {'message': message})

    def close_all(self) -> None:
        """Ask the transport to drop every session; disconnects arrive as usual."""
        with self._lock:
            sids = list(self._sessions)
        for sid in sids:
            self.transport.close(sid)
