import logging
import signal
import sys
import time

from claimgrid.coordinator import SHUTDOWN_MESSAGE


logger = logging.getLogger(__name__)


class GracefulShutdown:
    """Signal handler that drains the server.

    Tells every session the server is going away, closes their sockets
    and waits for the disconnects to land. Leaves the serve loop with
    status 0 once no session is left, or status 1 if some are still open
    when ``grace_sec`` runs out.
    """

    def __init__(self, coordinator, grace_sec: float = 5.0, sleep=time.sleep,
                 clock=time.monotonic, poll_sec: float = 0.1):
        self.coordinator = coordinator
        self.grace_sec = grace_sec
        self.poll_sec = poll_sec
        self._sleep = sleep
        self._clock = clock
        self._started = False

    def __call__(self, signum, frame=None):
        if self._started:
            return
        self._started = True
        try:
            name = signal.Signals(signum).name
        except ValueError:
            name = str(signum)
        logger.info(f"[shutdown] {name} received, shutting down...")
        deadline = self._clock() + self.grace_sec

        self.coordinator.shutdown(SHUTDOWN_MESSAGE)
        # give the notice one poll to flush before the sockets go away
        self._sleep(self.poll_sec)
        self.coordinator.close_all()
        while self.coordinator.active_sessions() and self._clock() < deadline:
            self._sleep(self.poll_sec)

        remaining = self.coordinator.active_sessions()
        if remaining:
            logger.warning(f"[shutdown] {remaining} sessions still open after {self.grace_sec}s, forcing exit")
            sys.exit(1)
        logger.info("[shutdown] server closed")
        sys.exit(0)


def install_signal_handlers(app, sleep=time.sleep) -> GracefulShutdown:
    handler = GracefulShutdown(app.extensions['claimgrid'], app.config.get('SHUTDOWN_GRACE_SEC', 5.0), sleep=sleep)
    signal.signal(signal.SIGTERM, handler)
    signal.signal(signal.SIGINT, handler)
    return handler
