import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Grid shape and per-identity claim cooldown (sent to clients in `welcome`)
    GRID_ROWS = int(os.environ.get('GRID_ROWS', '40'))
    GRID_COLS = int(os.environ.get('GRID_COLS', '60'))
    COOLDOWN_MS = int(os.environ.get('COOLDOWN_MS', '3000'))
    # Server-internal limits, never sent over the wire
    RATE_LIMIT_WINDOW_MS = int(os.environ.get('RATE_LIMIT_WINDOW_MS', '1000'))
    RATE_LIMIT_MAX = int(os.environ.get('RATE_LIMIT_MAX', '20'))
    MAX_CONNECTIONS_PER_ADDRESS = int(os.environ.get('MAX_CONNECTIONS_PER_ADDRESS', '5'))
    # Random name draws before falling back to a numeric suffix
    NAME_ATTEMPTS = int(os.environ.get('NAME_ATTEMPTS', '50'))
    # 0 keeps every handed-out name reserved for the process lifetime
    RELEASE_NAMES_ON_DISCONNECT = os.environ.get('RELEASE_NAMES_ON_DISCONNECT', '0') == '1'
    # Exit with status 1 if a graceful shutdown takes longer than this
    SHUTDOWN_GRACE_SEC = float(os.environ.get('SHUTDOWN_GRACE_SEC', '5'))
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '3000'))
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    # Only enable behind a reverse proxy that sets X-Forwarded-For
    TRUST_FORWARDED_FOR = os.environ.get('TRUST_FORWARDED_FOR', '0') == '1'
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
