from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from config import Config

# Ping cadence matches what the browser client expects
socketio = SocketIO(async_mode=None, ping_interval=10, ping_timeout=5)


def _origins(config):
    raw = config.get('CORS_ORIGINS') or '*'
    if raw == '*':
        return '*'
    return [o.strip() for o in raw.split(',') if o.strip()]


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = _origins(flask_app.config)
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Service objects live for the lifetime of the app and are shared by
    # every socket handler through app.extensions
    from claimgrid.coordinator import SessionCoordinator
    from claimgrid.services import ConnectionAdmission, GridEngine, IdentityRegistry, RateLimiter
    from claimgrid.socketio_events import SocketIOTransport, register_socketio_handlers

    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    coordinator = SessionCoordinator(
        transport=SocketIOTransport(namespace),
        grid=GridEngine(
            rows=flask_app.config['GRID_ROWS'],
            cols=flask_app.config['GRID_COLS'],
            cooldown_ms=flask_app.config['COOLDOWN_MS'],
        ),
        identities=IdentityRegistry(
            max_attempts=flask_app.config['NAME_ATTEMPTS'],
            release_names=flask_app.config['RELEASE_NAMES_ON_DISCONNECT'],
        ),
        rate_limiter=RateLimiter(
            window_ms=flask_app.config['RATE_LIMIT_WINDOW_MS'],
            max_per_window=flask_app.config['RATE_LIMIT_MAX'],
        ),
        admission=ConnectionAdmission(flask_app.config['MAX_CONNECTIONS_PER_ADDRESS']),
    )
    flask_app.extensions['claimgrid'] = coordinator

    from claimgrid.main import main
    flask_app.register_blueprint(main)

    register_socketio_handlers(namespace)

    @click.command('grid-config')
    def grid_config_command():
        """Prints the effective grid and limiter settings."""
        cfg = flask_app.config
        click.echo(f"grid: {cfg['GRID_ROWS']}x{cfg['GRID_COLS']} cooldown={cfg['COOLDOWN_MS']}ms")
        click.echo(f"rate limit: {cfg['RATE_LIMIT_MAX']} per {cfg['RATE_LIMIT_WINDOW_MS']}ms")
        click.echo(f"max connections per address: {cfg['MAX_CONNECTIONS_PER_ADDRESS']}")
        click.echo(f"release names on disconnect: {'yes' if cfg['RELEASE_NAMES_ON_DISCONNECT'] else 'no'}")

    flask_app.cli.add_command(grid_config_command)

    return flask_app
