import logging

from claimgrid import create_app, socketio
from claimgrid.lifecycle import install_signal_handlers

app = create_app()

if __name__ == '__main__':
    logging.basicConfig(level=app.config['LOG_LEVEL'])
    install_signal_handlers(app, sleep=socketio.sleep)
    app.logger.info(f"Server running on port {app.config['PORT']}")
    socketio.run(app, host=app.config['HOST'], port=app.config['PORT'], allow_unsafe_werkzeug=True)
