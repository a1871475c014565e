"""
Process entry point for TaskFlow.

Runs the application on Werkzeug's threaded WSGI server (one thread per
request) and owns the shutdown sequence: on SIGTERM or SIGINT the server
stops accepting connections, waits for in-flight requests, closes the
database pool and the process exits with status 0. Startup faults such
as an unreachable database or a port that cannot be bound propagate and
end the process with a non-zero status.
"""

from __future__ import annotations

import logging
import signal
import sys
import threading

from flask import Flask
from werkzeug.serving import make_server

from taskflow import create_app
from taskflow.repository import get_repository

logger = logging.getLogger(__name__)

SHUTDOWN_SIGNALS = (signal.SIGTERM, signal.SIGINT)


def serve(app: Flask | None = None) -> int:
    """
    Serve *app* until a shutdown signal arrives.

    Args:
        app: Application to serve. Built from the environment when None.

    Returns:
        Process exit status (0 after a graceful shutdown).
    """
    if app is None:
        app = create_app()

    host = app.config["HOST"]
    port = app.config["PORT"]
    server = make_server(host, port, app, threaded=True)
    # Request threads are joined by server_close()
    server.daemon_threads = False
    server.block_on_close = True

    def _request_shutdown(signum, _frame) -> None:
        logger.info("%s received. Shutting down gracefully...", signal.Signals(signum).name)
        # shutdown() blocks until serve_forever() returns, which runs on this thread
        threading.Thread(target=server.shutdown, daemon=True).start()

    previous_handlers = {sig: signal.signal(sig, _request_shutdown) for sig in SHUTDOWN_SIGNALS}

    logger.info("TaskFlow backend server running on port %s", port)
    logger.info("Health check: http://localhost:%s/health", port)
    logger.info("API base URL: http://localhost:%s/api", port)

    try:
        server.serve_forever()
    finally:
        server.server_close()
        with app.app_context():
            get_repository().dispose()
        for sig, handler in previous_handlers.items():
            signal.signal(sig, handler)

    return 0


def main() -> None:
    """Console script entry point."""
    sys.exit(serve())
