"""
Blog server lifecycle

Runs the Blog API under uvicorn with an explicit start/stop sequence:
the database connects before the listener accepts connections, and is
released before the listener closes. Used by the CLI entry point and by
tests that need a real socket.
"""
import logging
import signal
import sys
import threading
import time
from typing import Optional

import uvicorn

from apps.blog.main import create_app
from apps.shared.config import DATABASE_URL, HOST, LOG_LEVEL, PORT
from apps.shared.database import Database

logger = logging.getLogger(__name__)

STARTUP_TIMEOUT = 10.0


class BlogServer:
    """Blog API listener in a background thread. Can be started and stopped repeatedly."""

    def __init__(self, database: Optional[Database] = None, host: str = HOST):
        self.database = database or Database()
        self.host = host
        self.port: Optional[int] = None
        self._server: Optional[uvicorn.Server] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self, database_url: str = DATABASE_URL, port: int = PORT) -> None:
        """
        Connect the database, then start listening.

        A database connection error propagates before any socket is opened.
        Use port=0 to bind an ephemeral port (see self.port).
        """
        if self.is_running:
            raise RuntimeError("Server already running")

        self.database.start(database_url)

        config = uvicorn.Config(
            create_app(self.database),
            host=self.host,
            port=port,
            log_config=None,
            lifespan="on",
        )
        server = uvicorn.Server(config)
        thread = threading.Thread(target=server.run, name="blog-server", daemon=True)
        thread.start()

        deadline = time.monotonic() + STARTUP_TIMEOUT
        while not server.started:
            if not thread.is_alive() or time.monotonic() > deadline:
                server.should_exit = True
                thread.join(timeout=STARTUP_TIMEOUT)
                self.database.stop()
                raise RuntimeError(f"Blog server failed to listen on {self.host}:{port}")
            time.sleep(0.05)

        self._server = server
        self._thread = thread
        self.port = server.servers[0].sockets[0].getsockname()[1]
        logger.info(f"Your app is listening on port {self.port}")

    def stop(self) -> None:
        """
        Release the database, then close the listener.

        Errors from releasing the database are raised after the listener
        has been shut down.
        """
        logger.info("Closing server")
        try:
            self.database.stop()
        finally:
            if self._server is not None:
                self._server.should_exit = True
                self._thread.join()
            self._server = None
            self._thread = None
            self.port = None


def main() -> None:
    """Run the Blog API in the foreground until interrupted."""
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # SIGTERM (docker stop) shuts down like Ctrl-C
    signal.signal(signal.SIGTERM, lambda signum, frame: sys.exit(0))

    server = BlogServer()
    try:
        server.start(DATABASE_URL, PORT)
    except Exception as e:
        logger.error(f"Startup failed: {type(e).__name__}: {e}", exc_info=True)
        sys.exit(1)

    try:
        while server.is_running:
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass
    finally:
        server.stop()


if __name__ == "__main__":
    main()
