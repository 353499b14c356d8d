"""Serve the build folder and rebuild it when sources change.

``serve`` only hands out files. ``watch`` additionally observes the document
and templates with watchdog, rebuilds after a short debounce and tells open
browser tabs to reload over a websocket speaking the ``sorg`` subprotocol.
"""

from __future__ import annotations

import functools
import http.server
import os
import threading
import typing as typ
from pathlib import Path

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer
from websockets.exceptions import ConnectionClosed
from websockets.sync.server import serve as serve_websocket

from sorg._constants import RELOAD_HOST, RELOAD_PORT, RELOAD_PROTOCOL
from sorg.errors import SorgError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from watchdog.events import FileSystemEvent
    from websockets.sync.server import Server, ServerConnection

DEFAULT_HTTP_HOST = "127.0.0.1"
DEFAULT_HTTP_PORT = 8000
DEBOUNCE_SECONDS = 0.1
RELOAD_MESSAGE = "reload"


def make_http_server(
    directory: Path, host: str = DEFAULT_HTTP_HOST, port: int = DEFAULT_HTTP_PORT
) -> http.server.ThreadingHTTPServer:
    """Return an HTTP server handing out files from ``directory``."""
    handler = functools.partial(
        http.server.SimpleHTTPRequestHandler, directory=str(directory)
    )
    return http.server.ThreadingHTTPServer((host, port), handler)


def serve_forever(server: http.server.ThreadingHTTPServer) -> None:
    """Serve until interrupted, then release the socket."""
    host, port = server.server_address[:2]
    print(f"Serving at http://{host}:{port}")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.shutdown()
        server.server_close()


class ReloadBroadcaster:
    """Websocket endpoint that tells every connected page to reload."""

    def __init__(self, host: str = RELOAD_HOST, port: int = RELOAD_PORT) -> None:
        self.host = host
        self.port = port
        self._clients: set[ServerConnection] = set()
        self._lock = threading.Lock()
        self._server: Server | None = None
        self._thread: threading.Thread | None = None

    def _handle(self, connection: ServerConnection) -> None:
        with self._lock:
            self._clients.add(connection)
        try:
            for _message in connection:
                pass
        except ConnectionClosed:
            pass
        finally:
            with self._lock:
                self._clients.discard(connection)

    def start(self) -> None:
        self._server = serve_websocket(
            self._handle,
            self.host,
            self.port,
            subprotocols=[RELOAD_PROTOCOL],
        )
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)
        self._thread.start()

    def broadcast(self) -> int:
        """Send the reload message to every client; return how many got it."""
        with self._lock:
            clients = list(self._clients)
        delivered = 0
        for connection in clients:
            try:
                connection.send(RELOAD_MESSAGE)
            except ConnectionClosed:
                continue
            delivered += 1
        return delivered

    def stop(self) -> None:
        if self._server is not None:
            self._server.shutdown()
        if self._thread is not None:
            self._thread.join()


class RebuildHandler(FileSystemEventHandler):
    """Debounce file events and run ``rebuild`` once they settle.

    Changes inside ``ignored`` (the build folder) never trigger a rebuild.
    """

    def __init__(
        self,
        rebuild: cabc.Callable[[], object],
        on_success: cabc.Callable[[], object],
        *,
        ignored: Path | None = None,
        delay: float = DEBOUNCE_SECONDS,
    ) -> None:
        super().__init__()
        self.rebuild = rebuild
        self.on_success = on_success
        self.ignored = ignored.resolve() if ignored is not None else None
        self.delay = delay
        self._timer: threading.Timer | None = None
        self._lock = threading.Lock()

    def _is_ignored(self, event: FileSystemEvent) -> bool:
        if self.ignored is None:
            return False
        source = Path(os.fsdecode(event.src_path)).resolve()
        return source.is_relative_to(self.ignored)

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.is_directory or self._is_ignored(event):
            return
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self.delay, self.run)
            self._timer.daemon = True
            self._timer.start()

    def run(self) -> None:
        """Rebuild now; failures are reported and watching continues."""
        try:
            self.rebuild()
        except (SorgError, OSError) as exc:
            print(f"Error occurred: {exc}")
            return
        self.on_success()


def watch(
    rebuild: cabc.Callable[[], object],
    paths: cabc.Iterable[Path],
    build_path: Path,
) -> None:
    """Serve ``build_path`` and rebuild on changes below ``paths``."""
    broadcaster = ReloadBroadcaster()
    broadcaster.start()
    handler = RebuildHandler(rebuild, broadcaster.broadcast, ignored=build_path)
    observer = Observer()
    for path in paths:
        if path.exists():
            observer.schedule(handler, str(path), recursive=path.is_dir())
    observer.start()
    try:
        serve_forever(make_http_server(build_path))
    finally:
        observer.stop()
        observer.join()
        broadcaster.stop()


__all__ = [
    "RebuildHandler",
    "ReloadBroadcaster",
    "make_http_server",
    "serve_forever",
    "watch",
]
