"""Readiness-driven TCP server that hands each request to a worker pool."""

from __future__ import annotations

import os
import selectors
import sys
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from highload.sockets import TcpClient, TcpServer
from highload.thread_pool import ThreadPool

BUFFER_SIZE = 4096
TIMEOUT = 5.0
_POLL_INTERVAL = 1.0

MessageHandler = Callable[[str], str]


@dataclass
class _ClientInfo:
    last_activity: float
    tcp: TcpClient


class EpollServer:
    """Accepts connections, reads requests and answers them on a thread pool.

    Idle clients are dropped after ``timeout`` seconds. After :meth:`shutdown`
    no new connections are accepted and :meth:`run` returns once the last
    client has gone.
    """

    def __init__(
        self,
        port: int,
        max_events: int = 64,
        timeout: float = TIMEOUT,
        num_threads: Optional[int] = None,
    ) -> None:
        self._max_events = max_events
        self._timeout = timeout
        self._handler: Optional[MessageHandler] = None
        self._clients: Dict[int, _ClientInfo] = {}
        self._lock = threading.RLock()
        self._stop_requested = False

        self._server = TcpServer()
        if not (self._server.bind(port) and self._server.listen()):
            self._server.close()
            raise RuntimeError("Failed to bind/listen server socket")

        self._server_fd = self._server.fileno()
        os.set_blocking(self._server_fd, False)
        self._selector = selectors.DefaultSelector()
        self._selector.register(self._server_fd, selectors.EVENT_READ)
        self._listening = True
        self._pool = ThreadPool(num_threads)

        print(f"EpollServer listening on {self._server.local_address()}", flush=True)

    def set_message_handler(self, handler: MessageHandler) -> None:
        """Set the function that turns a request into a response."""
        self._handler = handler

    def run(self) -> None:
        """Serve until shut down and no clients remain."""
        try:
            while True:
                if self._stop_requested and not self._clients:
                    break
                try:
                    ready = self._selector.select(_POLL_INTERVAL)
                except InterruptedError:
                    continue
                except (OSError, ValueError) as exc:
                    if not self._stop_requested:
                        print(f"epoll_wait error: {exc}", file=sys.stderr)
                    break

                with self._lock:
                    self.check_timeouts()
                    for key, _ in ready[: self._max_events]:
                        self._handle(key.fd)
        finally:
            self._close()

    def shutdown(self) -> None:
        """Stop accepting connections; running clients may finish."""
        with self._lock:
            self._stop_requested = True
            self._stop_listening()
            self._server.close()
        print("Server stopped accepting new connections.", flush=True)
        active = len(self._clients)
        if active:
            print(f"Active clients: {active}. Waiting for them to finish...", flush=True)

    def check_timeouts(self) -> None:
        """Drop every client idle for longer than the timeout."""
        with self._lock:
            now = time.monotonic()
            expired = [
                fd
                for fd, info in self._clients.items()
                if now - info.last_activity > self._timeout
            ]
            for fd in expired:
                print(
                    f"Client {fd} timed out (no activity for {self._timeout:g}s). Closing.",
                    flush=True,
                )
                self._remove_client(fd)

    def local_address(self) -> str:
        """Return ``ip:port`` of the listening socket."""
        return self._server.local_address()

    def _handle(self, fd: int) -> None:
        if self._listening and fd == self._server_fd:
            self._accept()
            return

        info = self._clients.get(fd)
        if info is None:
            return
        try:
            data = info.tcp.recv(BUFFER_SIZE - 1)
        except BlockingIOError:
            return
        except OSError:
            data = b""

        if not data:
            print(f"Client closed or error: {fd}", flush=True)
            self._remove_client(fd)
            return

        info.last_activity = time.monotonic()
        self._dispatch(info.tcp, data.decode("utf-8", errors="replace"))

    def _accept(self) -> None:
        client = self._server.accept()
        if client is None or client.fileno() == -1:
            return
        fd = client.fileno()
        os.set_blocking(fd, False)
        try:
            self._selector.register(fd, selectors.EVENT_READ)
        except (OSError, ValueError, KeyError):
            print("Failed to add client to epoll", file=sys.stderr)
            client.close()
            return
        self._clients[fd] = _ClientInfo(time.monotonic(), client)
        print(f"Client connected: {fd}", flush=True)

    def _dispatch(self, tcp: TcpClient, request: str) -> None:
        handler = self._handler
        if handler is None:
            return

        def task() -> None:
            try:
                tcp.send_string(handler(request))
            except Exception as exc:
                print(f"Error in worker thread: {exc}", file=sys.stderr)

        self._pool.enqueue(task)

    def _remove_client(self, fd: int) -> None:
        info = self._clients.pop(fd, None)
        try:
            self._selector.unregister(fd)
        except (KeyError, ValueError, OSError):
            pass
        if info is not None:
            info.tcp.close()

    def _stop_listening(self) -> None:
        if self._listening:
            try:
                self._selector.unregister(self._server_fd)
            except (KeyError, ValueError, OSError):
                pass
            self._listening = False
            self._server_fd = -1

    def _close(self) -> None:
        with self._lock:
            for fd in list(self._clients):
                self._remove_client(fd)
            self._stop_listening()
            self._server.close()
            self._selector.close()
        self._pool.shutdown()