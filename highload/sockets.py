"""Thin TCP socket wrappers used by the client and the server."""

from __future__ import annotations

import socket
import sys
from typing import Optional


class SocketClosedError(OSError):
    """Raised when an operation is attempted on a closed socket."""


class Socket:
    """Owns a socket and closes it exactly once."""

    def __init__(self, sock: Optional[socket.socket] = None) -> None:
        self._sock = sock

    def _require(self) -> socket.socket:
        if self._sock is None:
            raise SocketClosedError("Socket is not valid")
        return self._sock

    def fileno(self) -> int:
        """Return the descriptor, or -1 once closed."""
        return -1 if self._sock is None else self._sock.fileno()

    def close(self) -> None:
        """Close the socket; further calls do nothing."""
        if self._sock is not None:
            self._sock.close()
            self._sock = None
            print("Connection closed", flush=True)

    def send(self, data: bytes) -> int:
        """Send once and return the number of bytes written."""
        return self._require().send(data)

    def recv(self, size: int) -> bytes:
        """Receive up to ``size`` bytes; empty when the peer has closed."""
        return self._require().recv(size)

    def __enter__(self) -> "Socket":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


class TcpClient(Socket):
    """A TCP stream socket, freshly created or wrapping an accepted one."""

    def __init__(self, sock: Optional[socket.socket] = None) -> None:
        if sock is None:
            sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM, socket.IPPROTO_TCP)
            print("Client socket created", flush=True)
        super().__init__(sock)

    def connect(self, ip: str, port: int) -> bool:
        """Connect to ``ip:port``; return whether it succeeded."""
        sock = self._require()
        try:
            sock.connect((ip, port))
            connected = True
        except OSError:
            connected = False
        print(f"Client socket connected to {ip}:{port}", flush=True)
        return connected

    def send_string(self, text: str) -> int:
        """Send ``text`` as UTF-8 and return the number of bytes sent."""
        print(f"Send: {text}", flush=True)
        return self.send(text.encode("utf-8"))

    def receive_string(self, max_len: int = 1024) -> str:
        """Receive up to ``max_len`` bytes as text; empty on close or error."""
        if max_len == 0:
            return ""
        try:
            data = self.recv(max_len)
        except OSError as exc:
            print(exc, flush=True)
            return ""
        if not data:
            print("Connection closed by peer", flush=True)
            return ""
        text = data.decode("utf-8", errors="replace")
        print(f"Receive: {text}", flush=True)
        return text


class TcpServer(Socket):
    """A listening TCP socket with address reuse enabled."""

    def __init__(self) -> None:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM, socket.IPPROTO_TCP)
        print("Server socket created", flush=True)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        except OSError:
            print("Warning: setsockopt(SO_REUSEADDR) failed", file=sys.stderr)
        super().__init__(sock)

    def bind(self, port: int) -> bool:
        """Bind to ``port`` on all interfaces; return whether it succeeded."""
        try:
            self._require().bind(("0.0.0.0", port))
        except OSError as exc:
            print(f"Bind failed: {exc.strerror or exc}", file=sys.stderr)
            return False
        print(f"Server socket bound to port {port}", flush=True)
        return True

    def listen(self, backlog: int = socket.SOMAXCONN) -> bool:
        """Start listening; return whether it succeeded."""
        try:
            self._require().listen(backlog)
        except OSError as exc:
            print(f"Listen failed: {exc.strerror or exc}", file=sys.stderr)
            return False
        return True

    def accept(self) -> Optional[TcpClient]:
        """Accept a pending connection, or return None if there is none."""
        try:
            conn, _ = self._require().accept()
        except BlockingIOError:
            return None
        except OSError as exc:
            print(f"Accept failed: {exc.strerror or exc}", file=sys.stderr)
            return None
        return TcpClient(conn)

    def local_address(self) -> str:
        """Return ``ip:port`` of the bound socket, or ``unknown``."""
        if self._sock is None:
            return "unknown"
        try:
            host, port = self._sock.getsockname()[:2]
        except OSError:
            return "unknown"
        return f"{host}:{port}"