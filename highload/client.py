"""The number-exchange client."""

from __future__ import annotations

import time

from highload.query import Query, construct_query, parse_query, print_info
from highload.sockets import TcpClient

_CONNECT_HOST = "127.0.0.1"
DEFAULT_DELAY = 7.0


class Client:
    """Sends one number to the server and prints both numbers and their sum.

    The connection always goes to the local host; ``address`` is kept only
    for reference.
    """

    def __init__(self, address: str, port: int, name: str, delay: float = DEFAULT_DELAY) -> None:
        self.address = address
        self.port = port
        self.name = f"Client of {name}"
        self.delay = delay
        self._tcp = TcpClient()

    def run(self, number: int) -> Query:
        """Exchange queries with the server and return the server's query."""
        try:
            if not self._tcp.connect(_CONNECT_HOST, self.port):
                raise RuntimeError(f"Failed to connect to {_CONNECT_HOST}:{self.port}")
            time.sleep(self.delay)
            self._tcp.send_string(construct_query(Query(self.name, number)))
            response = self._tcp.receive_string()
        finally:
            self._tcp.close()

        server = parse_query(response)
        print_info(self.name, server.name, number, server.number)
        return server