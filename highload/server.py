"""The number-exchange server built on the event-driven TCP server."""

from __future__ import annotations

import sys

from highload.epoll_server import EpollServer
from highload.query import Query, construct_query, parse_query, print_info

_MIN_CLIENT_NUMBER = 0
_MAX_CLIENT_NUMBER = 100


class Server:
    """Answers each client's query with its own name and fixed number."""

    SERVER_NUMBER = 50

    def __init__(self, port: int, name: str) -> None:
        self._epoll_server = EpollServer(port)
        self.name = f"Server of {name}"

    def handle_request(self, request: str) -> str:
        """Return the reply to a request; empty for invalid requests."""
        try:
            client = parse_query(request)
        except ValueError as exc:
            print(f"Error handling client : {exc}", file=sys.stderr)
            return ""

        if not _MIN_CLIENT_NUMBER <= client.number <= _MAX_CLIENT_NUMBER:
            print(
                f"Invalid client number ({client.number}), closing connection.",
                flush=True,
            )
            return ""

        print_info(client.name, self.name, client.number, self.SERVER_NUMBER)
        return construct_query(Query(self.name, self.SERVER_NUMBER))

    def run(self) -> None:
        """Serve requests until shut down."""
        self._epoll_server.set_message_handler(self.handle_request)
        print(f"Starting server on {self._epoll_server.local_address()}\n", flush=True)
        self._epoll_server.run()

    def shutdown(self) -> None:
        """Stop accepting connections and let running ones finish."""
        self._epoll_server.shutdown()