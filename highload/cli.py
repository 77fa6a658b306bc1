"""Command line entry point: run as server or as client."""

from __future__ import annotations

import signal
import sys
import threading
from dataclasses import dataclass
from typing import List, Optional

from highload.client import Client
from highload.server import Server

_KILL_SIGNALS = {signal.SIGINT, signal.SIGTERM}

_USAGE = (
    "Usage\n"
    "  Server mode: highload <port> <name>\n\n"
    "  Client mode: highload <address> <port> <name>\n\n"
)


@dataclass(frozen=True)
class Args:
    """Parsed command line."""

    is_server: bool
    port: int
    address: str
    name: str


def parse_args(argv: List[str]) -> Optional[Args]:
    """Parse the arguments after the program name; None on a wrong count.

    Raises ValueError when the port is not an integer.
    """
    if len(argv) == 2:
        port, name = argv
        return Args(is_server=True, port=int(port), address="", name=name)
    if len(argv) == 3:
        address, port, name = argv
        return Args(is_server=False, port=int(port), address=address, name=name)
    return None


def wait_for_kill_signal() -> int:
    """Block SIGINT and SIGTERM, wait for one and return its number."""
    signal.pthread_sigmask(signal.SIG_BLOCK, _KILL_SIGNALS)
    received = signal.sigwait(_KILL_SIGNALS)
    print(f"\nReceived signal {int(received)}. Shutting down...", flush=True)
    return int(received)


def _read_number() -> int:
    try:
        text = input("Enter number: ")
    except EOFError:
        text = ""
    print()
    try:
        return int(text.split()[0])
    except (IndexError, ValueError):
        return 0


def _serve(server: Server) -> None:
    try:
        server.run()
    except Exception as exc:
        print(f"Server error: {exc}", file=sys.stderr)


def run(args: Args) -> None:
    """Run in the mode the arguments select."""
    if args.is_server:
        # Block before starting the worker so the signal is only ever
        # delivered through sigwait.
        signal.pthread_sigmask(signal.SIG_BLOCK, _KILL_SIGNALS)
        server = Server(args.port, args.name)
        thread = threading.Thread(target=_serve, args=(server,), name="server")
        thread.start()
        try:
            wait_for_kill_signal()
        finally:
            server.shutdown()
            thread.join()
    else:
        number = _read_number()
        Client(args.address, args.port, args.name).run(number)


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point; returns the process exit status."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        args = parse_args(argv)
    except ValueError:
        args = None
    if args is None:
        print(_USAGE, flush=True)
        return 1

    try:
        run(args)
    except Exception:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())