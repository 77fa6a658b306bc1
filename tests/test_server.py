import socket
import threading

import pytest

from highload.query import Query, construct_query, parse_query
from highload.server import Server


def _free_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as probe:
        probe.bind(("127.0.0.1", 0))
        return probe.getsockname()[1]


@pytest.fixture
def server():
    instance = Server(0, "test")
    yield instance
    instance.shutdown()


def test_name_is_prefixed(server):
    assert server.name == "Server of test"


def test_valid_request_gets_server_query(server):
    reply = server.handle_request(construct_query(Query("Client of bob", 10)))
    assert parse_query(reply) == Query("Server of test", Server.SERVER_NUMBER)


def test_valid_request_prints_info(server, capsys):
    server.handle_request(construct_query(Query("Client of bob", 10)))
    out = capsys.readouterr().out
    assert "Client: Client of bob" in out
    assert "Server: Server of test" in out


@pytest.mark.parametrize("number", [0, 100])
def test_boundary_numbers_are_accepted(server, number):
    reply = server.handle_request(construct_query(Query("c", number)))
    assert parse_query(reply).number == Server.SERVER_NUMBER


@pytest.mark.parametrize("number", [-1, 101])
def test_out_of_range_number_gets_empty_reply(server, number, capsys):
    assert server.handle_request(construct_query(Query("c", number))) == ""
    assert f"Invalid client number ({number})" in capsys.readouterr().out


@pytest.mark.parametrize("request_text", ["", "name\nnot-a-number\n"])
def test_malformed_request_gets_empty_reply(server, request_text):
    assert server.handle_request(request_text) == ""


def test_run_serves_over_tcp_until_shutdown():
    port = _free_port()
    instance = Server(port, "test")
    thread = threading.Thread(target=instance.run, daemon=True)
    thread.start()
    with socket.create_connection(("127.0.0.1", port), timeout=5) as conn:
        conn.settimeout(5)
        conn.sendall(construct_query(Query("Client of a", 10)).encode())
        reply = conn.recv(1024).decode()
    assert parse_query(reply) == Query("Server of test", Server.SERVER_NUMBER)
    instance.shutdown()
    thread.join(5)
    assert not thread.is_alive()