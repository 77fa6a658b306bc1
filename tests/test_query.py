import pytest

from highload.query import Query, construct_query, parse_query, print_info


def test_construct_query_wire_format():
    assert construct_query(Query("alice", 42)) == "alice\n42\n"


def test_construct_negative_number():
    assert construct_query(Query("bob", -7)) == "bob\n-7\n"


@pytest.mark.parametrize(
    "query",
    [Query("Server of x", 50), Query("", 0), Query("with spaces", -100)],
)
def test_round_trip(query):
    assert parse_query(construct_query(query)) == query


def test_parse_skips_whitespace_before_number():
    assert parse_query("name\n   \n  17") == Query("name", 17)


def test_parse_ignores_trailing_text():
    assert parse_query("name\n12abc") == Query("name", 12)


def test_parse_empty_name_line():
    assert parse_query("\n5\n") == Query("", 5)


def test_parse_empty_input_rejected():
    with pytest.raises(ValueError, match="Invalid query string"):
        parse_query("")


@pytest.mark.parametrize("text", ["name", "name\n", "name\nabc", "name\n-"])
def test_parse_missing_number_rejected(text):
    with pytest.raises(ValueError, match="Invalid query number"):
        parse_query(text)


def test_parse_out_of_range_number_rejected():
    with pytest.raises(ValueError, match="Invalid query number"):
        parse_query("name\n99999999999")


def test_print_info_output(capsys):
    print_info("Client of a", "Server of b", 10, 50)
    out = capsys.readouterr().out
    assert out == (
        "Client: Client of a\n"
        "Server: Server of b\n"
        "Client number: 10\n"
        "Server number: 50\n"
        "Sum: 60\n"
        "\n"
    )