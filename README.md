# highload

`highload` is a small TCP server and client for the command line. The client
sends its name and a number. The server checks the number and replies with its
own name and a fixed number, 50. Each side then prints both names, both numbers
and their sum.

The server watches all of its connections in one event loop, built on
`selectors`, and passes each request to a pool of worker threads. It closes any
connection that has been idle for more than five seconds. On SIGINT or SIGTERM
it stops accepting new connections, and it exits once every connected client
has gone.

The server and the signal handling use POSIX facilities, so the program runs on
POSIX systems.

## Installation

```
pip install .
```

## Usage

Start a server on a port and give it a name:

```
highload 5000 alpha
```

Start a client with an address, the port and a name:

```
highload 127.0.0.1 5000 beta
```

The client always connects to `127.0.0.1` on the given port. It keeps the
address argument but does not use it to connect.

The client prompts `Enter number:`. It reads the first whitespace-separated
integer from the line, and any other input counts as 0. The client then
connects, waits seven seconds, and sends:

```
Client of beta
42
```

The server accepts numbers from 0 to 100 inclusive. For a valid number it
replies:

```
Server of alpha
50
```

If the number is out of range or the request is malformed, the server sends an
empty reply. The client cannot parse an empty reply, so it exits with status 1.

When an exchange succeeds, both sides print a summary:

```
Client: Client of beta
Server: Server of alpha
Client number: 42
Server number: 50
Sum: 92
```

`highload` prints usage help and exits with status 1 in these cases:

- the number of arguments is wrong;
- the port is not an integer.

It also exits with status 1 if running the selected mode raises an error, such
as a failed connection.

## Library use

The message format is in `highload.query`. A message is the name, a newline,
the number, and a newline:

```python
from highload.query import Query, construct_query, parse_query

text = construct_query(Query("Client of beta", 42))
assert text == "Client of beta\n42\n"
assert parse_query(text) == Query("Client of beta", 42)
```

`parse_query` raises `ValueError` in these cases:

- the text is empty;
- no integer follows the first line;
- the integer does not fit in 32 bits.

`print_info(client_name, server_name, client_number, server_number)` prints
the summary shown above.

The other modules:

- `highload.thread_pool.ThreadPool(num_threads=None)` runs callables on a fixed
  set of worker threads, one per CPU by default.
  - `enqueue(task)` queues a task.
  - `shutdown()` stops new tasks from being taken, lets queued ones finish, and
    joins the workers.
  - The pool is a context manager.
- `highload.sockets` has:
  - `Socket`, and its subclasses `TcpClient` (`connect`, `send_string`,
    `receive_string`) and `TcpServer` (`bind`, `listen`, `accept`,
    `local_address`);
  - `SocketClosedError`, which is raised when a closed socket is used.
- `highload.epoll_server.EpollServer(port, max_events=64, timeout=5.0, num_threads=None)`
  runs the event loop.
  - It passes each received request to the function set with
    `set_message_handler` and sends back what that function returns.
  - It also has `run`, `shutdown`, `check_timeouts` and `local_address`.
- `highload.server.Server(port, name)` has:
  - `handle_request(request)`, which returns the reply text and is empty for
    invalid requests;
  - `run()` and `shutdown()`.
- `highload.client.Client(address, port, name, delay=7.0)` has `run(number)`,
  which performs one exchange and returns the server's `Query`.
- `highload.cli.main(argv=None)` is the command-line entry point. It returns
  the exit status.

## Tests

```
pip install .[test]
pytest
```