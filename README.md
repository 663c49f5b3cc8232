# sysbits

A collection of small UNIX system utilities, usable both as a library and
from the command line. Everything is pure Python with no third-party
dependencies. Several parts (signals, `/proc`, UNIX domain sockets) need a
POSIX system; the `/proc` helpers need Linux.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## What is inside

| Module               | Purpose |
|----------------------|---------|
| `sysbits.strings`    | `stristr()` ASCII case-insensitive search, strict `urlencode()` and size-limited `urlencode_bounded()` |
| `sysbits.lfile`      | `TokenFile` and `fgetint()` for key/value lookups in `/etc/protocols` and `/etc/services` style files |
| `sysbits.procinfo`   | `/proc/<pid>/status` helpers: `get_property()`, `find_by_name()`, `find_ppid()`, `lookup_parent()` |
| `sysbits.names`      | `lookup_addresses()` and `lookup_name()` for forward and reverse lookups |
| `sysbits.tree`       | `tree()` directory printer, with permission strings from `format_perms()` |
| `sysbits.lists`      | `SList` singly linked and `List` doubly linked lists of `Node`s |
| `sysbits.queues`     | `SimpleQueue`, `TailQueue` and `CircleQueue` of `QueueNode`s |
| `sysbits.tailq_demo` | `run()` builds, walks and empties a `TailQueue`, printing each step |
| `sysbits.smalloc`    | `StaticAllocator`, a best-fit allocator over a fixed, simulated memory region |
| `sysbits.timers`     | `PollTimers`, periodic whole-second timers signalled through a pollable pipe |
| `sysbits.softtimer`  | `TimerSet`, a pool of one-shot and periodic millisecond `Timer`s over one interval timer |
| `sysbits.spinner`    | `Spinner` progress indicator and `run()` loop |
| `sysbits.api`        | `ApiMessage` wire format, `Command`, and the `ping()`, `subscribe()`, `kick()`, `unsubscribe()` calls |
| `sysbits.daemon`     | `Daemon` answering those calls over a UNIX domain socket |
| `sysbits.client`     | `run()`: a sample client that subscribes, kicks and unsubscribes |

## Command line

Strict URL encoding of a URL (a sample one when none is given):

```
sysbits-urlencode
sysbits-urlencode 'a b&c'
```

Look up the `udp` protocol number and the `ftp` port; other protocol and
service files may be given as arguments:

```
sysbits-protoserv
sysbits-protoserv /etc/protocols /etc/services
```

Name of the parent process of a running program:

```
sysbits-procparent bash
```

Resolve a host name, or do a reverse lookup with `-n`:

```
sysbits-name localhost
sysbits-name -n 127.0.0.1
```

Print a directory tree; `-p` uses plain ASCII line art, `-v` shows permissions,
`-h` prints usage:

```
sysbits-tree -v /etc
sysbits-tree -p .
```

Demonstrations: the tail queue (optionally with the number of entries), the
pipe-driven timers (1 s, 3 s and 11 s, ending with the last), the software
timers (counting for 105 seconds unless another number is given) and the
spinner (stopped by Ctrl-C, SIGHUP or SIGTERM):

```
sysbits-tailq-demo
sysbits-tailq-demo 5
sysbits-timers
sysbits-softtimer 40
sysbits-spinner
```

The daemon and its client talk over a UNIX domain socket, `/tmp/d.sock` unless
another path is given. Start the daemon in one terminal and the client in
another:

```
sysbits-daemon
sysbits-client
```

The client waits for the daemon, subscribes, sends ten kicks a second apart
and unsubscribes.

## Library use

```python
from sysbits.strings import stristr, urlencode
from sysbits.lfile import fgetint
from sysbits.queues import TailQueue
from sysbits.smalloc import StaticAllocator

print(urlencode("^F*D&S^s~09d"))          # %5EF%2AD%26S%5Es%7E09d
print(stristr("Hello World", "WORLD"))    # World

print(fgetint("/etc/protocols", " \n\t", "udp"))

queue = TailQueue()
node = queue.insert_tail(1)
queue.insert_after(node, 2)
print(list(queue), list(reversed(queue)))  # [1, 2] [2, 1]

heap = StaticAllocator(4096)
address = heap.malloc(100)
print(heap.allocated_bytes, heap.allocated_areas)  # 100 1
heap.free(address)
```

Errors are reported with exceptions:

- `StaticAllocator.malloc()` raises `OutOfMemory` when no free block is large
  enough; freeing an address that was not allocated raises `ValueError`.
- `TokenFile.get_int()` and `fgetint()` raise `KeyError` when the key is absent.
- `tree()` raises `NotADirectoryError` for a path that is not a directory.
- `lookup_name()` raises `ValueError` for a malformed address.
- The calls in `sysbits.api` raise `ApiError` when the daemon cannot be reached
  or a message is cut short; `ping()` simply returns `False`.
- `TimerSet.declare()` raises `RuntimeError` when all timer slots are in use.

## Limits

- `PollTimers` and `TimerSet` (without an `arm` function) install a SIGALRM
  handler, so they must be created in the main thread, and only one of them
  should drive SIGALRM at a time.
- `StaticAllocator` hands out integer addresses in a simulated region; it does
  not manage real memory.
- The daemon keeps no record of subscribers: it assigns ids and acks and logs
  each request, but does not watch clients or act when they stop kicking.