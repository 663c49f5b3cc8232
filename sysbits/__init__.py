"""Small UNIX system utilities: string helpers, /etc and /proc parsers, name lookups,
a tree printer, linked lists and queues, a static allocator, timers, a spinner and a
UNIX socket daemon with its client."""

__version__ = "0.1.0"