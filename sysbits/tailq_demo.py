"""Walk through building, iterating and tearing down a tail queue."""

from __future__ import annotations

import sys
from typing import TextIO

from sysbits.queues import TailQueue

MAX_NODES = 10


def run(count: int = MAX_NODES, out: TextIO | None = None) -> list[int]:
    """Create *count* entries, list them, then remove them; return the removed data."""
    out = out if out is not None else sys.stdout
    queue: TailQueue = TailQueue()

    out.write("Creating TAILQ list...\n")
    for data in range(1, count + 1):
        out.write(f"  Creating entry {data}\n")
        queue.insert_tail(data)

    out.write("Linked list created. Iterating with foreach():\n")
    for index, data in enumerate(queue):
        out.write(f"  Entry {index} => data:{data}\n")

    out.write("Removing all entries, cleaning up...\n")
    removed = []
    for index, node in enumerate(queue.nodes()):
        data = queue.remove(node)
        out.write(f"  Entry {index} => data:{data}\n")
        removed.append(data)

    out.write("Done, exiting.\n")
    return removed


def main(argv: list[str] | None = None) -> int:
    """Run the demo, optionally with the number of entries as argument."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        count = int(args[0]) if args else MAX_NODES
    except ValueError:
        print(f"usage: tailq_demo [COUNT], not {args[0]!r}", file=sys.stderr)
        return 1
    run(count)
    return 0


if __name__ == "__main__":
    sys.exit(main())