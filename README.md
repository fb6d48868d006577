# syslab

A set of small systems-programming exercises. Each one can be used as a
library, and most can also be run from the command line.

## Installing

    pip install .

To run the tests:

    pip install .[test]
    pytest

## Modules

### `syslab.stackm`

`StackMachine` is an unbounded stack of integers.

- `push(value)` puts an integer on top; anything other than an `int`
  raises `TypeError`.
- `pop()` removes and returns the top value; `top()` returns it without
  removing it.
- `clear()` empties the stack; `len(stack)` gives its size and iterating
  yields the values from top to bottom.
- `add()`, `sub()` and `mult()` replace the two topmost values with their
  sum, difference (top minus second) or product, and return the result.
- `rotate(depth)` moves the top value down to position `depth`; every
  value above it moves up one place. A depth of 1 changes nothing.
- `format()` returns a printable listing, top first.

An operation that cannot be done (an empty stack, fewer than two values for
arithmetic, a rotation depth below 1 or beyond the stack size) raises
`StackError`, a subclass of `IndexError`.

```python
from syslab.stackm import StackMachine

sm = StackMachine()
for value in (6, 5, 4, 3):
    sm.push(value)
sm.rotate(3)
print(list(sm))     # [4, 5, 3, 6]
print(sm.sub())     # 4 - 5 = -1
```

### `syslab.memory`

`MemoryManager(size)` manages a heap of `size` bytes. Addresses are offsets
into that heap.

- `malloc_ff(nbytes)`, `malloc_wf(nbytes)` and `malloc_bf(nbytes)` allocate
  by first fit, worst fit and best fit. They return the address, or `None`
  when no free block is large enough or the manager has been destroyed. A
  size below 1 raises `ValueError`.
- `free(address)` releases a block and merges it with neighbouring free
  blocks. Freeing an address that is not allocated (for example a double
  free), or freeing after `destroy()`, raises `InvalidFreeError`.
- `write(address, data)` and `read(address, length)` access bytes inside an
  allocated block; access outside one raises `IndexError`.
- `allocated_space()`, `remaining_space()`, `fragment_count()` and
  `malloc_count()` report bytes in use, free bytes, the number of free
  blocks and the number of successful allocations.
- `destroy()` invalidates every block.

All operations are guarded by a lock and may be called from several threads.

```python
from syslab.memory import MemoryManager

mm = MemoryManager(100)
address = mm.malloc_ff(10)
mm.write(address, b"HELLO")
print(mm.read(address, 5), mm.remaining_space(), mm.fragment_count())
mm.free(address)
```

### `syslab.shell`

A teeny tiny shell. Each line may hold up to five commands separated by `;`;
each command is split on spaces and run as a child process, one after
another. A line that is exactly `quit` ends the session. The building blocks
are `read_command(stream)`, `parse_commands(line)`,
`split_arguments(command)` and `run_command(args)`; reading at end of input
or too many commands on a line raises `ShellError`. There is no quoting,
piping or redirection.

### `syslab.hello`

`system_greeting()` builds a line from the system name, host name, release,
version and machine; `user_line()` returns the `USER` environment variable,
or a message when it is not set.

### `syslab.ttfs`

The on-disk structures of a tiny file system, packed little-endian with no
padding: `SuperBlock`, `Inode` and `DirectoryBlock`, each with `to_bytes()`
and `from_bytes(data)`. Unpacking rejects short data, a bad magic and counts
beyond what the structure can hold.

### `syslab.park` and `syslab.park_display`

A theme-park ride simulation. `ParkState` holds the visitor counters, the
drivers and four `Car`s on a 34-position track. `make_move`, `order_cars`
and `step_cars` move the cars, loading passengers at position 33 and
unloading at position 30; `check_cars` and `check_lost_visitors` check that
no two cars share a position and that every visitor is accounted for.
`render_park` draws the park as 25 lines of text with two wandering
dinosaurs, and `run_park(rounds, rng, out)` draws and steps the park once per
round, yielding a copy of the state each time.

## Commands

    syslab-stackm              # run the stack machine demonstration
    syslab-memory              # run the memory manager demonstration
    syslab-memory --threads    # ten threads allocating and freeing at once
    syslab-shell               # start the shell; type "quit" to leave
    syslab-hello               # print system and user information
    syslab-park --rounds 30 --seed 1 --delay 0.5

`syslab-park` takes `--rounds` (default: run until every visitor has left),
`--seed` for the random generator and `--delay` in seconds between frames
(default 1.0).

## What it does not do

- The park simulation has no visitors and no drivers acting on their own:
  nobody buys tickets, queues or rides, so the counters keep their starting
  values and the cars only circle the track. Without `--rounds` the park
  never closes; stop it with Ctrl-C.
- `syslab.ttfs` only packs and unpacks the structures. It does not create,
  mount or read a file system image, and has no file operations.