"""A memory manager that hands out blocks of a fixed-size heap.

Blocks are placed by first fit, worst fit or best fit. Addresses are
offsets into the managed heap. Freed blocks are merged with adjacent free
blocks, so the free list always holds maximal holes in address order.
"""

from __future__ import annotations

import argparse
import bisect
import sys
import threading
import time
from collections.abc import Callable, Sequence

_Block = tuple[int, int]  # (start, size)
_Candidate = tuple[int, _Block]  # (index in free list, block)


class InvalidFreeError(Exception):
    """Raised when a free is not valid: unknown address, double free or a destroyed manager."""


class MemoryManager:
    """Manage allocations inside a heap of ``size`` bytes.

    All operations are safe to call from several threads at once.
    """

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError("heap size must be at least 1 byte")
        self._size = size
        self._heap = bytearray(size)
        self._free: list[_Block] = [(0, size)]
        self._allocated: dict[int, int] = {}
        self._count = 0
        self._active = True
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return (
            f"MemoryManager(size={self._size}, allocated={self.allocated_space()}, "
            f"fragments={self.fragment_count()})"
        )

    def destroy(self) -> None:
        """Invalidate every block; later allocations fail and frees raise."""
        with self._lock:
            self._active = False
            self._free.clear()
            self._allocated.clear()

    def _allocate(
        self, nbytes: int, choose: Callable[[list[_Candidate]], _Candidate]
    ) -> int | None:
        if nbytes < 1:
            raise ValueError("allocation size must be at least 1 byte")
        with self._lock:
            if not self._active:
                return None
            candidates = [
                (index, block)
                for index, block in enumerate(self._free)
                if block[1] >= nbytes
            ]
            if not candidates:
                return None
            index, (start, size) = choose(candidates)
            if size == nbytes:
                del self._free[index]
            else:
                self._free[index] = (start + nbytes, size - nbytes)
            self._allocated[start] = nbytes
            self._count += 1
            return start

    def malloc_ff(self, nbytes: int) -> int | None:
        """Allocate ``nbytes`` in the first hole large enough; None if none is."""
        return self._allocate(nbytes, lambda candidates: candidates[0])

    def malloc_wf(self, nbytes: int) -> int | None:
        """Allocate ``nbytes`` in the largest hole; None if it is too small."""
        return self._allocate(
            nbytes, lambda candidates: max(candidates, key=lambda c: c[1][1])
        )

    def malloc_bf(self, nbytes: int) -> int | None:
        """Allocate ``nbytes`` in the smallest hole that fits; None if none does."""
        return self._allocate(
            nbytes, lambda candidates: min(candidates, key=lambda c: c[1][1])
        )

    def free(self, address: int) -> None:
        """Release the block starting at ``address``."""
        with self._lock:
            if not self._active:
                raise InvalidFreeError("memory manager has been destroyed")
            size = self._allocated.pop(address, None)
            if size is None:
                raise InvalidFreeError(f"address {address:#x} is not allocated")
            start, end = address, address + size
            pos = bisect.bisect_left(self._free, (address,))
            if pos < len(self._free) and self._free[pos][0] == end:
                end += self._free[pos][1]
                del self._free[pos]
            if pos > 0:
                prev_start, prev_size = self._free[pos - 1]
                if prev_start + prev_size == start:
                    start = prev_start
                    pos -= 1
                    del self._free[pos]
            self._free.insert(pos, (start, end - start))

    def _check_access(self, address: int, length: int) -> None:
        if not self._active:
            raise RuntimeError("memory manager has been destroyed")
        if length < 0:
            raise ValueError("length must not be negative")
        for start, size in self._allocated.items():
            if start <= address < start + size:
                if address + length > start + size:
                    raise IndexError(
                        f"access of {length} bytes at {address:#x} runs past its block"
                    )
                return
        raise IndexError(f"address {address:#x} is not inside an allocated block")

    def write(self, address: int, data: bytes) -> None:
        """Store ``data`` at ``address`` inside an allocated block."""
        with self._lock:
            self._check_access(address, len(data))
            self._heap[address : address + len(data)] = data

    def read(self, address: int, length: int) -> bytes:
        """Return ``length`` bytes from ``address`` inside an allocated block."""
        with self._lock:
            self._check_access(address, length)
            return bytes(self._heap[address : address + length])

    def allocated_space(self) -> int:
        """Return the number of bytes currently allocated."""
        with self._lock:
            return sum(self._allocated.values())

    def remaining_space(self) -> int:
        """Return the number of free bytes, summed over all free blocks."""
        with self._lock:
            return sum(size for _, size in self._free)

    def fragment_count(self) -> int:
        """Return the number of free blocks."""
        with self._lock:
            return len(self._free)

    def malloc_count(self) -> int:
        """Return the number of successful allocations of any placement kind."""
        with self._lock:
            return self._count


def _read_string(manager: MemoryManager, address: int, length: int) -> str:
    return manager.read(address, length).split(b"\0", 1)[0].decode()


def _basic_demo() -> int:
    heap_size = 100
    manager = MemoryManager(heap_size)

    def status(step: int) -> None:
        print(
            f"{step} -- Available Memory: {manager.remaining_space()}, "
            f"Fragment Count: {manager.fragment_count()}"
        )

    status(1)
    ptr1 = manager.malloc_ff(10)
    if ptr1 is None:
        print("ptr1 - mymalloc_ff(10) failed")
        return 1
    manager.write(ptr1, b"HELLO".ljust(10, b"\0"))
    print(f"ptr1 is {_read_string(manager, ptr1, 10)}")
    status(2)

    ptr2 = manager.malloc_wf(45)
    if ptr2 is None:
        print("ptr2 - mymalloc_wf(45) failed")
        return 1
    manager.write(ptr2, b"GOODBYE".ljust(45, b"\0"))
    print(f"ptr2 is {_read_string(manager, ptr2, 45)}")
    status(3)

    if manager.malloc_bf(50) is None:
        print("ptr3 - mymalloc_bf(50) failed")
    status(4)

    manager.free(ptr1)
    manager.free(ptr2)
    status(5)
    print(f"Total successful mallocs: {manager.malloc_count()}")

    try:
        manager.free(ptr2)
    except InvalidFreeError as error:
        print(f"invalid free: {error}", file=sys.stderr)
        return 1
    finally:
        manager.destroy()
    return 0


def _thread_demo() -> int:
    heap_size, alloc_size, thread_count = 4096, 1024, 10
    manager = MemoryManager(heap_size)

    def routine() -> None:
        ident = threading.get_ident()
        for i in range(25):
            address = manager.malloc_ff(alloc_size)
            time.sleep(20e-6)
            if address is None:
                print(f"Thread {ident} could not allocate {alloc_size} byte(s)")
                continue
            print(f"Thread {ident} allocated {alloc_size} byte(s): {address:#x}")
            manager.write(address, bytes([ord("a") + i]))
            print(f"Thread {ident} write {manager.read(address, 1).decode()}")
            manager.free(address)
            print(f"Thread {ident} freed {address:#x}")

    threads = [threading.Thread(target=routine) for _ in range(thread_count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    manager.destroy()
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the memory manager demonstration."""
    parser = argparse.ArgumentParser(description="Exercise the memory manager.")
    parser.add_argument(
        "--threads",
        action="store_true",
        help="run the multi-threaded allocation demonstration",
    )
    args = parser.parse_args(argv)
    return _thread_demo() if args.threads else _basic_demo()


if __name__ == "__main__":
    sys.exit(main())