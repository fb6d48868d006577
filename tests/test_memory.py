import threading

import pytest

from syslab.memory import InvalidFreeError, MemoryManager, main


def test_fresh_manager_has_one_free_block():
    manager = MemoryManager(100)
    assert manager.remaining_space() == 100
    assert manager.allocated_space() == 0
    assert manager.fragment_count() == 1
    assert manager.malloc_count() == 0


def test_reference_scenario_from_demo():
    manager = MemoryManager(100)
    ptr1 = manager.malloc_ff(10)
    assert ptr1 == 0
    assert manager.remaining_space() == 100 - 10
    assert manager.fragment_count() == 1

    ptr2 = manager.malloc_wf(45)
    assert ptr2 is not None and ptr2 != ptr1
    assert manager.remaining_space() == 100 - 10 - 45
    assert manager.allocated_space() == 10 + 45

    assert manager.malloc_bf(50) is None
    assert manager.remaining_space() == 100 - 10 - 45

    manager.free(ptr1)
    manager.free(ptr2)
    assert manager.remaining_space() == 100
    assert manager.fragment_count() == 1
    assert manager.malloc_count() == 2

    with pytest.raises(InvalidFreeError):
        manager.free(ptr2)


def test_too_large_allocation_fails_without_counting():
    manager = MemoryManager(100)
    assert manager.malloc_ff(200) is None
    assert manager.malloc_count() == 0
    assert manager.remaining_space() == 100


@pytest.mark.parametrize("nbytes", [0, -5])
def test_nonpositive_size_rejected(nbytes):
    manager = MemoryManager(100)
    with pytest.raises(ValueError):
        manager.malloc_ff(nbytes)


def test_heap_size_must_be_positive():
    with pytest.raises(ValueError):
        MemoryManager(0)


def test_free_of_unknown_address_raises():
    manager = MemoryManager(100)
    address = manager.malloc_ff(10)
    with pytest.raises(InvalidFreeError):
        manager.free(address + 1)


def test_destroy_blocks_allocations_and_frees():
    manager = MemoryManager(100)
    address = manager.malloc_ff(10)
    manager.destroy()
    assert manager.malloc_ff(10) is None
    assert manager.malloc_bf(10) is None
    assert manager.malloc_wf(10) is None
    with pytest.raises(InvalidFreeError):
        manager.free(address)
    with pytest.raises(RuntimeError):
        manager.read(address, 1)


def _heap_with_holes():
    manager = MemoryManager(100)
    a = manager.malloc_ff(20)
    b = manager.malloc_ff(10)
    c = manager.malloc_ff(10)
    d = manager.malloc_ff(20)
    e = manager.malloc_ff(10)
    manager.free(a)
    manager.free(c)
    return manager, a, b, c, d, e


def test_first_fit_takes_lowest_hole():
    manager, a, *_ = _heap_with_holes()
    assert manager.malloc_ff(10) == a


def test_best_fit_takes_smallest_hole():
    manager, _, _, c, _, _ = _heap_with_holes()
    assert manager.malloc_bf(10) == c


def test_worst_fit_takes_largest_hole():
    manager, *_, e = _heap_with_holes()
    assert manager.malloc_wf(10) == e + 10


def test_holes_counted_and_merged():
    manager, _, b, _, d, e = _heap_with_holes()
    assert manager.fragment_count() == 3
    for address in (b, d, e):
        manager.free(address)
    assert manager.fragment_count() == 1
    assert manager.remaining_space() == 100
    assert manager.allocated_space() == 0


def test_interleaved_frees_fragment_then_coalesce():
    manager = MemoryManager(4096)
    addresses = [manager.malloc_ff(10) for _ in range(100)]
    assert None not in addresses
    assert manager.allocated_space() == 100 * 10

    evens = addresses[0::2]
    for address in evens:
        manager.free(address)
    assert manager.fragment_count() == len(evens) + 1

    for address in addresses[1::2]:
        manager.free(address)
    assert manager.fragment_count() == 1
    assert manager.remaining_space() == 4096
    assert manager.malloc_count() == 100


def test_write_read_round_trip():
    manager = MemoryManager(100)
    address = manager.malloc_ff(10)
    manager.write(address, b"HELLO")
    assert manager.read(address, 5) == b"HELLO"
    manager.write(address + 5, b"!")
    assert manager.read(address, 6) == b"HELLO!"


def test_access_outside_block_raises():
    manager = MemoryManager(100)
    address = manager.malloc_ff(10)
    with pytest.raises(IndexError):
        manager.write(address, b"x" * 11)
    with pytest.raises(IndexError):
        manager.read(50, 1)


def test_stored_products_survive():
    manager = MemoryManager(4096)
    results = [manager.malloc_ff(4) for _ in range(100)]
    assert None not in results
    for i, address in enumerate(results):
        manager.write(address, (i * (i + 2)).to_bytes(4, "little"))
    stored = [int.from_bytes(manager.read(address, 4), "little") for address in results]
    assert stored[:4] == [0, 3, 8, 15]
    assert stored[99] == 99 * 101
    for address in results:
        manager.free(address)
    assert manager.remaining_space() == 4096


def test_threads_share_the_heap_consistently():
    manager = MemoryManager(4096)
    successes = []
    reads = []
    lock = threading.Lock()

    def routine():
        for i in range(25):
            address = manager.malloc_ff(1024)
            if address is None:
                continue
            expected = bytes([ord("a") + i])
            manager.write(address, expected)
            got = manager.read(address, 1)
            manager.free(address)
            with lock:
                successes.append(address)
                reads.append((expected, got))

    threads = [threading.Thread(target=routine) for _ in range(10)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(reads) == len(successes)
    assert [got for _, got in reads] == [expected for expected, _ in reads]
    assert manager.malloc_count() == len(successes)
    assert manager.remaining_space() == 4096
    assert manager.fragment_count() == 1
    assert all(address % 1024 == 0 for address in successes)


def test_main_reports_double_free(capsys):
    assert main([]) == 1
    captured = capsys.readouterr()
    assert "ptr1 is HELLO" in captured.out
    assert "ptr2 is GOODBYE" in captured.out
    assert "ptr3 - mymalloc_bf(50) failed" in captured.out
    assert "Total successful mallocs: 2" in captured.out
    assert "invalid free" in captured.err


def test_main_thread_demo(capsys):
    assert main(["--threads"]) == 0
    out = capsys.readouterr().out
    assert out.count("allocated 1024 byte(s)") == out.count("freed ")
    assert out.count("allocated") + out.count("could not allocate") == 250