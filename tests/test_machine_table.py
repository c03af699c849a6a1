import threading

import pytest

from puke.machine_table import MAX_MID, MachineTable, split_fanout


def test_fanout_functionality():
    assert split_fanout(0b11_1111_1111_1111_1111) == (0, 0b11_1111_1111_1111_1111)
    assert split_fanout(0b111_1111_1111_1111_1111) == (0b1, 0b11_1111_1111_1111_1111)


def test_split_fanout_at_limit():
    assert split_fanout(MAX_MID) == (1 << 19, 0)


def test_split_fanout_rejects_too_large():
    with pytest.raises(ValueError):
        split_fanout(MAX_MID + 1)


def test_insert_assigns_dense_ids():
    table = MachineTable()
    assert [table.insert(name) for name in ("a", "b", "c")] == [0, 1, 2]
    assert table.get(0) == "a"
    assert table.get(2) == "c"


def test_contains_pid():
    table = MachineTable()
    table.insert("m")
    assert table.contains_pid(0) is True
    assert table.contains_pid(1) is False
    assert table.contains_pid(1 << 20) is False


def test_get_missing_raises():
    table = MachineTable()
    with pytest.raises(KeyError):
        table.get(5)


def test_insert_exhausts_ids():
    table = MachineTable(max_mid=1)
    assert table.insert("x") == 0
    assert table.insert("y") == 1
    assert table.insert("z") is None
    assert table.contains_pid(1) is True


def test_concurrent_inserts_get_unique_ids():
    table = MachineTable()
    ids = []
    lock = threading.Lock()

    def worker():
        for _ in range(50):
            mid = table.insert(object())
            with lock:
                ids.append(mid)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert sorted(ids) == list(range(200))
    assert table.contains_pid(199) is True
    assert table.contains_pid(200) is False
    assert table.insert("last") == 200
    assert table.get(200) == "last"