import threading

from puke.stack import Stack


def _run(target):
    thread = threading.Thread(target=target)
    thread.start()
    thread.join()


def test_basic_functionality():
    stack = Stack()
    assert stack.pop() is None
    stack.push(1)

    def push_more():
        stack.push(2)
        stack.push(3)
        stack.push(4)

    _run(push_more)
    stack.push(5)
    assert stack.pop() == 5
    assert stack.pop() == 4

    results = []

    def pop_two():
        results.append(stack.pop())
        results.append(stack.pop())

    _run(pop_two)
    assert results == [3, 2]
    assert stack.pop() == 1

    empty = []
    _run(lambda: empty.append(stack.pop()))
    assert empty == [None]


def test_take_iter_clears_and_yields_newest_first():
    stack = Stack()
    for value in (1, 2, 3):
        stack.push(value)
    assert list(stack.take_iter()) == [3, 2, 1]
    assert len(stack) == 0
    assert stack.pop() is None


def test_take_iter_on_empty_stack():
    stack = Stack()
    assert list(stack.take_iter()) == []


def test_iter_does_not_consume():
    stack = Stack()
    stack.push("a")
    stack.push("b")
    assert list(stack) == ["b", "a"]
    assert len(stack) == 2
    assert stack.pop() == "b"


def test_repr_lists_items():
    stack = Stack()
    stack.push(1)
    stack.push(2)
    assert repr(stack) == "Stack [(2) 2, (1) 1]"


def test_concurrent_pushes_are_all_kept():
    stack = Stack()

    def worker(base):
        for i in range(100):
            stack.push(base + i)

    threads = [threading.Thread(target=worker, args=(n * 1000,)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert len(stack) == 800
    assert sorted(stack.take_iter()) == sorted(n * 1000 + i for n in range(8) for i in range(100))