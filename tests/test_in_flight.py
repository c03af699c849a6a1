import pytest

from puke.ring.completion import pair
from puke.ring.in_flight import InFlight, MsgHeader


def _filler():
    _, filler = pair()
    return filler


def test_insert_without_buffer_returns_none_and_keeps_filler():
    in_flight = InFlight(2)
    filler = _filler()
    assert in_flight.insert(1, None, False, filler) is None
    assert in_flight.take_filler(1) is filler


def test_insert_buffer_returns_buffer():
    in_flight = InFlight(2)
    buffer = memoryview(bytearray(8))
    assert in_flight.insert(0, buffer, False, _filler()) is buffer


def test_insert_with_msghdr_points_at_buffer():
    in_flight = InFlight(2)
    buffer = bytearray(4)
    header = in_flight.insert(1, buffer, True, _filler())
    assert isinstance(header, MsgHeader)
    assert header.iov is buffer
    assert header.iovlen == 1


def test_take_filler_twice_raises():
    in_flight = InFlight(1)
    filler = _filler()
    in_flight.insert(0, None, False, filler)
    assert in_flight.take_filler(0) is filler
    with pytest.raises(LookupError):
        in_flight.take_filler(0)


def test_ticket_out_of_range_raises():
    in_flight = InFlight(1)
    with pytest.raises(IndexError):
        in_flight.insert(1, None, False, _filler())