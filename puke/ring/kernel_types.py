"""Submission and completion records of the ring, with their flag constants."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

IORING_OP_NOP = 0
IORING_OP_READV = 1
IORING_OP_WRITEV = 2
IORING_OP_FSYNC = 3
IORING_OP_READ_FIXED = 4
IORING_OP_WRITE_FIXED = 5
IORING_OP_POLL_ADD = 6
IORING_OP_POLL_REMOVE = 7
IORING_OP_SYNC_FILE_RANGE = 8
IORING_OP_SENDMSG = 9
IORING_OP_RECVMSG = 10
IORING_OP_TIMEOUT = 11
IORING_OP_TIMEOUT_REMOVE = 12
IORING_OP_ACCEPT = 13
IORING_OP_ASYNC_CANCEL = 14
IORING_OP_LINK_TIMEOUT = 15
IORING_OP_CONNECT = 16
IORING_OP_FALLOCATE = 17
IORING_OP_OPENAT = 18
IORING_OP_CLOSE = 19
IORING_OP_FILES_UPDATE = 20
IORING_OP_STATX = 21
IORING_OP_READ = 22
IORING_OP_WRITE = 23
IORING_OP_FADVISE = 24
IORING_OP_MADVISE = 25
IORING_OP_SEND = 26
IORING_OP_RECV = 27
IORING_OP_OPENAT2 = 28
IORING_OP_LAST = 29

IOSQE_FIXED_FILE = 1
IOSQE_IO_DRAIN = 2
IOSQE_IO_LINK = 4
IOSQE_IO_HARDLINK = 8
IOSQE_ASYNC = 16
IOSQE_PERSONALITY = 32

IORING_SETUP_IOPOLL = 1
IORING_SETUP_SQPOLL = 2
IORING_SETUP_SQ_AFF = 4
IORING_SETUP_CQSIZE = 8
IORING_SETUP_CLAMP = 16

IORING_FSYNC_DATASYNC = 1
IORING_TIMEOUT_ABS = 1

IORING_OFF_SQ_RING = 0
IORING_OFF_CQ_RING = 0x0800_0000
IORING_OFF_SQES = 0x1000_0000

IORING_SQ_NEED_WAKEUP = 1

IORING_ENTER_GETEVENTS = 1
IORING_ENTER_SQ_WAKEUP = 2

IORING_FEAT_SINGLE_MMAP = 1
IORING_FEAT_NODROP = 2
IORING_FEAT_SUBMIT_STABLE = 4
IORING_FEAT_RW_CUR_POS = 8

IORING_REGISTER_BUFFERS = 0
IORING_UNREGISTER_BUFFERS = 1
IORING_REGISTER_FILES = 2
IORING_UNREGISTER_FILES = 3
IORING_REGISTER_EVENTFD = 4
IORING_UNREGISTER_EVENTFD = 5
IORING_REGISTER_FILES_UPDATE = 6
IORING_REGISTER_EVENTFD_ASYNC = 7

_U32_MAX = (1 << 32) - 1


class Ordering(enum.Enum):
    """Ordering constraints placed on a submitted operation."""

    NONE = "none"
    """No ordering requirements."""
    LINK = "link"
    """The next submitted operation waits until this one finishes."""
    DRAIN = "drain"
    """All previously submitted operations complete before this one begins."""


@dataclass(frozen=True)
class CompletionEvent:
    """A completed operation as reported by the kernel."""

    user_data: int
    res: int
    flags: int = 0


@dataclass
class SqringOffsets:
    """Offsets of the submission ring's fields in its mapping."""

    head: int = 0
    tail: int = 0
    ring_mask: int = 0
    ring_entries: int = 0
    flags: int = 0
    dropped: int = 0
    array: int = 0
    resv1: int = 0
    resv2: int = 0


@dataclass
class CqringOffsets:
    """Offsets of the completion ring's fields in its mapping."""

    head: int = 0
    tail: int = 0
    ring_mask: int = 0
    ring_entries: int = 0
    overflow: int = 0
    cqes: int = 0
    resv: tuple[int, int] = (0, 0)


@dataclass
class Params:
    """Parameters passed to and filled in by ring setup."""

    sq_entries: int = 0
    cq_entries: int = 0
    flags: int = 0
    sq_thread_cpu: int = 0
    sq_thread_idle: int = 0
    resv: tuple[int, int, int, int, int] = (0, 0, 0, 0, 0)
    sq_off: SqringOffsets = field(default_factory=SqringOffsets)
    cq_off: CqringOffsets = field(default_factory=CqringOffsets)


@dataclass
class SubmissionEntry:
    """One entry of the submission queue."""

    opcode: int = 0
    flags: int = 0
    ioprio: int = 0
    fd: int = 0
    off: int = 0
    addr: object = 0
    len: int = 0
    rw_flags: int = 0
    user_data: int = 0
    buf_index: int = 0

    def prep_rw(
        self, opcode: int, fd: int, length: int, offset: int, ordering: Ordering
    ) -> None:
        """Prepare the entry for an operation, keeping `addr` and `user_data`.

        Raises ValueError if `length` does not fit in 32 bits.
        """
        if not 0 <= length <= _U32_MAX:
            raise ValueError(f"length {length} does not fit in 32 bits")
        self.opcode = opcode
        self.flags = 0
        self.ioprio = 0
        self.fd = fd
        self.len = length
        self.off = offset
        self.rw_flags = 0
        self.buf_index = 0
        self.apply_order(ordering)

    def apply_order(self, ordering: Ordering) -> None:
        """Add the flag that the given ordering requires."""
        if ordering is Ordering.LINK:
            self.flags |= IOSQE_IO_LINK
        elif ordering is Ordering.DRAIN:
            self.flags |= IOSQE_IO_DRAIN