# puke

Small, thread-safe runtime building blocks: a log-bucketed histogram, a lazily
computed value, latency metrics, a stack, a dense id table, and the pieces of a
completion-based I/O ring (records, one-shot completions, a ticket pool and
per-ticket storage).

The package has no dependencies outside the standard library.

## Modules

### `puke.histogram`

- `Histogram()` collects values into 2**16 logarithmic buckets.
  - `measure(raw_value)` records a value. Values too large to bucket raise
    `ValueError`.
  - `percentile(p)` returns the value at percentile `p` (0 to 100). It returns
    NaN when nothing has been measured, and it raises `ValueError` when `p` is
    above 100.
  - `sum()` and `count()` return the total and the number of observations.
  - `print_percentiles()` prints a line that lists common percentiles.
- `compress(value)` and `decompress(compressed)` are the bucketing functions.
  A decompressed bucket is within about 1% of the original value.

### `puke.lazy`

- `Lazy(init)` calls `init` once, on the first `get()`. Concurrent callers all
  receive that single value.

### `puke.metrics`

- `Measure(histogram)` is a context manager. On exit it records the elapsed
  nanoseconds in `histogram`.
- `Metrics` is a dataclass with one `Histogram` per instrumented operation:
  `sq_mu_wait`, `sq_mu_hold`, `cq_mu_wait`, `cq_mu_hold`, `enter_cqe`,
  `enter_sqe`, `get_sqe`, `reap_ready`, `wait`, `ticket_queue_push` and
  `ticket_queue_pop`. `print_profile(file=None)` writes a table of latency
  percentiles, counts and sums. It writes to standard output unless `file` is
  given.
- `metrics()` returns the process-wide `Metrics` instance.
- `clock()` returns the nanoseconds since the first observation in the
  process. `uptime()` returns the same interval in seconds.

### `puke.stack`

- `Stack()` is a LIFO stack.
  - `push(item)` adds an item.
  - `pop()` removes and returns the top item, or returns `None` when the
    stack is empty.
  - `take_iter()` empties the stack and returns an iterator over what it held.
  - Iteration goes from the newest item to the oldest, and `len()` gives the
    number of items.

### `puke.machine_table`

- `MachineTable(max_mid=MAX_MID)` stores items under ids that it hands out in
  order from 0.
  - `insert(item)` returns the new id, or `None` once the ids are used up.
  - `get(mid)` returns the stored item. It raises `KeyError` when nothing is
    stored under `mid`.
  - `contains_pid(mid)` reports whether something is stored under `mid`.
- `split_fanout(mid)` splits an id into its first-level and second-level
  indices. It raises `ValueError` for an id above 2**37.

### `puke.ring`

- `kernel_types`: the `IORING_*` and `IOSQE_*` constants; `Ordering`
  (`NONE`, `LINK`, `DRAIN`); and the dataclasses `CompletionEvent`, `Params`,
  `SqringOffsets`, `CqringOffsets` and `SubmissionEntry`.
  `SubmissionEntry.prep_rw(opcode, fd, length, offset, ordering)` resets an
  entry for an operation and sets its ordering flag.
- `completion`: `pair(submit=None, convert=to_none)` returns a
  `(Completion, Filler)` pair.
  - `Filler.fill(result)` hands over a `CompletionEvent` or an `OSError`. A
    second fill raises `RuntimeError`.
  - `Completion.wait()` blocks until the result arrives. A `Completion` can
    also be awaited under asyncio.
  - Both `wait()` and awaiting return the converted value, or raise the
    `OSError` that was filled in.
  - `to_size` and `to_none` are the stock converters.
- `ticket_queue`: `TicketQueue(size)` starts with tickets `0..size-1`.
  `pop()` blocks until a ticket is free, and `push_multi(tickets)` returns
  tickets to the queue.
- `in_flight`: `InFlight(size)` holds the buffer, message header and filler
  for each ticket. `take_filler(ticket)` removes the filler and raises
  `LookupError` if there is none.

## What it does not do

- There is no ring that talks to the operating system. Nothing sets up,
  submits to or reaps from a kernel queue: the ring records, completions and
  queues are in-process building blocks only.
- There is no command-line program.
- `MachineTable` has no way to remove an entry.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from puke.histogram import Histogram

h = Histogram()
for v in (2, 2, 3, 3, 4):
    h.measure(v)

print(round(h.percentile(50)))   # 3
print(h.count(), h.sum())        # 5 14
h.print_percentiles()
```

Timing a block:

```python
from puke.metrics import Measure, metrics

with Measure(metrics().wait):
    do_work()

metrics().print_profile()
```