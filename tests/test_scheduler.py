from irt_explorer.scheduler import RenderCoalescer


def test_flush_runs_only_the_latest_callback(clock):
    coalescer = RenderCoalescer(quantum=0.1, clock=clock)
    ran = []
    for i in range(5):
        coalescer.schedule(lambda i=i: ran.append(i))
    assert coalescer.pending
    assert coalescer.flush() is True
    assert ran == [4]
    assert not coalescer.pending


def test_flush_without_pending_is_noop(clock):
    coalescer = RenderCoalescer(quantum=0.1, clock=clock)
    assert coalescer.flush() is False


def test_at_most_one_flush_per_quantum(clock):
    coalescer = RenderCoalescer(quantum=0.1, clock=clock)
    ran = []
    coalescer.schedule(lambda: ran.append("first"))
    assert coalescer.flush()
    coalescer.schedule(lambda: ran.append("second"))
    clock.advance(0.05)
    assert coalescer.flush() is False
    assert coalescer.pending
    clock.advance(0.06)
    assert coalescer.flush() is True
    assert ran == ["first", "second"]


def test_force_flush_ignores_quantum(clock):
    coalescer = RenderCoalescer(quantum=10.0, clock=clock)
    ran = []
    coalescer.schedule(lambda: ran.append(1))
    coalescer.flush()
    coalescer.schedule(lambda: ran.append(2))
    assert coalescer.flush(force=True) is True
    assert ran == [1, 2]


def test_cancel_drops_pending_callback(clock):
    coalescer = RenderCoalescer(quantum=0.1, clock=clock)
    ran = []
    coalescer.schedule(lambda: ran.append(1))
    coalescer.cancel()
    assert coalescer.flush() is False
    assert ran == []
