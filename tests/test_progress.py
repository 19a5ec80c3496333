import threading

from folderinsights.progress import FolderProgress


def test_cancel_flag_defaults_to_false():
    p = FolderProgress()
    assert p.request_cancel is False
    assert p() is False


def test_cancel_flag_set_and_clear():
    p = FolderProgress()
    p.cancel()
    assert p.request_cancel is True
    assert p()
    p.request_cancel = False
    assert p.request_cancel is False


def test_report_without_listeners_is_noop():
    FolderProgress().report_progress("nothing listens")


def test_listeners_called_in_registration_order():
    p = FolderProgress()
    got = []
    p.add_listener(lambda m: got.append(("first", m)))
    p.add_listener(lambda m: got.append(("second", m)))
    p.report_progress("hello")
    assert got == [("first", "hello"), ("second", "hello")]


def test_remove_listener():
    p = FolderProgress()
    got = []
    fn = got.append
    p.add_listener(fn)
    p.remove_listener(fn)
    p.remove_listener(fn)
    p.report_progress("x")
    assert got == []


def test_listener_may_cancel_from_callback():
    p = FolderProgress()
    p.add_listener(lambda m: p.cancel())
    p.report_progress("stop")
    assert p.request_cancel


def test_flag_written_from_other_threads():
    p = FolderProgress()
    stop = threading.Event()
    reads = []

    def reader():
        while not stop.is_set():
            reads.append(p.request_cancel)

    t = threading.Thread(target=reader)
    t.start()
    writers = [threading.Thread(target=p.cancel) for _ in range(8)]
    for w in writers:
        w.start()
    for w in writers:
        w.join()
    stop.set()
    t.join()
    assert p.request_cancel is True
    assert all(isinstance(r, bool) for r in reads)
