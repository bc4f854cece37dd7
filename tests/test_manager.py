import pytest

from sygma_relay.comm.p2p.manager import StreamManager

PEER1 = "QmPeerOne"
PEER2 = "QmPeerTwo"


class FakeStream:
    def __init__(self, fail=False):
        self.close_calls = 0
        self.fail = fail

    def close(self):
        self.close_calls += 1
        if self.fail:
            raise OSError("close failed")


def test_managing_streams():
    manager = StreamManager()
    stream1, stream2, stream3 = FakeStream(), FakeStream(), FakeStream()

    manager.add_stream("1", PEER1, stream1)
    manager.add_stream("1", PEER1, stream1)
    manager.add_stream("1", PEER2, stream2)
    manager.add_stream("2", PEER1, stream3)

    manager.release_streams("1")

    assert stream1.close_calls == 1
    assert stream2.close_calls == 1
    assert stream3.close_calls == 0
    with pytest.raises(LookupError):
        manager.stream("1", PEER1)
    assert manager.stream("2", PEER1) is stream3


def test_fetch_stream_no_stream():
    manager = StreamManager()
    with pytest.raises(LookupError):
        manager.stream("1", "")


def test_fetch_valid_stream():
    manager = StreamManager()
    stream = FakeStream()
    manager.add_stream("1", PEER1, stream)
    assert manager.stream("1", PEER1) is stream


def test_add_stream_ignores_existing_peer():
    manager = StreamManager()
    stream1, stream2 = FakeStream(), FakeStream()
    manager.add_stream("1", PEER1, stream1)
    manager.add_stream("1", PEER1, stream2)
    assert manager.stream("1", PEER1) is stream1


def test_release_continues_after_close_failure():
    manager = StreamManager()
    failing, healthy = FakeStream(fail=True), FakeStream()
    manager.add_stream("1", PEER1, failing)
    manager.add_stream("1", PEER2, healthy)

    manager.release_streams("1")

    assert failing.close_calls == 1
    assert healthy.close_calls == 1
    with pytest.raises(LookupError):
        manager.stream("1", PEER2)


def test_release_unknown_session_closes_nothing():
    manager = StreamManager()
    stream = FakeStream()
    manager.add_stream("1", PEER1, stream)
    manager.release_streams("other")
    assert stream.close_calls == 0
    assert manager.stream("1", PEER1) is stream