from conftest import make_snapshot

from facechase.game.publisher import SnapshotPublisher


def test_first_offer_always_publishes():
    publisher = SnapshotPublisher(interval_ms=50)
    snap = make_snapshot()
    assert publisher.offer(snap)
    assert publisher.published is snap


def test_zero_interval_publishes_every_offer():
    publisher = SnapshotPublisher()
    for tick in range(5):
        assert publisher.offer(make_snapshot(tick=tick), elapsed_ms=1)
    assert publisher.publish_count == 5


def test_interval_throttles_until_due():
    publisher = SnapshotPublisher(interval_ms=50)
    publisher.offer(make_snapshot(tick=0))

    assert not publisher.offer(make_snapshot(tick=1), elapsed_ms=20)
    assert not publisher.offer(make_snapshot(tick=2), elapsed_ms=20)
    assert publisher.published.tick == 0
    assert publisher.authoritative.tick == 2

    assert publisher.offer(make_snapshot(tick=3), elapsed_ms=20)
    assert publisher.published.tick == 3


def test_force_publishes_and_restarts_interval():
    publisher = SnapshotPublisher(interval_ms=50)
    publisher.offer(make_snapshot(tick=0))
    publisher.offer(make_snapshot(tick=1), elapsed_ms=40)

    assert publisher.offer(make_snapshot(tick=2), force=True)
    assert not publisher.offer(make_snapshot(tick=3), elapsed_ms=40)


def test_listener_errors_do_not_block_publish():
    publisher = SnapshotPublisher()
    seen = []

    def broken(snapshot):
        raise RuntimeError("boom")

    publisher.add_listener(broken)
    publisher.add_listener(seen.append)

    snap = make_snapshot()
    assert publisher.offer(snap)
    assert seen == [snap]
