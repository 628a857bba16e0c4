import pytest

from elastinode.provisioning.pending import PendingCreationCounter


def test_track_increments_inside_and_restores_after():
    counter = PendingCreationCounter()

    with counter.track() as in_flight:
        assert in_flight == 1
        assert counter.value == 1
        with counter.track():
            assert counter.value == 2

    assert counter.value == 0


def test_track_releases_on_error():
    counter = PendingCreationCounter()

    with pytest.raises(RuntimeError):
        with counter.track():
            raise RuntimeError("submit failed")

    assert counter.value == 0
