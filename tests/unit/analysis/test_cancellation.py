"""Unit tests for CancellationToken."""

from job_tracker.analysis.cancellation import CancellationToken


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestCancellationToken:
    """Test cancel flag and deadline."""

    def test_fresh_token_not_cancelled(self):
        token = CancellationToken()
        assert token.is_cancelled is False
        assert token.reason is None
        assert token.remaining() is None

    def test_cancel(self):
        token = CancellationToken()
        token.cancel()
        assert token.is_cancelled is True
        assert token.reason == "cancelled"

    def test_deadline(self):
        clock = FakeClock(1000)
        token = CancellationToken.with_timeout(30, clock=clock)

        assert token.remaining() == 30
        clock.now = 1030
        assert token.deadline_exceeded is True
        assert token.is_cancelled is True
        assert token.reason == "deadline_exceeded"
        assert token.remaining() == 0

    def test_explicit_cancel_reported_over_deadline(self):
        clock = FakeClock(0)
        token = CancellationToken.with_timeout(1, clock=clock)
        clock.now = 5
        token.cancel()
        assert token.reason == "cancelled"

    def test_cap_timeout(self):
        clock = FakeClock(0)
        token = CancellationToken.with_timeout(20, clock=clock)

        assert token.cap_timeout(60) == 20
        assert token.cap_timeout(5) == 5
        assert token.cap_timeout(None) == 20

    def test_cap_timeout_without_deadline(self):
        assert CancellationToken().cap_timeout(60) == 60
        assert CancellationToken().cap_timeout(None) is None
