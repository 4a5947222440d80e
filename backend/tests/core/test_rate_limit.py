"""Fixed-window rate limiter — per-key counting with an injectable clock."""

from argan_hr.infrastructure.rate_limit import FixedWindowRateLimiter


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_allows_up_to_limit_then_rejects():
    clock = FakeClock()
    limiter = FixedWindowRateLimiter(3, 60, clock=clock)
    decisions = [limiter.hit("ip:1") for _ in range(4)]
    assert [d.allowed for d in decisions] == [True, True, True, False]
    assert [d.remaining for d in decisions[:3]] == [2, 1, 0]
    assert decisions[3].retry_after == 60


def test_window_restarts_after_expiry():
    clock = FakeClock()
    limiter = FixedWindowRateLimiter(1, 60, clock=clock)
    assert limiter.hit("ip:1").allowed
    clock.now += 45
    rejected = limiter.hit("ip:1")
    assert not rejected.allowed
    assert rejected.retry_after == 15
    clock.now += 15
    assert limiter.hit("ip:1").allowed


def test_keys_are_independent():
    limiter = FixedWindowRateLimiter(1, 60, clock=FakeClock())
    assert limiter.hit("ip:1").allowed
    assert limiter.hit("ip:2").allowed
    assert not limiter.hit("ip:1").allowed


def test_reset_clears_all_windows():
    limiter = FixedWindowRateLimiter(1, 60, clock=FakeClock())
    limiter.hit("ip:1")
    limiter.reset()
    assert limiter.hit("ip:1").allowed


def test_expired_windows_are_evicted():
    clock = FakeClock()
    limiter = FixedWindowRateLimiter(5, 60, clock=clock)
    for n in range(1000):
        limiter.hit(f"ip:{n}")
    assert limiter.tracked_keys() == 1000

    clock.now += 61
    limiter.hit("ip:new")
    assert limiter.tracked_keys() == 1


def test_eviction_keeps_live_windows():
    clock = FakeClock()
    limiter = FixedWindowRateLimiter(1, 60, clock=clock)
    limiter.hit("ip:old")
    clock.now += 30
    limiter.hit("ip:busy")
    clock.now += 31
    limiter.hit("ip:other")

    assert limiter.tracked_keys() == 2
    assert not limiter.hit("ip:busy").allowed
