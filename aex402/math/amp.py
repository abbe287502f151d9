"""Amplification coefficient ramping."""

from __future__ import annotations


def get_current_amp(
    amp: int,
    target_amp: int,
    ramp_start: int,
    ramp_end: int,
    now: int,
) -> int:
    """Effective amp at time `now` while ramping from `amp` to `target_amp`.

    Piecewise linear in unix seconds: `amp` up to ramp_start, `target_amp` from
    ramp_end on (or immediately when the ramp has zero length), and a
    truncated linear interpolation in between.

    Args:
        amp: Amp at ramp start (the pool's init_amp)
        target_amp: Amp at ramp end
        ramp_start: Ramp start timestamp
        ramp_end: Ramp stop timestamp
        now: Current timestamp

    Returns:
        The current amp
    """
    if now >= ramp_end or ramp_end == ramp_start:
        return target_amp
    if now <= ramp_start:
        return amp

    elapsed = now - ramp_start
    duration = ramp_end - ramp_start

    # Both branches keep the products non-negative, so floor == truncation
    if target_amp > amp:
        return amp + (target_amp - amp) * elapsed // duration
    return amp - (amp - target_amp) * elapsed // duration
