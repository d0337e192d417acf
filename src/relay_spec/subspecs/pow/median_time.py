"""
Median Time Tracker

Keeps the window of recent block timestamps that median-time-past is
computed from. The window is sorted newest-first and bounded.
"""

from __future__ import annotations

from collections.abc import Sequence

from relay_spec.subspecs.chain import ChainParams, active_params


def insert_timestamp(
    timestamp: int,
    window: Sequence[int],
    params: ChainParams | None = None,
) -> tuple[int, ...]:
    """
    Insert a timestamp into a descending window and drop the oldest overflow.

    Equal timestamps are kept; the new one goes after existing equal values.
    """
    params = params or active_params()

    position = 0
    while position < len(window) and window[position] >= timestamp:
        position += 1

    updated = (*window[:position], timestamp, *window[position:])
    return updated[: params.median_time_span]


def median_time_past(window: Sequence[int], params: ChainParams | None = None) -> int:
    """
    Return the median of the window.

    The middle element of a descending window. An empty window falls back to
    the fixed epoch constant.
    """
    if not window:
        return (params or active_params()).median_time_epoch
    return window[len(window) // 2]
