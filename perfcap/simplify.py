"""Keyframe reduction for captured transform streams.

Each channel of a recording is projected onto a single scalar signal and
reduced with a 1-D Ramer-Douglas-Peucker pass. Indices are kept or dropped
as a unit across every axis of the vector, so the baked position and
rotation keys never drift out of sync per axis.

Projections:
    position → Euclidean magnitude sqrt(x² + y² + z²)
    rotation → rotation angle 2·acos(min(1, |w|))

The projection is a fidelity proxy, not an exact per-axis error bound. A
rotation that keeps its angle while swinging its axis produces a flat signal
and is reduced to its endpoints.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

import numpy as np

from perfcap.channels import DEFAULT_EPSILON, POSITION_CHANNEL, ROTATION_CHANNEL
from perfcap.utils.schema import Interpolation, Keyframe, Sample

logger = logging.getLogger(__name__)


def position_signal(positions: np.ndarray) -> np.ndarray:
    """Euclidean magnitude of each [N, 3] position row."""
    positions = np.asarray(positions, dtype=np.float64)
    return np.sqrt(np.sum(positions * positions, axis=-1))


def rotation_signal(rotations: np.ndarray) -> np.ndarray:
    """Rotation angle of each [N, 4] quaternion row (x, y, z, w).

    |w| is clamped to 1 so values like 1.0000001 from accumulated float
    error give an angle of 0 instead of NaN.
    """
    rotations = np.asarray(rotations, dtype=np.float64)
    w = np.abs(rotations[..., 3])
    return 2.0 * np.arccos(np.minimum(1.0, w))


def _max_deviation(values: np.ndarray, start: int, end: int) -> tuple[int, float]:
    """Find the interior point farthest from the chord between start and end.

    Returns (index, deviation). Ties go to the lowest index. NaN deviations
    never win, and if nothing deviates above zero the result is (start, 0.0).
    """
    interior = np.arange(start + 1, end)
    t = (interior - start) / (end - start)

    start_val = values[start]
    end_val = values[end]
    with np.errstate(invalid="ignore", over="ignore"):
        interpolated = start_val + (end_val - start_val) * t
        dist = np.abs(values[start + 1 : end] - interpolated)
    dist = np.where(np.isnan(dist), 0.0, dist)

    best = int(np.argmax(dist))
    max_dist = float(dist[best])
    if max_dist > 0.0:
        return int(interior[best]), max_dist
    return start, 0.0


def rdp_indices(values: Sequence[float] | np.ndarray, epsilon: float = DEFAULT_EPSILON) -> set[int]:
    """1-D Ramer-Douglas-Peucker over a scalar signal.

    The signal is treated as points (i, values[i]). Returns the interior
    indices whose deviation from the enclosing chord exceeds epsilon. The two
    endpoints are never added here; callers force them in.

    Spans are processed from an explicit stack rather than by recursion, so
    long and jagged recordings cannot hit the interpreter's recursion limit.
    The resulting set is the same as the recursive formulation's.

    Raises:
        ValueError: If epsilon is negative.
    """
    if epsilon < 0:
        raise ValueError(f"epsilon must be non-negative, got {epsilon}")

    arr = np.asarray(values, dtype=np.float64)
    keep: set[int] = set()
    if len(arr) < 2:
        return keep

    spans = [(0, len(arr) - 1)]
    while spans:
        start, end = spans.pop()
        if end - start <= 1:
            continue

        max_idx, max_dist = _max_deviation(arr, start, end)
        if max_dist > epsilon:
            keep.add(max_idx)
            spans.append((max_idx, end))
            spans.append((start, max_idx))

    return keep


SIGNAL_PROJECTIONS: dict[str, Callable[[np.ndarray], np.ndarray]] = {
    POSITION_CHANNEL: position_signal,
    ROTATION_CHANNEL: rotation_signal,
}


def _channel_values(samples: Sequence[Sample], channel_path: str) -> list[tuple[float, ...]]:
    if channel_path == POSITION_CHANNEL:
        return [s.position for s in samples]
    return [s.rotation for s in samples]


def simplify_channel(
    samples: Sequence[Sample],
    channel_path: str,
    epsilon: float = DEFAULT_EPSILON,
) -> list[Keyframe]:
    """Reduce one channel of a sample stream to a minimal keyframe list.

    Args:
        samples: Time-ordered samples of a single entity.
        channel_path: POSITION_CHANNEL or ROTATION_CHANNEL.
        epsilon: Maximum allowed deviation of a dropped sample in the
                 projected scalar signal.

    Returns:
        Linear keyframes carrying the original full vector values. The first
        and last samples are always present.

    Raises:
        KeyError: If channel_path is not a known channel.
    """
    if channel_path not in SIGNAL_PROJECTIONS:
        raise KeyError(
            f"Unknown channel '{channel_path}'. Known: {list(SIGNAL_PROJECTIONS.keys())}"
        )

    values = _channel_values(samples, channel_path)

    if len(samples) <= 2:
        return [
            Keyframe(time=s.time, value=v, interpolation=Interpolation.LINEAR)
            for s, v in zip(samples, values)
        ]

    signal = SIGNAL_PROJECTIONS[channel_path](np.array(values, dtype=np.float64))
    keep = rdp_indices(signal, epsilon)
    keep.add(0)
    keep.add(len(samples) - 1)

    logger.debug(
        "%s: kept %d of %d samples (epsilon=%g)", channel_path, len(keep), len(samples), epsilon
    )

    return [
        Keyframe(time=samples[i].time, value=values[i], interpolation=Interpolation.LINEAR)
        for i in sorted(keep)
    ]
