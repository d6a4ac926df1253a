"""Interpolation helpers used to evaluate baked tracks between keyframes."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from perfcap.channels import SLERP_LINEAR_THRESHOLD


def lerp(a: float, b: float, t: float) -> float:
    """Scalar linear interpolation."""
    return a + (b - a) * t


def lerp_vec(a: Sequence[float], b: Sequence[float], t: float) -> tuple[float, ...]:
    """Component-wise linear interpolation of two equal-length vectors."""
    return tuple(lerp(float(x), float(y), t) for x, y in zip(a, b))


def slerp(a: Sequence[float], b: Sequence[float], t: float) -> tuple[float, ...]:
    """Spherical linear interpolation between two unit quaternions (x, y, z, w).

    Takes the shorter arc. Nearly parallel quaternions are blended linearly
    and renormalized, since sin(theta) approaches zero there.
    """
    qa = np.asarray(a, dtype=np.float64)
    qb = np.asarray(b, dtype=np.float64)

    dot = float(np.dot(qa, qb))
    if dot < 0.0:
        dot = -dot
        qb = -qb

    if dot > SLERP_LINEAR_THRESHOLD:
        result = qa + (qb - qa) * t
        return tuple(float(c) for c in result / np.linalg.norm(result))

    theta = np.arccos(dot)
    sin_theta = np.sin(theta)
    wa = np.sin((1.0 - t) * theta) / sin_theta
    wb = np.sin(t * theta) / sin_theta
    return tuple(float(c) for c in wa * qa + wb * qb)
