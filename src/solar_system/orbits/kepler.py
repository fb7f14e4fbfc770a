"""Kepler equation solvers and orbital-plane positions for conic orbits.

Distances are in AU, times in days, angles in radians. The three conic
branches are selected by eccentricity: ``e < 1`` ellipse, ``e == 1``
parabola (semi-major axis undefined), ``e > 1`` hyperbola.
"""

from __future__ import annotations

import logging
import math

from solar_system.constants import GAUSS_GRAV_CONSTANT

logger = logging.getLogger(__name__)

TWOPI = 2.0 * math.pi
KEPLER_TOLERANCE = 1e-14
KEPLER_MAX_ITER = 100


def solve_kepler_elliptic(
    mean_anomaly: float,
    eccentricity: float,
    tol: float = KEPLER_TOLERANCE,
    max_iter: int = KEPLER_MAX_ITER,
) -> float:
    """Solve M = E - e*sin(E) for the eccentric anomaly E (Newton iteration).

    The starting guess is M + e*sin(M) for moderate eccentricity and +/-pi for
    e >= 0.8, where Newton's method converges monotonically for any M.

    Parameters:
        mean_anomaly: Mean anomaly M (radians, any range).
        eccentricity: Eccentricity, 0 <= e < 1.
        tol: Convergence tolerance on the Newton step (radians).
        max_iter: Iteration limit.

    Returns:
        Eccentric anomaly E (radians) on the same revolution as ``mean_anomaly``.

    Raises:
        ValueError: If eccentricity is outside [0, 1).
    """
    e = eccentricity
    if not 0.0 <= e < 1.0:
        raise ValueError(f'elliptic Kepler solve needs 0 <= e < 1, got {e!r}')
    m = math.remainder(mean_anomaly, TWOPI)
    if e < 0.8:
        ecc_anom = m + e * math.sin(m)
    else:
        ecc_anom = math.copysign(math.pi, m) if m != 0.0 else 0.0
    for _ in range(max_iter):
        step = (ecc_anom - e * math.sin(ecc_anom) - m) / (1.0 - e * math.cos(ecc_anom))
        ecc_anom -= step
        if abs(step) <= tol:
            break
    else:
        logger.debug('Kepler solve not converged: M=%r e=%r last step=%r', m, e, step)
    return ecc_anom + (mean_anomaly - m)


def solve_kepler_hyperbolic(
    mean_anomaly: float,
    eccentricity: float,
    tol: float = KEPLER_TOLERANCE,
    max_iter: int = KEPLER_MAX_ITER,
) -> float:
    """Solve M = e*sinh(H) - H for the hyperbolic anomaly H (Newton iteration).

    Parameters:
        mean_anomaly: Hyperbolic mean anomaly M (radians).
        eccentricity: Eccentricity, e > 1.
        tol: Convergence tolerance on the Newton step.
        max_iter: Iteration limit.

    Returns:
        Hyperbolic anomaly H.

    Raises:
        ValueError: If eccentricity is not greater than 1.
    """
    e = eccentricity
    if e <= 1.0:
        raise ValueError(f'hyperbolic Kepler solve needs e > 1, got {e!r}')
    m = mean_anomaly
    hyp_anom = math.copysign(math.log(2.0 * abs(m) / e + 1.8), m)
    for _ in range(max_iter):
        step = (e * math.sinh(hyp_anom) - hyp_anom - m) / (e * math.cosh(hyp_anom) - 1.0)
        hyp_anom -= step
        if abs(step) <= tol * max(1.0, abs(hyp_anom)):
            break
    return hyp_anom


def solve_barker(w: float) -> float:
    """Solve Barker's equation s**3 + 3*s = 2*w for s = tan(true_anomaly / 2).

    Parameters:
        w: Parabolic mean motion times time since pericenter.

    Returns:
        s = tan(nu / 2).
    """
    if w < 0.0:
        return -solve_barker(-w)
    y = (w + math.sqrt(w * w + 1.0)) ** (1.0 / 3.0)
    return y - 1.0 / y


def mean_motion_from_pericenter(pericenter_distance: float, eccentricity: float) -> float:
    """Heliocentric mean motion (rad/day) from the Gaussian gravitational constant.

    For a parabola this is the parabolic rate k * (1.5 / q) * sqrt(0.5 / q)
    used by ``solve_barker``.

    Parameters:
        pericenter_distance: q in AU.
        eccentricity: e.

    Returns:
        Mean motion in radians per day.
    """
    q = pericenter_distance
    if eccentricity == 1.0:
        return GAUSS_GRAV_CONSTANT * (1.5 / q) * math.sqrt(0.5 / q)
    a = abs(q / (1.0 - eccentricity))
    return GAUSS_GRAV_CONSTANT / (a * math.sqrt(a))


def plane_position(
    pericenter_distance: float,
    eccentricity: float,
    mean_motion: float,
    time_since_pericenter: float,
) -> tuple[float, float]:
    """Position in the orbital plane, x toward pericenter (AU).

    Parameters:
        pericenter_distance: q in AU.
        eccentricity: e >= 0.
        mean_motion: n in rad/day (parabolic rate when e == 1).
        time_since_pericenter: Days since pericenter passage.

    Returns:
        (x, y) in the orbital plane.
    """
    q = pericenter_distance
    e = eccentricity
    if e < 1.0:
        a = q / (1.0 - e)
        ecc_anom = solve_kepler_elliptic(mean_motion * time_since_pericenter, e)
        x = a * (math.cos(ecc_anom) - e)
        y = a * math.sqrt(1.0 - e * e) * math.sin(ecc_anom)
    elif e == 1.0:
        s = solve_barker(mean_motion * time_since_pericenter)
        x = q * (1.0 - s * s)
        y = 2.0 * q * s
    else:
        a = q / (e - 1.0)
        hyp_anom = solve_kepler_hyperbolic(mean_motion * time_since_pericenter, e)
        x = a * (e - math.cosh(hyp_anom))
        y = a * math.sqrt(e * e - 1.0) * math.sinh(hyp_anom)
    return (x, y)
