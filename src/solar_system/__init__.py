"""Solar System body catalogue and ephemeris core.

This package loads a hierarchical catalogue of Solar System bodies and
computes, per simulation step:
- Heliocentric positions with a light-time correction relative to an observer
- Orientation (model) matrices from each body's rotation elements
- The solar illumination factor at the observer (eclipses)

Vectors use numpy, SPICE services come from cspyce, and time scales from
rms-julian.
"""

__all__: list[str] = []
