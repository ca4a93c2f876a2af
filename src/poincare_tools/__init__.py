"""Stokes-parameter trajectory maps on the Poincare sphere.

This package turns sequences of Stokes triplets (s1, s2, s3) into a vector
drawing of the trajectories projected onto a rotated, Phong-shaded sphere:
- Frame transform and visibility classification for a two-angle view
- Segmentation of trajectories into hidden and visible runs
- Tick marks, labels, geodesic arrows, equators and coordinate axes
- MetaPost output (optionally compiled to EPS) and a matplotlib preview

The geometry is pure and computed in memory before anything is written.
"""

__all__: list[str] = []
