"""Spline Tracker 도메인 엔티티."""

from spline_tracker.domain.entities.cached_scalar import CachedScalar

__all__ = ["CachedScalar"]
