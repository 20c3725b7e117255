"""Spline Tracker 값 객체 (불변, 동등성 기반 비교)."""

from spline_tracker.domain.value_objects.closest_points import ClosestPoints
from spline_tracker.domain.value_objects.curve_properties import (
    CurveInfo,
    CurveProperties,
)
from spline_tracker.domain.value_objects.frenet_frame import FrenetFrame
from spline_tracker.domain.value_objects.parameter_domain import (
    ParameterDomain,
)
from spline_tracker.domain.value_objects.pose_error import PoseError

__all__ = [
    "ClosestPoints",
    "CurveInfo",
    "CurveProperties",
    "FrenetFrame",
    "ParameterDomain",
    "PoseError",
]
