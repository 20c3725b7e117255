"""값 객체 단위 테스트."""

import math

import numpy as np

from spline_tracker.domain.enums import CurveKind
from spline_tracker.domain.value_objects.closest_points import ClosestPoints
from spline_tracker.domain.value_objects.curve_properties import CurveInfo
from spline_tracker.domain.value_objects.frenet_frame import FrenetFrame
from spline_tracker.domain.value_objects.parameter_domain import (
    ParameterDomain,
)
from spline_tracker.domain.value_objects.pose_error import PoseError


class TestParameterDomain:
    def test_default_is_empty_at_zero(self):
        domain = ParameterDomain()
        assert domain.start == 0.0
        assert domain.end == 0.0
        assert domain.span == 0.0

    def test_contains_is_closed_interval(self):
        domain = ParameterDomain(1.0, 3.0)
        assert domain.contains(1.0)
        assert domain.contains(3.0)
        assert domain.contains(2.0)
        assert not domain.contains(0.999)
        assert not domain.contains(3.001)

    def test_frozen(self):
        domain = ParameterDomain(0.0, 1.0)
        try:
            domain.end = 5.0
            assert False, "Should raise FrozenInstanceError"
        except AttributeError:
            pass


class TestFrenetFrame:
    def test_as_matrix_rows(self):
        frame = FrenetFrame(
            tangent=(1.0, 0.0, 0.0),
            normal=(0.0, 1.0, 0.0),
            binormal=(0.0, 0.0, 1.0),
        )
        matrix = frame.as_matrix()
        assert matrix.shape == (3, 3)
        np.testing.assert_array_equal(matrix, np.eye(3))


class TestPoseError:
    def test_unpacks_as_triple(self):
        distance, heading, param = PoseError(1.0, -0.5, 2.0)
        assert distance == 1.0
        assert heading == -0.5
        assert param == 2.0

    def test_equality(self):
        assert PoseError(1.0, math.pi, 0.0) == PoseError(1.0, math.pi, 0.0)


class TestClosestPoints:
    def test_empty(self):
        result = ClosestPoints()
        assert result.is_empty
        assert not result.is_ambiguous

    def test_ambiguous_when_segments(self):
        result = ClosestPoints(segments=((0.0, 1.0),))
        assert not result.is_empty
        assert result.is_ambiguous


class TestCurveInfo:
    def test_defaults(self):
        info = CurveInfo(dimension=2, order=4)
        assert info.kind == CurveKind.POLYNOMIAL_OPEN
        assert info.point_count == 0
