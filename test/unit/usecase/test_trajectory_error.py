"""TrajectoryErrorModel 유스케이스 단위 테스트."""

import math

import numpy as np
import pytest

from spline_tracker.domain.exceptions import ClosestPointSearchError
from spline_tracker.domain.value_objects.pose_error import PoseError
from spline_tracker.usecase.trajectory_error import (
    TrajectoryErrorModel,
    wrap_angle,
)


@pytest.fixture
def model(fitted_curve):
    return TrajectoryErrorModel(fitted_curve)


class TestWrapAngle:
    @pytest.mark.parametrize(
        "raw", np.linspace(math.pi + 1e-6, 3 * math.pi - 1e-6, 25)
    )
    def test_wraps_into_half_open_interval(self, raw):
        wrapped = wrap_angle(raw)
        assert -math.pi < wrapped <= math.pi
        assert wrapped == pytest.approx(raw - 2 * math.pi)

    @pytest.mark.parametrize(
        "raw", np.linspace(-3 * math.pi + 1e-6, -math.pi - 1e-6, 25)
    )
    def test_wraps_negative(self, raw):
        wrapped = wrap_angle(raw)
        assert -math.pi < wrapped <= math.pi

    def test_minus_pi_maps_to_pi(self):
        assert wrap_angle(-math.pi) == pytest.approx(math.pi)

    def test_pi_is_kept(self):
        assert wrap_angle(math.pi) == math.pi

    def test_in_range_unchanged(self):
        assert wrap_angle(0.3) == 0.3


class TestHeadingError:
    def test_simple_difference(self, model):
        # mock 커브 접선은 +X (heading 0)
        assert model.heading_error(0.4, 1.0) == pytest.approx(0.4)

    def test_wrapped(self, model):
        assert model.heading_error(3.5, 1.0) == pytest.approx(
            3.5 - 2 * math.pi
        )
        assert model.heading_error(-3.5, 1.0) == pytest.approx(
            -3.5 + 2 * math.pi
        )


class TestDistanceError:
    def test_left_of_path_is_positive(self, model):
        # mock 커브 점은 (1, 2, 0)
        assert model.distance_error([1.0, 3.0, 0.0], 1.0) == pytest.approx(1.0)

    def test_right_of_path_is_negative(self, model):
        assert model.distance_error([1.0, 1.0, 0.0], 1.0) == pytest.approx(
            -1.0
        )

    def test_vertical_component_ignored(self, model):
        assert model.distance_error([1.0, 3.0, 50.0], 1.0) == pytest.approx(
            1.0
        )

    def test_on_path_is_zero(self, model):
        assert model.distance_error([1.0, 2.0, 7.0], 1.0) == 0.0

    def test_planar_point_accepted(self, model):
        assert model.distance_error([4.0, 6.0], 1.0) == pytest.approx(5.0)


class TestPoseError:
    def test_search_window(self, model, mock_kernel):
        result = model.pose_error([1.0, 3.0, 0.0], 0.2, 2.0, 4.0)

        # unit_parameter = 10 / 20 = 0.5, window = [2.0, 2.0 + 0.5 * 4.0]
        _, _, guess, start, end, tolerance = (
            mock_kernel.closest_point_local.call_args[0]
        )
        assert (guess, start, end) == (2.0, 2.0, 4.0)
        assert tolerance == 0.1
        assert isinstance(result, PoseError)
        assert result.param == 3.0
        assert result.distance_error == pytest.approx(1.0)
        assert result.heading_error == pytest.approx(0.2)

    def test_search_failure_propagates(self, model, mock_kernel):
        mock_kernel.closest_point_local.return_value = (0.0, -2)
        with pytest.raises(ClosestPointSearchError):
            model.pose_error([0.0, 0.0, 0.0], 0.0, 0.0, 1.0)


class TestStraightLine:
    def test_point_left_of_start(self, line_curve):
        model = TrajectoryErrorModel(line_curve)

        distance, heading, param = model.pose_error(
            [0.0, 1.0, 0.0], 0.0, line_curve.start_param, 5.0,
        )

        assert distance == pytest.approx(1.0, abs=1e-6)
        assert heading == pytest.approx(0.0, abs=1e-6)
        assert param == pytest.approx(line_curve.start_param, abs=1e-6)

    def test_point_right_and_ahead(self, line_curve):
        model = TrajectoryErrorModel(line_curve)

        result = model.pose_error([3.0, -0.5, 0.0], 0.1, 2.0, 5.0)

        assert result.param == pytest.approx(3.0, abs=1e-4)
        assert result.distance_error == pytest.approx(-0.5, abs=1e-4)
        assert result.heading_error == pytest.approx(0.1, abs=1e-6)

    def test_window_limits_forward_search(self, line_curve):
        model = TrajectoryErrorModel(line_curve)

        result = model.pose_error([8.0, 0.0, 0.0], 0.0, 2.0, 1.5)

        assert result.param == pytest.approx(3.5, abs=1e-6)

    def test_sign_when_path_heads_west(self, line_curve):
        westward = line_curve.copy()
        westward.fit([[float(x), 0.0, 0.0] for x in range(10, -1, -1)])
        model = TrajectoryErrorModel(westward)

        # 서쪽으로 진행할 때 왼쪽은 -Y
        assert model.distance_error([5.0, -1.0, 0.0], 5.0) == pytest.approx(
            1.0, abs=1e-6
        )
        assert model.distance_error([5.0, 1.0, 0.0], 5.0) == pytest.approx(
            -1.0, abs=1e-6
        )
