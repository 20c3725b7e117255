"""공통 테스트 fixture."""

import math
from unittest.mock import MagicMock

import numpy as np
import pytest

from spline_tracker.domain.value_objects.curve_properties import CurveInfo
from spline_tracker.infra.kernel.scipy_kernel import ScipyCurveKernel
from spline_tracker.usecase.ports.config_port import SplineConfig
from spline_tracker.usecase.ports.curve_kernel import CurveKernel
from spline_tracker.usecase.spline_curve import SplineCurve


@pytest.fixture
def mock_kernel():
    """도메인 [0, 10], 길이 20인 커브를 돌려주는 커널 mock."""
    kernel = MagicMock(spec=CurveKernel)
    kernel.fit.return_value = (MagicMock(name="curve"), 10.0, 0)
    kernel.copy.side_effect = lambda curve: MagicMock(name="curve_copy")
    kernel.parameter_domain.return_value = (0.0, 10.0, 0)
    kernel.curve_info.return_value = CurveInfo(
        dimension=3, order=3, point_count=5,
    )
    kernel.evaluate_point.return_value = (np.array([1.0, 2.0, 0.0]), 0)
    kernel.evaluate_curvature.return_value = (0.5, 0)
    kernel.evaluate_curvature_variation.return_value = (0.1, 0)
    kernel.evaluate_frenet_frame.return_value = (
        (
            np.array([1.0, 0.0, 0.0]),
            np.array([0.0, 1.0, 0.0]),
            np.array([0.0, 0.0, 1.0]),
        ),
        0,
    )
    kernel.arc_length.return_value = (20.0, 0)
    kernel.closest_points_global.return_value = ([2.5], [], 0)
    kernel.closest_point_local.return_value = (3.0, 0)
    kernel.simplify.return_value = (
        MagicMock(name="simplified"), [0.01, 0.02, 0.0], 0,
    )
    return kernel


@pytest.fixture
def sample_config():
    return SplineConfig(dimension=3, curve_order=3, geometric_resolution=0.1)


@pytest.fixture
def fitted_curve(mock_kernel, sample_config):
    curve = SplineCurve(mock_kernel, sample_config)
    curve.fit(np.zeros((5, 3)))
    return curve


@pytest.fixture
def scipy_kernel():
    return ScipyCurveKernel()


@pytest.fixture
def line_curve(scipy_kernel):
    """X축을 따라 (0,0,0)에서 (10,0,0)까지의 직선."""
    curve = SplineCurve(
        scipy_kernel,
        SplineConfig(dimension=3, curve_order=4, geometric_resolution=0.001),
    )
    curve.fit([[float(x), 0.0, 0.0] for x in range(11)])
    return curve


@pytest.fixture
def arc_curve(scipy_kernel):
    """원점 중심, 반지름 2의 반원 (반시계 방향)."""
    curve = SplineCurve(
        scipy_kernel,
        SplineConfig(dimension=3, curve_order=4, geometric_resolution=0.001),
    )
    angles = np.linspace(0.0, math.pi, 73)
    curve.fit(
        np.column_stack(
            [2.0 * np.cos(angles), 2.0 * np.sin(angles), np.zeros(73)]
        )
    )
    return curve
