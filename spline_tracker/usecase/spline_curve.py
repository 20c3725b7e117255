"""커브 핸들 유스케이스.

CurveKernel 리소스 하나를 소유하며 수명 관리, 파생 스칼라 캐시,
점/미분 질의, 최근접점 탐색을 제공한다.

두 핸들이 같은 커널 리소스를 공유하는 일은 없다. 복사는 항상
커널 리소스의 깊은 복사이다. 내부 잠금은 없으므로 한 핸들을
여러 스레드에서 쓰려면 호출 측에서 직렬화해야 한다.
"""

from __future__ import annotations

from collections.abc import Sequence
import dataclasses
import logging
import math

import numpy as np

from spline_tracker.domain.entities.cached_scalar import CachedScalar
from spline_tracker.domain.enums import CurveKind
from spline_tracker.domain.exceptions import (
    ClosestPointSearchError,
    CurveConstructionError,
    CurveEvaluationError,
    CurveFitError,
    CurveNotInitializedError,
    DegenerateGeometryError,
    NoClosestPointError,
    ParameterDomainError,
)
from spline_tracker.domain.value_objects.closest_points import ClosestPoints
from spline_tracker.domain.value_objects.curve_properties import (
    CurveProperties,
)
from spline_tracker.domain.value_objects.frenet_frame import FrenetFrame
from spline_tracker.domain.value_objects.parameter_domain import (
    ParameterDomain,
)
from spline_tracker.usecase.ports.config_port import SplineConfig
from spline_tracker.usecase.ports.curve_kernel import CurveKernel, KernelCurve

logger = logging.getLogger(__name__)

_SIMPLIFY_ITERATIONS = 10
_MIN_HORIZONTAL_NORM = 1e-12


class SplineCurve:
    """파라메트릭 커브 핸들.

    Args:
        kernel: 커브 기하 커널.
        config: 차원, 차수, 기하 해상도 설정. None이면 기본값.

    Raises:
        ValueError: 차원이 2 또는 3이 아니거나, 차수가 2 미만이거나,
            기하 해상도가 양수가 아닐 때.
    """

    def __init__(
        self,
        kernel: CurveKernel,
        config: SplineConfig | None = None,
    ) -> None:
        config = config or SplineConfig()
        if config.dimension not in (2, 3):
            raise ValueError(
                f"dimension must be 2 or 3, got {config.dimension}"
            )
        if config.curve_order < 2:
            raise ValueError(
                f"curve_order must be at least 2, got {config.curve_order}"
            )
        if not config.geometric_resolution > 0.0:
            raise ValueError(
                "geometric_resolution must be positive, "
                f"got {config.geometric_resolution}"
            )

        self._kernel = kernel
        self._config = config
        self._curve: KernelCurve | None = None
        self._domain = ParameterDomain()
        self._length = CachedScalar()
        self._curvature_max = CachedScalar()

    @classmethod
    def from_kernel_curve(
        cls,
        kernel: CurveKernel,
        curve: KernelCurve,
        geometric_resolution: float,
    ) -> SplineCurve:
        """기존 커널 리소스의 소유권을 넘겨받아 핸들을 만든다.

        차원과 차수는 리소스에서 읽는다. 파라미터 도메인을 얻지 못하면
        리소스를 해제하고 CurveConstructionError를 발생시킨다.
        """
        start, end, status = kernel.parameter_domain(curve)
        if status != 0:
            kernel.release(curve)
            raise CurveConstructionError(
                "cannot get the curve start & end parameters "
                f"(status={status})"
            )

        info = kernel.curve_info(curve)
        try:
            handle = cls(
                kernel,
                SplineConfig(
                    dimension=info.dimension,
                    curve_order=info.order,
                    geometric_resolution=geometric_resolution,
                ),
            )
        except ValueError as e:
            kernel.release(curve)
            raise CurveConstructionError(str(e)) from e
        handle._curve = curve
        handle._domain = ParameterDomain(float(start), float(end))
        return handle

    # -- 수명 관리 --

    def copy(self) -> SplineCurve:
        """커널 리소스를 깊은 복사한 새 핸들을 반환한다."""
        clone = type(self)(self._kernel, self._config)
        if self._curve is not None:
            clone._curve = self._kernel.copy(self._curve)
        clone._domain = self._domain
        clone._length = dataclasses.replace(self._length)
        clone._curvature_max = dataclasses.replace(self._curvature_max)
        return clone

    def __copy__(self) -> SplineCurve:
        return self.copy()

    def __deepcopy__(self, memo: dict) -> SplineCurve:
        return self.copy()

    def clear(self) -> None:
        """커브를 해제하고 빈 상태로 되돌린다.

        캐시된 길이와 최대 곡률도 함께 무효화된다. 여러 번 호출해도
        리소스는 한 번만 해제된다.
        """
        if self._curve is not None:
            self._kernel.release(self._curve)
            self._curve = None
        self._domain = ParameterDomain()
        self._invalidate_caches()

    def __enter__(self) -> SplineCurve:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.clear()

    def __del__(self) -> None:
        if getattr(self, "_curve", None) is not None:
            self._kernel.release(self._curve)
            self._curve = None

    def fit(
        self,
        points: Sequence[float] | np.ndarray,
        parameters: Sequence[float] | None = None,
    ) -> None:
        """점 좌표로부터 커브를 새로 피팅하여 현재 커브를 교체한다.

        Args:
            points: 평탄화된 좌표 시퀀스 또는 (n, dimension) 배열.
            parameters: 점별 파라미터. 비어 있거나 None이면 커널이
                파라미터화를 정한다.

        Raises:
            CurveFitError: 좌표 형태가 맞지 않거나 커널이 실패했을 때.
        """
        coords = self._reshape_points(points)
        params = None
        if parameters is not None and len(parameters) > 0:
            if len(parameters) != len(coords):
                raise CurveFitError(
                    f"{len(parameters)} parameters given for "
                    f"{len(coords)} points"
                )
            params = [float(p) for p in parameters]

        self.clear()

        curve, end_param, status = self._kernel.fit(
            coords, self.dimension, self.curve_order, params
        )
        if status != 0:
            if curve is not None:
                self._kernel.release(curve)
            raise CurveFitError(
                f"cannot generate the curve (status={status})"
            )
        if not end_param > 0.0:
            self._kernel.release(curve)
            raise CurveFitError(
                f"fitted curve has an empty parameter domain [0, {end_param}]"
            )

        self._curve = curve
        self._domain = ParameterDomain(0.0, float(end_param))
        logger.debug(
            "Fitted curve through %d points, domain [0, %s]",
            len(coords), end_param,
        )

    def simplify(self, tolerance: float | None = None) -> list[float]:
        """커브를 tolerance 이내에서 단순화한 커브로 교체한다.

        Args:
            tolerance: 축별 허용 오차. None이면 기하 해상도.

        Returns:
            축별 최대 오차 (길이 3).
        """
        curve = self._require_curve()
        tol = self.geometric_resolution if tolerance is None else tolerance

        result, max_error, status = self._kernel.simplify(
            curve, tol, self.curve_order, _SIMPLIFY_ITERATIONS
        )
        if status != 0:
            if result is not None:
                self._kernel.release(result)
            raise CurveEvaluationError(
                f"kernel error while simplifying a curve (status={status})"
            )

        start, end, status = self._kernel.parameter_domain(result)
        if status != 0:
            self._kernel.release(result)
            raise CurveEvaluationError(
                "cannot get the simplified curve parameters "
                f"(status={status})"
            )

        self._kernel.release(curve)
        self._curve = result
        self._domain = ParameterDomain(float(start), float(end))
        self._invalidate_caches()
        logger.info(
            "Simplified curve at tolerance %s, max error %s",
            tol, list(max_error),
        )
        return [float(e) for e in max_error]

    # -- 속성 --

    @property
    def config(self) -> SplineConfig:
        return self._config

    @property
    def dimension(self) -> int:
        return self._config.dimension

    @property
    def curve_order(self) -> int:
        return self._config.curve_order

    @property
    def geometric_resolution(self) -> float:
        return self._config.geometric_resolution

    @property
    def parameter_domain(self) -> ParameterDomain:
        return self._domain

    @property
    def start_param(self) -> float:
        return self._domain.start

    @property
    def end_param(self) -> float:
        return self._domain.end

    @property
    def is_empty(self) -> bool:
        return self._curve is None

    @property
    def point_count(self) -> int:
        return self._kernel.curve_info(self._require_curve()).point_count

    @property
    def kind(self) -> CurveKind:
        return CurveKind(self._kernel.curve_info(self._require_curve()).kind)

    @property
    def is_nurbs(self) -> bool:
        return self.kind.is_rational

    def describe(self) -> CurveProperties:
        """진단용 커브 속성 요약을 반환한다."""
        info = self._kernel.curve_info(self._require_curve())
        return CurveProperties(
            point_count=info.point_count,
            order=info.order,
            dimension=info.dimension,
            kind=CurveKind(info.kind),
            start_param=self.start_param,
            end_param=self.end_param,
            length=self.curve_length(),
        )

    # -- 파생 스칼라 (캐시) --

    def curve_length(self) -> float:
        """전체 호 길이. 커브가 교체될 때까지 캐시된다."""
        cached = self._length.get()
        if cached is not None:
            return cached

        length, status = self._kernel.arc_length(
            self._require_curve(), self.geometric_resolution
        )
        if status != 0:
            raise CurveEvaluationError(
                f"cannot get the curve length (status={status})"
            )
        return self._length.set(float(length))

    def unit_parameter(self) -> float:
        """호 길이 1에 해당하는 파라미터 증분."""
        length = self.curve_length()
        if length == 0.0:
            raise CurveEvaluationError(
                "curve length is zero, unit parameter is undefined"
            )
        return self._domain.span / length

    def curvature_max(self) -> float:
        """도메인 전체를 샘플링한 최대 곡률.

        샘플 간격은 unit_parameter * geometric_resolution이며 반복 덧셈으로
        누적한다. 마지막 샘플은 end_param 이하이고 end_param과 정확히
        일치한다는 보장은 없다.
        """
        cached = self._curvature_max.get()
        if cached is not None:
            return cached

        step = self.unit_parameter() * self.geometric_resolution
        if not step > 0.0:
            raise CurveEvaluationError(
                f"invalid curvature sampling step {step}"
            )

        curvature_max = 0.0
        param = self.start_param
        while param <= self.end_param:
            curvature = self.curvature(param)
            if curvature > curvature_max:
                curvature_max = curvature
            param += step

        return self._curvature_max.set(curvature_max)

    # -- 점 / 미분 질의 --

    def point(self, param: float) -> np.ndarray:
        """param에서의 위치 벡터 (길이 dimension)."""
        curve = self._require_param(param)
        result, status = self._kernel.evaluate_point(curve, param)
        if status != 0:
            raise CurveEvaluationError(
                f"kernel error while computing a curve point (status={status})"
            )
        return np.array(result, dtype=float)

    def curvature(self, param: float) -> float:
        curve = self._require_param(param)
        value, status = self._kernel.evaluate_curvature(curve, param)
        if status != 0:
            raise CurveEvaluationError(
                f"kernel error while computing a curvature (status={status})"
            )
        return float(value)

    def curvature_variation(self, param: float) -> float:
        curve = self._require_param(param)
        value, status = self._kernel.evaluate_curvature_variation(
            curve, param
        )
        if status != 0:
            raise CurveEvaluationError(
                "kernel error while computing a variation of curvature "
                f"(status={status})"
            )
        return float(value)

    def frenet_frame(self, param: float) -> FrenetFrame:
        """param에서의 Frenet 프레임.

        Raises:
            ParameterDomainError: param이 도메인 밖일 때.
            CurveEvaluationError: 커널이 프레임을 계산하지 못했을 때.
        """
        curve = self._require_param(param)
        (tangent, normal, binormal), status = (
            self._kernel.evaluate_frenet_frame(curve, param)
        )
        if status != 0:
            raise CurveEvaluationError(
                "kernel error while computing a Frenet frame "
                f"(status={status})"
            )
        return FrenetFrame(
            tangent=_as_triple(tangent),
            normal=_as_triple(normal),
            binormal=_as_triple(binormal),
        )

    def heading(self, param: float) -> float:
        """접선을 수평면에 투영한 방위각 (rad).

        Raises:
            DegenerateGeometryError: 접선의 수평 성분 길이가 0일 때.
        """
        tangent = self.frenet_frame(param).tangent
        norm = math.hypot(tangent[0], tangent[1])
        if norm < _MIN_HORIZONTAL_NORM:
            raise DegenerateGeometryError(
                f"tangent at param {param} has no horizontal component"
            )
        return math.atan2(tangent[1] / norm, tangent[0] / norm)

    # -- 최근접점 탐색 --

    def closest_points_global(
        self,
        ref_point: Sequence[float] | np.ndarray,
        geores: float | None = None,
    ) -> ClosestPoints:
        """ref_point에 가장 가까운 커브 위 파라미터를 전역 탐색한다.

        Args:
            ref_point: 기준점. 앞의 dimension 개 성분만 사용한다.
            geores: 모호성/거리 허용 오차. None이면 기하 해상도.

        Returns:
            고립 최근접 파라미터와 모호한 구간 목록.
        """
        curve = self._require_curve()
        tol = self.geometric_resolution if geores is None else geores
        points, segments, status = self._kernel.closest_points_global(
            curve, self._as_point(ref_point), tol, tol
        )
        if status != 0:
            raise ClosestPointSearchError(
                f"failed to find the closest points (status={status})"
            )
        return ClosestPoints(
            points=tuple(float(p) for p in points),
            segments=tuple((float(a), float(b)) for a, b in segments),
        )

    def closest_point_single(
        self,
        ref_point: Sequence[float] | np.ndarray,
        geores: float | None = None,
    ) -> float:
        """전역 탐색 결과 중 하나의 파라미터를 반환한다.

        고립점이 있으면 첫 번째 고립점, 없으면 첫 번째 모호 구간의 시작.
        """
        result = self.closest_points_global(ref_point, geores)
        if result.points:
            return result.points[0]
        if result.segments:
            return result.segments[0][0]
        raise NoClosestPointError(
            "no closest point returned by the global search"
        )

    def closest_point_local(
        self,
        ref_point: Sequence[float] | np.ndarray,
        guess: float,
        window_start: float,
        window_end: float,
        geores: float | None = None,
    ) -> float:
        """[window_start, window_end] 안에서 guess부터 국소 탐색한다.

        실시간 재추적용이다. 커널 상태가 음수일 때만 실패로 보고,
        양수 상태는 경고로 기록하고 결과를 그대로 쓴다.
        """
        curve = self._require_curve()
        tol = self.geometric_resolution if geores is None else geores
        param, status = self._kernel.closest_point_local(
            curve, self._as_point(ref_point), guess,
            window_start, window_end, tol,
        )
        if status < 0:
            raise ClosestPointSearchError(
                f"failed to find the closest point (status={status})"
            )
        if status > 0:
            logger.debug(
                "Local closest point search returned warning status %d "
                "in window [%s, %s]", status, window_start, window_end,
            )
        return float(param)

    # -- 내부 --

    def _require_curve(self) -> KernelCurve:
        if self._curve is None:
            raise CurveNotInitializedError("the curve is not initialized")
        return self._curve

    def _require_param(self, param: float) -> KernelCurve:
        curve = self._require_curve()
        if not self._domain.contains(param):
            raise ParameterDomainError(
                f"param {param} is not in the "
                f"[{self.start_param}, {self.end_param}] range"
            )
        return curve

    def _invalidate_caches(self) -> None:
        self._length.invalidate()
        self._curvature_max.invalidate()

    def _reshape_points(
        self, points: Sequence[float] | np.ndarray
    ) -> np.ndarray:
        coords = np.asarray(points, dtype=float)
        if coords.ndim == 1:
            if coords.size % self.dimension != 0:
                raise CurveFitError(
                    f"{coords.size} coordinates cannot be split into "
                    f"{self.dimension}-dimensional points"
                )
            coords = coords.reshape(-1, self.dimension)
        elif coords.ndim != 2 or coords.shape[1] != self.dimension:
            raise CurveFitError(
                f"points of shape {coords.shape} do not match "
                f"dimension {self.dimension}"
            )
        return coords

    def _as_point(self, point: Sequence[float] | np.ndarray) -> np.ndarray:
        coords = np.asarray(point, dtype=float).ravel()
        if coords.size < self.dimension:
            raise ValueError(
                f"point has {coords.size} components, "
                f"expected at least {self.dimension}"
            )
        return coords[:self.dimension]

    def __repr__(self) -> str:
        if self._curve is None:
            return (
                f"SplineCurve(dimension={self.dimension}, "
                f"order={self.curve_order}, empty)"
            )
        return (
            f"SplineCurve(dimension={self.dimension}, "
            f"order={self.curve_order}, "
            f"domain=[{self.start_param}, {self.end_param}])"
        )


def _as_triple(vector) -> tuple[float, float, float]:
    values = [float(v) for v in vector]
    values += [0.0] * (3 - len(values))
    return (values[0], values[1], values[2])
