"""numpy/scipy 기반 CurveKernel 구현체.

보간 B-spline(scipy.interpolate.BSpline)을 커브 리소스로 사용한다.
상태 코드 규약:
    0: 성공.
    양수: 실패 (closest_point_local에서는 경고).
    음수: closest_point_local 입력/계산 실패.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import logging
import math

import numpy as np
from scipy.integrate import quad
from scipy.interpolate import BSpline, make_interp_spline, splprep
from scipy.optimize import minimize_scalar

from spline_tracker.domain.enums import CurveKind
from spline_tracker.domain.value_objects.curve_properties import CurveInfo
from spline_tracker.usecase.ports.curve_kernel import CurveKernel

logger = logging.getLogger(__name__)

STATUS_OK = 0
STATUS_INVALID_CURVE = 1
STATUS_TOO_FEW_POINTS = 2
STATUS_DEGENERATE_INPUT = 3
STATUS_INVALID_PARAMETERS = 4
STATUS_SOLVER_FAILED = 5
STATUS_NOT_CONVERGED = 1
STATUS_INVALID_WINDOW = -1
STATUS_WINDOW_OUTSIDE_CURVE = -2
STATUS_SINGULAR = -3

_EPSILON = 1e-12
_MIN_SAMPLES = 256
_MAX_SAMPLES = 20000
_SAMPLES_PER_SPAN = 64
_LOCAL_MAX_ITERATIONS = 50
_LOCAL_STEP_FRACTION = 1e-2
_FLAT_DISTANCE_RATIO = 0.05


@dataclass
class BSplineCurve:
    """커널이 관리하는 커브 리소스.

    Args:
        spline: 벡터값 B-spline. 해제되면 None.
        dimension: 공간 차원.
        kind: 커브 종류.
    """

    spline: BSpline | None
    dimension: int
    kind: CurveKind = CurveKind.POLYNOMIAL_OPEN

    @property
    def released(self) -> bool:
        return self.spline is None


class ScipyCurveKernel(CurveKernel):
    """CurveKernel의 scipy 구현체."""

    # -- 생성 / 수명 --

    def fit(
        self,
        points: np.ndarray,
        dimension: int,
        order: int,
        parameters: Sequence[float] | None = None,
    ) -> tuple[BSplineCurve | None, float, int]:
        coords = np.asarray(points, dtype=float).reshape(-1, dimension)
        degree = order - 1
        if degree < 1:
            logger.warning("Cannot fit a curve of order %d", order)
            return None, 0.0, STATUS_INVALID_PARAMETERS
        if len(coords) < order:
            logger.warning(
                "Cannot fit a curve of order %d through %d points",
                order, len(coords),
            )
            return None, 0.0, STATUS_TOO_FEW_POINTS

        if parameters is None:
            # 현 길이(chord length) 파라미터화
            chords = np.linalg.norm(np.diff(coords, axis=0), axis=1)
            if np.any(chords <= _EPSILON):
                logger.warning("Cannot fit a curve through repeated points")
                return None, 0.0, STATUS_DEGENERATE_INPUT
            params = np.concatenate(([0.0], np.cumsum(chords)))
        else:
            params = np.asarray(parameters, dtype=float)
            if len(params) != len(coords) or np.any(np.diff(params) <= 0.0):
                logger.warning("Curve parameters must be strictly increasing")
                return None, 0.0, STATUS_INVALID_PARAMETERS
            params = params - params[0]

        try:
            spline = make_interp_spline(params, coords, k=degree)
        except (ValueError, np.linalg.LinAlgError) as e:
            logger.warning("B-spline interpolation failed: %s", e)
            return None, 0.0, STATUS_SOLVER_FAILED

        curve = BSplineCurve(spline=spline, dimension=dimension)
        return curve, float(params[-1]), STATUS_OK

    def copy(self, curve: BSplineCurve) -> BSplineCurve:
        if curve.spline is None:
            return BSplineCurve(None, curve.dimension, curve.kind)
        spline = curve.spline
        return BSplineCurve(
            spline=BSpline(spline.t.copy(), spline.c.copy(), spline.k),
            dimension=curve.dimension,
            kind=curve.kind,
        )

    def release(self, curve: BSplineCurve) -> None:
        curve.spline = None

    def parameter_domain(
        self, curve: BSplineCurve
    ) -> tuple[float, float, int]:
        spline = curve.spline
        if spline is None:
            return 0.0, 0.0, STATUS_INVALID_CURVE
        start, end = _domain(spline)
        if not end > start:
            return start, end, STATUS_INVALID_CURVE
        return start, end, STATUS_OK

    def curve_info(self, curve: BSplineCurve) -> CurveInfo:
        spline = curve.spline
        if spline is None:
            return CurveInfo(
                dimension=curve.dimension, order=0, kind=curve.kind
            )
        return CurveInfo(
            dimension=curve.dimension,
            order=spline.k + 1,
            kind=curve.kind,
            point_count=len(spline.t) - spline.k - 1,
        )

    # -- 평가 --

    def evaluate_point(
        self, curve: BSplineCurve, param: float
    ) -> tuple[np.ndarray, int]:
        if curve.spline is None:
            return np.zeros(curve.dimension), STATUS_INVALID_CURVE
        point = np.asarray(curve.spline(param), dtype=float)
        if not np.all(np.isfinite(point)):
            return point, STATUS_SOLVER_FAILED
        return point, STATUS_OK

    def evaluate_curvature(
        self, curve: BSplineCurve, param: float
    ) -> tuple[float, int]:
        if curve.spline is None:
            return 0.0, STATUS_INVALID_CURVE
        d1, d2, _ = _derivatives(curve.spline, param)
        speed = np.linalg.norm(d1)
        if speed <= _EPSILON:
            return 0.0, STATUS_DEGENERATE_INPUT
        return float(np.linalg.norm(np.cross(d1, d2)) / speed**3), STATUS_OK

    def evaluate_curvature_variation(
        self, curve: BSplineCurve, param: float
    ) -> tuple[float, int]:
        """호 길이에 대한 곡률 변화율 d(kappa)/ds."""
        if curve.spline is None:
            return 0.0, STATUS_INVALID_CURVE
        d1, d2, d3 = _derivatives(curve.spline, param)
        speed = np.linalg.norm(d1)
        if speed <= _EPSILON:
            return 0.0, STATUS_DEGENERATE_INPUT

        cross12 = np.cross(d1, d2)
        cross_norm = np.linalg.norm(cross12)
        d_kappa_dt = -3.0 * cross_norm * np.dot(d1, d2) / speed**5
        if cross_norm > _EPSILON:
            d_kappa_dt += (
                np.dot(cross12, np.cross(d1, d3)) / (cross_norm * speed**3)
            )
        return float(d_kappa_dt / speed), STATUS_OK

    def evaluate_frenet_frame(
        self, curve: BSplineCurve, param: float
    ) -> tuple[tuple[np.ndarray, np.ndarray, np.ndarray], int]:
        zero = np.zeros(3)
        if curve.spline is None:
            return (zero, zero, zero), STATUS_INVALID_CURVE
        d1, d2, _ = _derivatives(curve.spline, param)
        speed = np.linalg.norm(d1)
        if speed <= _EPSILON:
            return (zero, zero, zero), STATUS_DEGENERATE_INPUT

        tangent = d1 / speed
        cross12 = np.cross(d1, d2)
        if np.linalg.norm(cross12) / speed**3 > _EPSILON:
            binormal = cross12 / np.linalg.norm(cross12)
            normal = np.cross(binormal, tangent)
        else:
            # 직선 구간: 접선의 왼쪽 수평 방향을 법선으로 사용
            normal = np.cross([0.0, 0.0, 1.0], tangent)
            if np.linalg.norm(normal) <= _EPSILON:
                normal = np.cross(tangent, [1.0, 0.0, 0.0])
            normal = normal / np.linalg.norm(normal)
            binormal = np.cross(tangent, normal)
        return (tangent, normal, binormal), STATUS_OK

    def arc_length(
        self, curve: BSplineCurve, tolerance: float
    ) -> tuple[float, int]:
        spline = curve.spline
        if spline is None:
            return 0.0, STATUS_INVALID_CURVE

        def speed(x: float) -> float:
            return float(np.linalg.norm(spline(x, nu=1)))

        breaks = _breakpoints(spline)
        length = 0.0
        for lo, hi in zip(breaks[:-1], breaks[1:]):
            value, _ = quad(speed, lo, hi, epsabs=tolerance, limit=100)
            length += value
        if not math.isfinite(length):
            return 0.0, STATUS_SOLVER_FAILED
        return length, STATUS_OK

    # -- 최근접점 탐색 --

    def closest_points_global(
        self,
        curve: BSplineCurve,
        ref_point: np.ndarray,
        ambiguity_tolerance: float,
        distance_tolerance: float,
    ) -> tuple[list[float], list[tuple[float, float]], int]:
        """조밀 샘플링으로 최근접 파라미터와 모호한 구간을 찾는다.

        최소 거리에서 distance_tolerance 이내인 샘플 구간마다 판정한다.
        최소점 근방의 거리는 d(s) ~ d0 + h * s**2 / (2 * d0) 이며
        (h = 1 - 곡률 * d0), 고립 최소점의 허용 오차 띠 길이는
        2 * sqrt(2 * d0 * tol / h) 이다. h가 _FLAT_DISTANCE_RATIO 이하일
        때에만 나올 수 있는 길이의 구간은 모호한 구간으로 돌려준다.
        """
        spline = curve.spline
        if spline is None:
            return [], [], STATUS_INVALID_CURVE
        ref = np.asarray(ref_point, dtype=float).ravel()
        if ref.size != curve.dimension:
            return [], [], STATUS_INVALID_PARAMETERS

        start, end = _domain(spline)
        spans = len(_breakpoints(spline)) - 1
        count = min(max(_MIN_SAMPLES, _SAMPLES_PER_SPAN * spans), _MAX_SAMPLES)
        params = np.linspace(start, end, count)
        positions = spline(params)
        distances = np.linalg.norm(positions - ref, axis=1)
        min_distance = distances.min()
        near = distances - min_distance <= distance_tolerance
        band = 2.0 * math.sqrt(
            2.0 * min_distance * distance_tolerance / _FLAT_DISTANCE_RATIO
        )

        points: list[float] = []
        segments: list[tuple[float, float]] = []
        for first, last in _runs(near):
            run_length = float(np.sum(np.linalg.norm(
                np.diff(positions[first:last + 1], axis=0), axis=1
            )))
            is_segment = (
                last > first
                and min_distance > ambiguity_tolerance
                and run_length > band
            )
            if is_segment:
                segments.append((float(params[first]), float(params[last])))
                continue

            best = first + int(np.argmin(distances[first:last + 1]))
            lo = params[max(best - 1, 0)]
            hi = params[min(best + 1, count - 1)]
            points.append(self._refine(spline, ref, lo, hi, start, end))

        return sorted(points), segments, STATUS_OK

    def closest_point_local(
        self,
        curve: BSplineCurve,
        ref_point: np.ndarray,
        guess: float,
        window_start: float,
        window_end: float,
        tolerance: float,
    ) -> tuple[float, int]:
        """창 안으로 제한한 Newton 반복.

        g(t) = dot(C(t) - p, C'(t)) 의 근을 찾는다.
        g'(t) = |C'|^2 + dot(C - p, C'') 가 양수가 아니면
        Gauss-Newton 근사 g'(t) ~ |C'|^2 를 쓴다.
        결과는 창의 양 끝점과 비교해 더 가까운 쪽을 돌려준다.
        """
        spline = curve.spline
        if spline is None:
            return guess, STATUS_INVALID_WINDOW
        if window_start > window_end:
            return guess, STATUS_INVALID_WINDOW

        start, end = _domain(spline)
        lo = max(window_start, start)
        hi = min(window_end, end)
        if lo > hi:
            return guess, STATUS_WINDOW_OUTSIDE_CURVE

        ref = np.asarray(ref_point, dtype=float).ravel()[:curve.dimension]
        param = min(max(guess, lo), hi)
        status = STATUS_NOT_CONVERGED
        for _ in range(_LOCAL_MAX_ITERATIONS):
            offset = spline(param) - ref
            velocity = spline(param, nu=1)
            speed_sq = float(np.dot(velocity, velocity))
            if speed_sq <= _EPSILON:
                return param, STATUS_SINGULAR

            slope = _distance_slope(spline, offset, velocity, param)
            if slope <= _EPSILON * speed_sq:
                slope = speed_sq

            step = -float(np.dot(offset, velocity)) / slope
            next_param = min(max(param + step, lo), hi)
            moved = abs(next_param - param) * math.sqrt(speed_sq)
            param = next_param
            if moved <= tolerance * _LOCAL_STEP_FRACTION:
                status = STATUS_OK
                break

        candidates = [param, lo, hi]
        offset = spline(param) - ref
        velocity = spline(param, nu=1)
        if _distance_slope(spline, offset, velocity, param) <= 0.0:
            # 거리 극대점에서 멈췄으므로 양쪽으로 다시 내려간다
            candidates.append(self._refine(spline, ref, lo, param, start, end))
            candidates.append(self._refine(spline, ref, param, hi, start, end))
        best = min(candidates, key=lambda x: _distance(spline, ref, x))
        return float(best), status

    def simplify(
        self,
        curve: BSplineCurve,
        tolerance: float,
        order: int,
        iterations: int,
    ) -> tuple[BSplineCurve | None, list[float], int]:
        """평활 B-spline 재피팅으로 제어점 수를 줄인다.

        평활 계수를 반복마다 절반으로 줄이고, 마지막 반복은 보간(s=0)이다.
        """
        spline = curve.spline
        if spline is None or iterations < 1:
            return None, [0.0, 0.0, 0.0], STATUS_INVALID_CURVE
        degree = order - 1
        if not 1 <= degree <= 5:
            return None, [0.0, 0.0, 0.0], STATUS_INVALID_PARAMETERS

        start, end = _domain(spline)
        count = max(_MIN_SAMPLES, 4 * (len(spline.t) - spline.k - 1))
        params = np.linspace(start, end, count)
        samples = spline(params)
        smoothing = count * tolerance**2

        result = None
        max_error = np.zeros(curve.dimension)
        for iteration in range(iterations):
            s = 0.0 if iteration == iterations - 1 else smoothing
            try:
                (knots, coeffs, k), _ = splprep(
                    list(samples.T), u=params, k=degree, s=s
                )
            except ValueError as e:
                logger.warning("Smoothing spline fit failed: %s", e)
                return None, [0.0, 0.0, 0.0], STATUS_SOLVER_FAILED

            n_coeffs = len(knots) - k - 1
            coeffs = np.asarray(coeffs, dtype=float).T[:n_coeffs]
            result = BSpline(knots, coeffs, k)
            max_error = np.max(np.abs(result(params) - samples), axis=0)
            if np.all(max_error <= tolerance):
                break
            smoothing *= 0.5

        errors = [float(e) for e in max_error] + [0.0] * (3 - curve.dimension)
        return (
            BSplineCurve(spline=result, dimension=curve.dimension,
                         kind=curve.kind),
            errors,
            STATUS_OK,
        )

    # -- 내부 --

    def _refine(
        self,
        spline: BSpline,
        ref: np.ndarray,
        lo: float,
        hi: float,
        start: float,
        end: float,
    ) -> float:
        """[lo, hi] 안에서 거리 최소 파라미터를 Brent 탐색으로 찾는다."""

        def distance(x: float) -> float:
            return _distance(spline, ref, x)

        candidates = [lo, hi]
        if hi > lo:
            result = minimize_scalar(
                distance,
                bounds=(lo, hi),
                method="bounded",
                options={"xatol": max(_EPSILON, 1e-9 * (end - start))},
            )
            candidates.append(float(result.x))
        # 양 끝점은 Brent 탐색이 정확히 도달하지 않으므로 직접 비교
        candidates = [c for c in candidates if start <= c <= end]
        return float(min(candidates, key=distance))


def _domain(spline: BSpline) -> tuple[float, float]:
    k = spline.k
    return float(spline.t[k]), float(spline.t[len(spline.t) - k - 1])


def _breakpoints(spline: BSpline) -> np.ndarray:
    k = spline.k
    return np.unique(spline.t[k:len(spline.t) - k])


def _derivatives(
    spline: BSpline, param: float
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """1-3차 도함수를 3차원으로 확장해 반환한다."""
    values = []
    for nu in (1, 2, 3):
        if nu > spline.k:
            values.append(np.zeros(3))
            continue
        value = np.asarray(spline(param, nu=nu), dtype=float).ravel()
        values.append(np.pad(value, (0, 3 - value.size)))
    return values[0], values[1], values[2]


def _runs(mask: np.ndarray) -> list[tuple[int, int]]:
    """True가 연속된 구간의 (첫 인덱스, 마지막 인덱스) 목록."""
    runs = []
    first = None
    for i, flag in enumerate(mask):
        if flag and first is None:
            first = i
        elif not flag and first is not None:
            runs.append((first, i - 1))
            first = None
    if first is not None:
        runs.append((first, len(mask) - 1))
    return runs


def _distance(spline: BSpline, ref: np.ndarray, param: float) -> float:
    return float(np.linalg.norm(spline(param) - ref))


def _distance_slope(
    spline: BSpline,
    offset: np.ndarray,
    velocity: np.ndarray,
    param: float,
) -> float:
    """g(t) = dot(C - p, C')의 도함수 |C'|^2 + dot(C - p, C'')."""
    slope = float(np.dot(velocity, velocity))
    if spline.k >= 2:
        slope += float(np.dot(offset, spline(param, nu=2)))
    return slope
