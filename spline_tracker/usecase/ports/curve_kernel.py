"""CurveKernel 포트 인터페이스.

NURBS/B-spline 수학(피팅, 평가, 미분, 최근접점 탐색)을 수행하는
외부 커브 커널을 추상화한다. 커브 리소스는 불투명 객체로 취급하며
SplineCurve 핸들만이 이를 소유한다.

모든 연산은 결과와 함께 정수 상태 코드를 반환한다. 실패 판정 규칙
(0이 아니면 실패 / 음수이면 실패)은 연산마다 다르며 호출 측에서
연산별로 적용한다.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

import numpy as np

from spline_tracker.domain.value_objects.curve_properties import CurveInfo

KernelCurve = Any
"""커널이 소유 관리하는 불투명 커브 리소스."""


class CurveKernel(ABC):
    """커브 기하 커널 인터페이스."""

    @abstractmethod
    def fit(
        self,
        points: np.ndarray,
        dimension: int,
        order: int,
        parameters: Sequence[float] | None = None,
    ) -> tuple[KernelCurve | None, float, int]:
        """점 좌표로부터 보간 커브를 생성한다.

        Args:
            points: (n, dimension) 형태의 점 좌표.
            dimension: 공간 차원.
            order: 커브 차수 (degree + 1).
            parameters: 점별 파라미터. None이면 커널이 0에서 시작하는
                파라미터를 정한다.

        Returns:
            (curve, end_param, status). status가 0이 아니면 실패.
        """

    @abstractmethod
    def evaluate_point(
        self, curve: KernelCurve, param: float
    ) -> tuple[np.ndarray, int]:
        """param에서의 위치를 반환한다. status가 0이 아니면 실패."""

    @abstractmethod
    def evaluate_curvature(
        self, curve: KernelCurve, param: float
    ) -> tuple[float, int]:
        """param에서의 곡률을 반환한다. status가 0이 아니면 실패."""

    @abstractmethod
    def evaluate_curvature_variation(
        self, curve: KernelCurve, param: float
    ) -> tuple[float, int]:
        """param에서의 곡률 변화율을 반환한다. status가 0이 아니면 실패."""

    @abstractmethod
    def evaluate_frenet_frame(
        self, curve: KernelCurve, param: float
    ) -> tuple[tuple[np.ndarray, np.ndarray, np.ndarray], int]:
        """param에서의 (tangent, normal, binormal)을 반환한다.

        각 벡터는 3차원이다. status가 0이 아니면 실패.
        """

    @abstractmethod
    def arc_length(
        self, curve: KernelCurve, tolerance: float
    ) -> tuple[float, int]:
        """전체 호 길이를 tolerance 정밀도로 적분한다."""

    @abstractmethod
    def closest_points_global(
        self,
        curve: KernelCurve,
        ref_point: np.ndarray,
        ambiguity_tolerance: float,
        distance_tolerance: float,
    ) -> tuple[list[float], list[tuple[float, float]], int]:
        """ref_point에 가장 가까운 커브 위 점들을 전역 탐색한다.

        Returns:
            (points, segments, status). segments는 모든 점이 같은 거리에
            있어 구분할 수 없는 구간의 (시작, 끝) 파라미터 쌍.
            status가 0이 아니면 실패.
        """

    @abstractmethod
    def closest_point_local(
        self,
        curve: KernelCurve,
        ref_point: np.ndarray,
        guess: float,
        window_start: float,
        window_end: float,
        tolerance: float,
    ) -> tuple[float, int]:
        """[window_start, window_end] 안에서 guess부터 국소 탐색한다.

        Returns:
            (param, status). status가 음수이면 실패, 양수이면 경고.
        """

    @abstractmethod
    def simplify(
        self,
        curve: KernelCurve,
        tolerance: float,
        order: int,
        iterations: int,
    ) -> tuple[KernelCurve | None, list[float], int]:
        """tolerance 이내로 커브를 단순화한 새 커브를 반환한다.

        Returns:
            (new_curve, max_error_per_axis, status). status가 0이 아니면 실패.
        """

    @abstractmethod
    def copy(self, curve: KernelCurve) -> KernelCurve:
        """커브 리소스를 깊은 복사한다."""

    @abstractmethod
    def release(self, curve: KernelCurve) -> None:
        """커브 리소스를 해제한다."""

    @abstractmethod
    def parameter_domain(
        self, curve: KernelCurve
    ) -> tuple[float, float, int]:
        """(start, end, status)를 반환한다. status가 0이 아니면 실패."""

    @abstractmethod
    def curve_info(self, curve: KernelCurve) -> CurveInfo:
        """차원, 차수, 종류, 제어점 개수를 반환한다."""
