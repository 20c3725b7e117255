"""커브 속성 값 객체."""

from dataclasses import dataclass

from spline_tracker.domain.enums import CurveKind


@dataclass(frozen=True)
class CurveInfo:
    """커널 리소스에서 읽어 온 커브 기본 정보.

    Args:
        dimension: 공간 차원 (2 또는 3).
        order: 다항식 차수 + 1.
        kind: 커브 종류.
        point_count: 제어점 개수.
    """

    dimension: int
    order: int
    kind: CurveKind = CurveKind.POLYNOMIAL_OPEN
    point_count: int = 0


@dataclass(frozen=True)
class CurveProperties:
    """진단용 커브 속성 요약.

    Args:
        point_count: 제어점 개수.
        order: 커브 차수.
        dimension: 공간 차원.
        kind: 커브 종류.
        start_param: 시작 파라미터.
        end_param: 끝 파라미터.
        length: 전체 호 길이.
    """

    point_count: int
    order: int
    dimension: int
    kind: CurveKind
    start_param: float
    end_param: float
    length: float
