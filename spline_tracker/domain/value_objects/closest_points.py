"""최근접점 탐색 결과 값 객체."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ClosestPoints:
    """전역 최근접점 탐색 결과.

    Args:
        points: 고립된 최근접 파라미터 목록.
        segments: 모든 점이 같은 거리에 있는 모호한 커브 구간의
            (시작, 끝) 파라미터 쌍 목록.
    """

    points: tuple[float, ...] = field(default_factory=tuple)
    segments: tuple[tuple[float, float], ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not self.points and not self.segments

    @property
    def is_ambiguous(self) -> bool:
        return bool(self.segments)
