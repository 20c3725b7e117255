"""커브 파라미터 도메인 값 객체."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ParameterDomain:
    """커브가 정의되는 파라미터 구간 [start, end].

    Args:
        start: 시작 파라미터.
        end: 끝 파라미터.
    """

    start: float = 0.0
    end: float = 0.0

    @property
    def span(self) -> float:
        return self.end - self.start

    def contains(self, param: float) -> bool:
        """param이 닫힌 구간 [start, end]에 속하는지 확인한다."""
        return self.start <= param <= self.end
