"""지연 계산 파생 스칼라 캐시 엔티티."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class CachedScalar:
    """unset / set(value) 두 상태를 갖는 스칼라 캐시.

    커브가 교체될 때(fit, simplify, clear)만 무효화된다.
    커브 객체 자체가 캐시 키이므로 파라미터 도메인이나 해상도로
    재검증하지 않는다.

    Args:
        value: 캐시된 값. is_set이 False이면 의미 없음.
        is_set: 값이 계산되어 있는지 여부.
    """

    value: float = -1.0
    is_set: bool = False

    def get(self) -> float | None:
        """캐시된 값을 반환한다. 계산 전이면 None."""
        return self.value if self.is_set else None

    def set(self, value: float) -> float:
        self.value = value
        self.is_set = True
        return value

    def invalidate(self) -> None:
        self.value = -1.0
        self.is_set = False
