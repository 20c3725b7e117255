"""Spline Tracker 도메인 열거형 정의."""

from enum import IntEnum


class CurveKind(IntEnum):
    """커브 종류 (다항/유리, 열린/닫힌)."""

    POLYNOMIAL_OPEN = 1
    RATIONAL_OPEN = 2
    POLYNOMIAL_CLOSED = 3
    RATIONAL_CLOSED = 4

    @property
    def is_rational(self) -> bool:
        return self in (CurveKind.RATIONAL_OPEN, CurveKind.RATIONAL_CLOSED)

    @property
    def is_closed(self) -> bool:
        return self in (
            CurveKind.POLYNOMIAL_CLOSED, CurveKind.RATIONAL_CLOSED
        )
