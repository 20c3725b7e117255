"""도메인 열거형 단위 테스트."""

from spline_tracker.domain.enums import CurveKind


class TestCurveKind:
    def test_values_match_kernel_codes(self):
        assert CurveKind(1) is CurveKind.POLYNOMIAL_OPEN
        assert CurveKind(2) is CurveKind.RATIONAL_OPEN
        assert CurveKind(3) is CurveKind.POLYNOMIAL_CLOSED
        assert CurveKind(4) is CurveKind.RATIONAL_CLOSED

    def test_rational(self):
        assert CurveKind.RATIONAL_OPEN.is_rational
        assert CurveKind.RATIONAL_CLOSED.is_rational
        assert not CurveKind.POLYNOMIAL_OPEN.is_rational

    def test_closed(self):
        assert CurveKind.POLYNOMIAL_CLOSED.is_closed
        assert not CurveKind.RATIONAL_OPEN.is_closed
