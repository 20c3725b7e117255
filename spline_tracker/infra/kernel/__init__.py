"""커브 커널 인프라 (CurveKernel 구현)."""

from spline_tracker.infra.kernel.scipy_kernel import (
    BSplineCurve,
    ScipyCurveKernel,
)

__all__ = ["BSplineCurve", "ScipyCurveKernel"]
