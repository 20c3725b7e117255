"""Spline Tracker 도메인 예외 정의."""


class DomainError(Exception):
    """도메인 계층 기본 예외."""


class ParameterDomainError(DomainError, ValueError):
    """파라미터가 [start_param, end_param] 범위를 벗어났을 때."""


class CurveNotInitializedError(DomainError):
    """커브가 없는 핸들에 질의할 때."""


class CurveConstructionError(DomainError):
    """커널 리소스로부터 유효한 커브를 구성하지 못했을 때."""


class CurveFitError(CurveConstructionError):
    """입력 점으로부터 커브 피팅 실패 시 (퇴화 입력, 점 부족 등)."""


class CurveEvaluationError(DomainError):
    """도메인 내 파라미터에서 커널 평가 실패 시."""


class ClosestPointSearchError(DomainError):
    """최근접점 탐색 실패 시."""


class NoClosestPointError(ClosestPointSearchError):
    """전역 탐색이 점도 구간도 반환하지 않았을 때."""


class DegenerateGeometryError(DomainError):
    """정규화에 필요한 기하량이 정의되지 않을 때 (길이 0 벡터 등)."""
