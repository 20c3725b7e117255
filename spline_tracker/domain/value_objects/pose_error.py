"""궤적 추종 오차 값 객체."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PoseError:
    """경로 추종 제어기에 전달되는 자세 오차.

    (distance_error, heading_error, param) 3-튜플처럼 언패킹할 수 있다.

    Args:
        distance_error: 부호 있는 횡방향 오차 (m). 경로 좌측이 양수.
        heading_error: (-pi, pi]로 감싼 방향 오차 (rad).
        param: 매칭된 커브 파라미터.
    """

    distance_error: float
    heading_error: float
    param: float

    def __iter__(self):
        return iter((self.distance_error, self.heading_error, self.param))
