"""Frenet 프레임 값 객체."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class FrenetFrame:
    """커브 위 한 점의 국소 정규직교 프레임.

    Args:
        tangent: 단위 접선 벡터 (x, y, z).
        normal: 단위 법선 벡터 (x, y, z).
        binormal: 단위 종법선 벡터 (x, y, z).
    """

    tangent: tuple[float, float, float]
    normal: tuple[float, float, float]
    binormal: tuple[float, float, float]

    def as_matrix(self) -> np.ndarray:
        """[tangent; normal; binormal]을 행으로 갖는 3x3 행렬을 반환한다."""
        return np.array(
            [self.tangent, self.normal, self.binormal], dtype=float
        )
