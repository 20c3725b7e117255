"""YAML 파일 기반 설정 로더 구현체."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from spline_tracker.usecase.ports.config_port import (
    AppConfig,
    ConfigPort,
    SplineConfig,
    TrackingConfig,
)

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG_PATH = (
    Path(__file__).resolve().parent.parent.parent
    / "config"
    / "default_params.yaml"
)


class YamlConfigLoader(ConfigPort):
    """ConfigPort의 YAML 파일 구현체.

    YAML 파일에서 설정을 읽어 AppConfig로 변환한다.
    파일이 없으면 기본값을 사용한다.

    Args:
        config_path: YAML 설정 파일 경로. None이면 기본 경로 사용.
    """

    def __init__(self, config_path: Path | str | None = None) -> None:
        self._path = Path(config_path) if config_path else _DEFAULT_CONFIG_PATH

    def load(self) -> AppConfig:
        """YAML 파일에서 설정을 로드한다."""
        raw = self._read_yaml()
        params = self._extract_params(raw)

        spline_data = params.get("spline", {}) or {}
        tracking_data = params.get("tracking", {}) or {}
        defaults = SplineConfig()

        config = AppConfig(
            spline=SplineConfig(
                dimension=int(
                    spline_data.get("dimension", defaults.dimension)
                ),
                curve_order=int(
                    spline_data.get("curve_order", defaults.curve_order)
                ),
                geometric_resolution=float(
                    spline_data.get(
                        "geometric_resolution",
                        defaults.geometric_resolution,
                    )
                ),
            ),
            tracking=TrackingConfig(
                length_tolerance=float(
                    tracking_data.get(
                        "length_tolerance",
                        TrackingConfig().length_tolerance,
                    )
                ),
            ),
        )

        logger.info("Config loaded from %s", self._path)
        return config

    def _read_yaml(self) -> dict[str, Any]:
        """YAML 파일을 dict로 읽는다."""
        if not self._path.exists():
            logger.warning(
                "Config file not found: %s, using defaults", self._path
            )
            return {}

        with open(self._path, encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            logger.warning("Invalid YAML format, using defaults")
            return {}

        return data

    def _extract_params(self, raw: dict[str, Any]) -> dict[str, Any]:
        """YAML 구조에서 ros__parameters 를 추출한다."""
        # spline_tracker.ros__parameters 구조 탐색
        node_data = raw.get("spline_tracker", raw)
        if isinstance(node_data, dict):
            return node_data.get("ros__parameters", node_data)
        return {}
