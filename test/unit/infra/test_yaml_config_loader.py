"""YamlConfigLoader 유닛 테스트."""

import pytest  # noqa: F401
from spline_tracker.infra.config.yaml_config_loader import (
    YamlConfigLoader,
)
from spline_tracker.usecase.ports.config_port import (
    AppConfig,
    SplineConfig,
    TrackingConfig,
)
import yaml


@pytest.fixture
def config_yaml(tmp_path):
    """임시 config.yaml 파일을 생성한다."""
    data = {
        "spline_tracker": {
            "ros__parameters": {
                "spline": {
                    "dimension": 2,
                    "curve_order": 4,
                    "geometric_resolution": 0.005,
                },
                "tracking": {"length_tolerance": 1.5},
            },
        },
    }
    path = tmp_path / "config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


class TestYamlConfigLoader:
    """YamlConfigLoader 테스트."""

    def test_load_valid_config(self, config_yaml):
        """유효한 설정 파일을 로드한다."""
        config = YamlConfigLoader(config_yaml).load()

        assert config.spline == SplineConfig(
            dimension=2, curve_order=4, geometric_resolution=0.005,
        )
        assert config.tracking.length_tolerance == 1.5

    def test_load_flat_structure(self, tmp_path):
        """ros__parameters 없이 최상위에 둔 설정도 읽는다."""
        path = tmp_path / "flat.yaml"
        with open(path, "w") as f:
            yaml.dump({"spline": {"geometric_resolution": 0.02}}, f)

        config = YamlConfigLoader(str(path)).load()

        assert config.spline.geometric_resolution == 0.02
        assert config.spline.dimension == 3
        assert config.tracking == TrackingConfig()

    def test_load_nonexistent_file(self, tmp_path):
        """존재하지 않는 파일이면 기본값을 사용한다."""
        config = YamlConfigLoader(tmp_path / "nonexistent.yaml").load()
        assert config == AppConfig()

    def test_load_invalid_yaml(self, tmp_path):
        """dict가 아닌 YAML이면 기본값을 사용한다."""
        path = tmp_path / "invalid.yaml"
        path.write_text("- just\n- a list\n")

        config = YamlConfigLoader(path).load()
        assert config == AppConfig()

    def test_empty_sections_use_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("spline:\ntracking:\n")

        config = YamlConfigLoader(path).load()
        assert config == AppConfig()

    def test_default_path(self):
        """패키지 기본 설정 파일을 로드한다."""
        config = YamlConfigLoader().load()

        assert config.spline == SplineConfig()
        assert config.tracking == TrackingConfig()
