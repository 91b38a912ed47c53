from pathlib import Path

import pytest

from nether_app.config import AppConfig, DetectionConfig, ModelConfig, OutputConfig
from nether_zone.geometry.shapes import DEFAULT_ZONE, NormalizedRect
from nether_zone.pose.types import Orientation

CONFIG_YAML = """
source: "2"
zone:
  x: 0.1
  y: 0.2
  width: 0.3
  height: 0.4
detection:
  confidence_threshold: 0.5
  orientation: right
model_config:
  model_version: "8"
  model_variant: s
models_dir: ./weights
audio:
  enabled: false
  sound_path: sounds/ding.wav
display:
  enabled: false
  handle_hitbox_px: 40
output:
  save_video: true
  output_fps: 10
  stride: 2
"""


def write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "nether.yaml"
    path.write_text(text)
    return path


def test_from_yaml(tmp_path):
    config = AppConfig.from_yaml(write(tmp_path, CONFIG_YAML))

    assert config.source == 2
    assert config.zone == NormalizedRect(x=0.1, y=0.2, width=0.3, height=0.4)
    assert config.detection.confidence_threshold == 0.5
    assert config.detection.orientation is Orientation.RIGHT
    assert config.model_config.get_model_filename() == "yolov8s-pose.pt"
    assert config.models_dir == Path("./weights")
    assert not config.audio.enabled
    assert config.audio.sound_path == Path("sounds/ding.wav")
    assert config.display.handle_hitbox_px == 40
    assert config.output.save_video
    assert config.output.stride == 2


def test_defaults_for_missing_sections(tmp_path):
    config = AppConfig.from_yaml(write(tmp_path, "source: video.mp4\n"))

    assert config.source == "video.mp4"
    assert config.zone == DEFAULT_ZONE
    assert config.detection.confidence_threshold == 0.3
    assert config.detection.orientation is Orientation.UP
    assert config.display.handle_hitbox_px == 60
    assert config.audio.enabled


def test_empty_file_gives_defaults(tmp_path):
    assert AppConfig.from_yaml(write(tmp_path, "")) == AppConfig()


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        AppConfig.from_yaml(tmp_path / "missing.yaml")


def test_invalid_yaml(tmp_path):
    with pytest.raises(ValueError, match="Invalid YAML"):
        AppConfig.from_yaml(write(tmp_path, "zone: [unclosed\n"))


def test_unknown_key_rejected(tmp_path):
    with pytest.raises(ValueError, match="Invalid config"):
        AppConfig.from_yaml(write(tmp_path, "audio:\n  volume: 3\n"))


def test_invalid_zone_rejected(tmp_path):
    text = "zone:\n  x: 0.9\n  y: 0.0\n  width: 0.5\n  height: 1.0\n"
    with pytest.raises(ValueError):
        AppConfig.from_yaml(write(tmp_path, text))


@pytest.mark.parametrize("size", ["width: 0.05\n  height: 1.0", "width: 0.3\n  height: 0.05"])
def test_minimum_size_zone_rejected(tmp_path, size):
    text = f"zone:\n  x: 0.1\n  y: 0.0\n  {size}\n"
    with pytest.raises(ValueError, match="editable"):
        AppConfig.from_yaml(write(tmp_path, text))


def test_model_filenames():
    assert ModelConfig().get_model_filename() == "yolo11n-pose.pt"
    onnx = ModelConfig(model_version="11", model_variant="m", model_format="onnx", input_size=320)
    assert onnx.get_model_filename() == "yolo11m-pose-320.onnx"


@pytest.mark.parametrize("kwargs", [
    dict(model_version="12"),
    dict(model_variant="q"),
    dict(model_format="engine"),
    dict(model_format="onnx", input_size=512),
    dict(confidence=1.5),
])
def test_invalid_model_config(kwargs):
    with pytest.raises(ValueError):
        ModelConfig(**kwargs)


def test_invalid_detection_config():
    with pytest.raises(ValueError):
        DetectionConfig(confidence_threshold=2.0)
    with pytest.raises(ValueError):
        DetectionConfig(orientation="sideways")


def test_invalid_output_config():
    with pytest.raises(ValueError):
        OutputConfig(stride=0)
    with pytest.raises(ValueError):
        OutputConfig(max_frames=0)


def test_negative_camera_index():
    with pytest.raises(ValueError):
        AppConfig(source=-1)
