"""
Configuration schema for the Nether application.

This module defines the configuration structure: frame source and
orientation, initial zone, detection threshold, pose model, audio cue,
display window and optional video output.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from nether_zone.geometry.detector import CONFIDENCE_THRESHOLD
from nether_zone.geometry.shapes import DEFAULT_ZONE, MIN_DIMENSION, NormalizedRect
from nether_zone.pose.types import Orientation
from nether_zone.utils import parse_source


@dataclass(frozen=True)
class ModelConfig:
    """
    YOLO pose model configuration.

    Formats:
    - PT: PyTorch native models (yolov8{variant}-pose.pt, yolo11{variant}-pose.pt)
    - ONNX: Pre-exported models ({stem}-pose-{size}.onnx)
    """

    model_version: str = "11"  # "8" or "11"
    model_variant: str = "n"  # n, s, m, l, x
    input_size: int = 640
    model_format: str = "pt"  # "pt" or "onnx"
    confidence: float = 0.25

    def __post_init__(self):
        """Validate model configuration."""
        valid_versions = {"8", "11"}
        if self.model_version not in valid_versions:
            raise ValueError(
                f"Invalid model_version: {self.model_version}. "
                f"Must be one of {valid_versions}"
            )

        valid_variants = {"n", "s", "m", "l", "x"}
        if self.model_variant not in valid_variants:
            raise ValueError(
                f"Invalid model_variant: {self.model_variant}. "
                f"Must be one of {valid_variants}"
            )

        valid_formats = {"onnx", "pt"}
        if self.model_format not in valid_formats:
            raise ValueError(
                f"Invalid model_format: {self.model_format}. "
                f"Must be one of {valid_formats}"
            )

        if self.model_format == "onnx":
            valid_sizes = {320, 640}
            if self.input_size not in valid_sizes:
                raise ValueError(
                    f"Invalid input_size for ONNX: {self.input_size}. "
                    f"Must be one of {valid_sizes}"
                )
        elif not 32 <= self.input_size <= 1280:
            raise ValueError(
                f"input_size must be in [32, 1280], got {self.input_size}"
            )

        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(
                f"confidence must be in [0.0, 1.0], got {self.confidence}"
            )

    @property
    def model_stem(self) -> str:
        """Ultralytics naming: yolov8n / yolo11n."""
        prefix = "yolov8" if self.model_version == "8" else f"yolo{self.model_version}"
        return f"{prefix}{self.model_variant}"

    def get_model_filename(self) -> str:
        """
        Get the model filename based on configuration.

        Returns:
            str: e.g. "yolo11n-pose.pt" or "yolo11n-pose-640.onnx"
        """
        if self.model_format == "onnx":
            return f"{self.model_stem}-pose-{self.input_size}.onnx"
        return f"{self.model_stem}-pose.pt"


@dataclass(frozen=True)
class DetectionConfig:
    """Zone detection settings."""

    confidence_threshold: float = CONFIDENCE_THRESHOLD
    orientation: Orientation = Orientation.UP

    def __post_init__(self):
        """Validate detection configuration."""
        if not 0.0 <= self.confidence_threshold <= 1.0:
            raise ValueError(
                f"confidence_threshold must be in [0.0, 1.0], got {self.confidence_threshold}"
            )
        # Accept plain strings from YAML
        object.__setattr__(self, "orientation", Orientation(self.orientation))


@dataclass(frozen=True)
class AudioConfig:
    """Audio cue settings."""

    enabled: bool = True
    sound_path: Path = Path("sounds/nether.wav")

    def __post_init__(self):
        object.__setattr__(self, "sound_path", Path(self.sound_path))


@dataclass(frozen=True)
class DisplayConfig:
    """Interactive window settings."""

    enabled: bool = True
    window_name: str = "Nether"
    handle_hitbox_px: int = 60
    draw_joints: bool = True

    def __post_init__(self):
        if self.handle_hitbox_px <= 0:
            raise ValueError(
                f"handle_hitbox_px must be positive, got {self.handle_hitbox_px}"
            )


@dataclass(frozen=True)
class OutputConfig:
    """Annotated video output and frame pacing."""

    save_video: bool = False
    output_folder: Optional[str] = None
    output_fps: int = 15
    stride: int = 1
    max_frames: Optional[int] = None

    def __post_init__(self):
        if not 1 <= self.output_fps <= 120:
            raise ValueError(f"output_fps must be in [1, 120], got {self.output_fps}")
        if self.stride < 1:
            raise ValueError(f"stride must be >= 1, got {self.stride}")
        if self.max_frames is not None and self.max_frames < 1:
            raise ValueError(f"max_frames must be >= 1, got {self.max_frames}")


@dataclass(frozen=True)
class AppConfig:
    """
    Main configuration for the Nether application.

    Loaded from YAML and validated at startup.
    Immutable after construction (frozen dataclass).
    """

    # Camera index or video path
    source: Union[int, str] = 0

    # Initial zone (edited interactively at runtime, not persisted)
    zone: NormalizedRect = DEFAULT_ZONE

    detection: DetectionConfig = field(default_factory=DetectionConfig)
    model_config: ModelConfig = field(default_factory=ModelConfig)
    models_dir: Path = Path("./models")
    audio: AudioConfig = field(default_factory=AudioConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def __post_init__(self):
        """Validate application configuration."""
        source = parse_source(self.source)
        if source == "":
            raise ValueError("source cannot be empty")
        if isinstance(source, int) and source < 0:
            raise ValueError(f"camera index must be >= 0, got {source}")
        object.__setattr__(self, "source", source)
        object.__setattr__(self, "models_dir", Path(self.models_dir))

        if not isinstance(self.zone, NormalizedRect):
            raise TypeError(f"zone must be NormalizedRect, got {type(self.zone)}")
        if self.zone.width <= MIN_DIMENSION or self.zone.height <= MIN_DIMENSION:
            raise ValueError(
                f"zone size must be > {MIN_DIMENSION} to be editable, "
                f"got ({self.zone.width}, {self.zone.height})"
            )

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "AppConfig":
        """
        Build configuration from a parsed YAML mapping.

        Missing sections fall back to defaults.
        """
        data = data or {}

        zone_data = data.get("zone")
        zone = NormalizedRect.from_dict(zone_data) if zone_data else DEFAULT_ZONE

        return cls(
            source=data.get("source", 0),
            zone=zone,
            detection=DetectionConfig(**(data.get("detection") or {})),
            model_config=ModelConfig(**(data.get("model_config") or {})),
            models_dir=Path(data.get("models_dir", "./models")),
            audio=AudioConfig(**(data.get("audio") or {})),
            display=DisplayConfig(**(data.get("display") or {})),
            output=OutputConfig(**(data.get("output") or {})),
        )

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> "AppConfig":
        """
        Load configuration from YAML file.

        Example YAML:
            source: 0                      # camera index or video path

            zone:
              x: 0.39
              y: 0.0
              width: 0.16
              height: 1.0

            detection:
              confidence_threshold: 0.3
              orientation: "up"            # up | down | left | right

            model_config:
              model_version: "11"
              model_variant: "n"
              model_format: "pt"

            models_dir: "./models"

            audio:
              enabled: true
              sound_path: "sounds/nether.wav"

            display:
              enabled: true
              handle_hitbox_px: 60

            output:
              save_video: false
              output_fps: 15

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the YAML or any value is invalid
        """
        path = Path(yaml_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {yaml_path}: {e}")

        if data is not None and not isinstance(data, dict):
            raise ValueError(f"Config root must be a mapping, got {type(data).__name__}")

        try:
            return cls.from_dict(data)
        except TypeError as e:
            # Unknown keys in a section
            raise ValueError(f"Invalid config in {yaml_path}: {e}")
