"""
nether_app - Application wiring

Bounded Context: Configuration and model loading
Responsibilities:
  - Load and validate YAML configuration
  - Load YOLO pose models (cached)
"""

from .config import (
    AppConfig,
    AudioConfig,
    DetectionConfig,
    DisplayConfig,
    ModelConfig,
    OutputConfig,
)
from .model_loader import PoseModelLoader

__all__ = [
    "AppConfig",
    "AudioConfig",
    "DetectionConfig",
    "DisplayConfig",
    "ModelConfig",
    "OutputConfig",
    "PoseModelLoader",
]
