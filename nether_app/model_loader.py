"""
Model Loader - YOLO pose model loading and caching.

This module provides the PoseModelLoader class which handles loading YOLO
pose models from disk, caching them in memory, and wrapping them as a
PoseSource for the zone monitor.

Supports:
- YOLOv8 and YOLO11 pose models
- All variants: n, s, m, l, x
- Both ONNX (320, 640) and PT (flexible) formats
"""

from pathlib import Path
from typing import Dict, List, Optional

from ultralytics import YOLO

from nether_app.config import ModelConfig
from nether_zone.logging import LogEvent, StructuredLogger
from nether_zone.pose.yolo import YoloPoseSource


class PoseModelLoader:
    """
    YOLO pose model loader with in-memory caching.

    Models are identified by (version, variant, input_size, format) tuples.

    Usage:
        loader = PoseModelLoader(models_dir=Path("./models"))

        config = ModelConfig(model_version="11", model_variant="n")
        model = loader.load_model(config)

        # Or directly as a pose source for ZoneMonitor
        pose_source = loader.load_pose_source(config)
    """

    def __init__(self, models_dir: Path, logger: Optional[StructuredLogger] = None):
        """
        Args:
            models_dir: Directory containing pose model files (.pt, .onnx)
            logger: Structured logger (default: component "model")
        """
        self.models_dir = Path(models_dir)
        self.logger = logger or StructuredLogger(component="model")
        self._cache: Dict[tuple, YOLO] = {}

    def load_model(self, config: ModelConfig) -> YOLO:
        """
        Load YOLO pose model from disk or cache.

        Raises:
            FileNotFoundError: If model file does not exist
        """
        cache_key = (
            config.model_version,
            config.model_variant,
            config.input_size,
            config.model_format,
        )

        if cache_key in self._cache:
            model = self._cache[cache_key]
            # Inference parameters are not part of the key
            model.overrides["conf"] = config.confidence
            return model

        filename = config.get_model_filename()
        model_path = self.models_dir / filename

        if not model_path.exists():
            raise FileNotFoundError(
                f"Model file not found: {model_path}\n"
                f"Expected: {filename}\n"
                f"Available models:\n" + "\n".join(f"  - {m}" for m in self.list_available_models())
            )

        model = YOLO(str(model_path), task="pose")
        model.overrides["verbose"] = False
        model.overrides["imgsz"] = config.input_size
        model.overrides["conf"] = config.confidence

        self._cache[cache_key] = model

        self.logger.info(
            event=LogEvent.MODEL_LOADED,
            message=f"Pose model loaded: {filename}",
            metadata={'model_path': str(model_path), 'format': config.model_format}
        )
        return model

    def load_pose_source(self, config: ModelConfig) -> YoloPoseSource:
        """Load the model and wrap it as a PoseSource."""
        return YoloPoseSource(self.load_model(config))

    def list_available_models(self) -> List[str]:
        """
        List available pose models in models_dir.

        Example:
            ["yolo11n-pose-640.onnx", "yolo11n-pose.pt", "yolov8s-pose.pt"]
        """
        if not self.models_dir.exists():
            return []

        models = [
            f.name
            for pattern in ("yolo*-pose*.pt", "yolo*-pose*.onnx")
            for f in self.models_dir.glob(pattern)
            if f.is_file()
        ]
        return sorted(models)

    def clear_cache(self) -> None:
        """Unload all cached models."""
        self._cache.clear()

    def cache_size(self) -> int:
        return len(self._cache)
