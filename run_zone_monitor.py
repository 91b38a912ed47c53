"""
Zone Monitor Demo
=================

Demonstrates nether_zone package usage without a config file.

Example: Play a cue whenever a person stands fully inside a doorway band
of a recorded video, with the zone editable by mouse.

Architecture:
- geometry: NormalizedRect, ZoneDetector (pure decision)
- pose: YoloPoseSource (ultralytics)
- editing: ZoneEditor (drag state machine)
- monitor: ZoneMonitor (edge-triggered entry events)
- pipeline: Orchestration
"""

from ultralytics import YOLO

from nether_audio import NullAudioService
from nether_zone import (
    NormalizedRect,
    PipelineBuilder,
    ZoneEditor,
    ZoneMonitor,
    ZoneVisualizer,
)
from nether_zone.pose.yolo import YoloPoseSource

VIDEO_PATH = "./data/videos/hallway-1280x720.mp4"


def main():
    """Run zone monitoring on a hallway video."""

    # 1. Load pose model
    pose_source = YoloPoseSource(YOLO("yolo11n-pose.pt"))

    # 2. Define the zone (normalized, top-left origin)
    editor = ZoneEditor(NormalizedRect(x=0.35, y=0.0, width=0.3, height=1.0))

    # 3. Monitor + audio cue on each entry
    monitor = ZoneMonitor(pose_source=pose_source, editor=editor)
    audio = NullAudioService()
    monitor.add_entry_listener(audio.play_cue)

    # 4. Build pipeline
    pipeline = (
        PipelineBuilder()
        .with_source(VIDEO_PATH)
        .with_monitor(monitor)
        .with_visualizer(ZoneVisualizer(opacity=0.2))
        .with_stride(2)
        .with_output(fps=10)
        .build()
    )

    print("🎬 Starting zone monitoring...")
    print(f"  Video: {VIDEO_PATH}")
    print(f"  Zone: {editor.current_zone.to_dict()}")
    print("  Drag the zone or its handles; q to quit")
    print()

    stats = pipeline.process()

    print()
    print("✓ Zone monitoring completed!")
    print(f"  {stats}")
    print(f"  Cues: {audio.cues_requested}")
    print(f"  Final zone: {editor.current_zone.to_dict()}")


if __name__ == "__main__":
    main()
