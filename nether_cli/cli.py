"""
Nether CLI - Main entry point.

Runs the zone monitor from a YAML configuration, or validates one.
"""

import argparse
import logging
import signal
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from nether_app.config import AppConfig
from nether_app.model_loader import PoseModelLoader
from nether_audio import NullAudioService, PygameAudioService
from nether_zone.editing.editor import ZoneEditor
from nether_zone.monitor import ZoneMonitor
from nether_zone.pipeline import PipelineBuilder
from nether_zone.utils import parse_source

logger = logging.getLogger(__name__)


def setup_logging(log_file: Optional[Path] = None, verbose: bool = False) -> None:
    """
    Setup root logging for the CLI.

    Args:
        log_file: Optional path to log file
        verbose: DEBUG instead of INFO
    """
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
            *(
                [logging.FileHandler(log_file)]
                if log_file
                else []
            )
        ]
    )


def apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    """Command-line flags take precedence over the YAML file."""
    if getattr(args, 'source', None) is not None:
        config = replace(config, source=parse_source(args.source))
    if getattr(args, 'no_display', False):
        config = replace(config, display=replace(config.display, enabled=False))
    if getattr(args, 'no_audio', False):
        config = replace(config, audio=replace(config.audio, enabled=False))
    if getattr(args, 'max_frames', None) is not None:
        config = replace(config, output=replace(config.output, max_frames=args.max_frames))
    return config


def build_pipeline(config: AppConfig):
    """
    Wire pose model, editor, monitor, audio and pipeline from configuration.

    Returns:
        (pipeline, audio service)
    """
    loader = PoseModelLoader(config.models_dir)
    pose_source = loader.load_pose_source(config.model_config)

    editor = ZoneEditor(initial_zone=config.zone)
    monitor = ZoneMonitor(
        pose_source=pose_source,
        editor=editor,
        confidence_threshold=config.detection.confidence_threshold,
    )

    if config.audio.enabled:
        audio = PygameAudioService(config.audio.sound_path)
    else:
        audio = NullAudioService()
    monitor.add_entry_listener(audio.play_cue)

    builder = (
        PipelineBuilder()
        .with_source(config.source)
        .with_monitor(monitor)
        .with_orientation(config.detection.orientation)
        .with_stride(config.output.stride)
        .with_display(config.display.enabled, config.display.window_name)
        .with_handle_hitbox(config.display.handle_hitbox_px)
        .with_joints(config.display.draw_joints)
        .with_max_frames(config.output.max_frames)
    )
    if config.output.save_video:
        builder = builder.with_output(config.output.output_folder, config.output.output_fps)

    return builder.build(), audio


def run(config: AppConfig) -> None:
    """Run the monitor until the source ends, the user quits or a signal arrives."""
    pipeline, audio = build_pipeline(config)

    def _signal_handler(signum, frame):
        logger.info(f"📡 Received signal {signum}, stopping")
        pipeline.stop()

    signal.signal(signal.SIGINT, _signal_handler)
    signal.signal(signal.SIGTERM, _signal_handler)

    logger.info("=" * 80)
    logger.info("🚀 Nether Zone Monitor - Starting")
    logger.info(f"   Source: {config.source}")
    logger.info(f"   Zone: {config.zone.to_dict()}")
    logger.info(f"   Model: {config.model_config.get_model_filename()}")
    logger.info("=" * 80)

    try:
        stats = pipeline.process()
    finally:
        audio.close()

    logger.info(f"✓ Stopped: {stats}")


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog='nether',
        description='Nether - human-in-zone monitor with audio cue',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run with a config file
  nether run config/nether.yaml

  # Override the source (camera index or video path)
  nether run config/nether.yaml --source 1
  nether run config/nether.yaml --source data/videos/hallway.mp4 --no-display

  # Headless, silent, bounded run
  nether run config/nether.yaml --no-display --no-audio --max-frames 300

  # Check a config file without loading a model
  nether validate-config config/nether.yaml

Interactive window:
  drag inside the zone to move it, drag a handle to resize it,
  q or ESC to quit.
"""
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write logs to this file"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Debug logging"
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # run command
    run_parser = subparsers.add_parser('run', help='Run the zone monitor')
    run_parser.add_argument('config', help='Path to config YAML')
    run_parser.add_argument('--source', default=None, help='Camera index or video path')
    run_parser.add_argument('--no-display', action='store_true', help='Disable the window')
    run_parser.add_argument('--no-audio', action='store_true', help='Disable the audio cue')
    run_parser.add_argument('--max-frames', type=int, default=None, help='Stop after N frames')

    # validate-config command
    validate = subparsers.add_parser('validate-config', help='Validate a config YAML')
    validate.add_argument('config', help='Path to config YAML')

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    setup_logging(args.log_file, args.verbose)

    try:
        config = apply_overrides(AppConfig.from_yaml(args.config), args)

        if args.command == 'validate-config':
            print(f"✓ Config OK: {args.config}")
            print(f"   Source: {config.source}")
            print(f"   Zone: {config.zone.to_dict()}")
            print(f"   Model: {config.model_config.get_model_filename()}")

        elif args.command == 'run':
            run(config)

    except Exception as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
