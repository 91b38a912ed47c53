"""
Structured Log Event Types
==========================

Bounded Context: Observability Event Taxonomy

Typed event names for structured logging.

Design:
- Enum-based (prevents typos, enables autocomplete)
- Hierarchical naming (component.category.action)
- Searchable in log aggregators

Event Naming Convention:
    <component>.<category>.<action>

    component: pose, zone, audio, model, pipeline, error
"""

from enum import Enum


class LogEvent(str, Enum):
    """
    Typed log event names for structured logging.

    Categories:
    - pose.*: Pose inference
    - zone.*: Zone detection and editing
    - audio.*: Audio cue playback
    - model.*, pipeline.*: Lifecycle
    - error.*: Error conditions
    """

    # ========== Pose Events ==========
    POSE_INFERENCE_COMPLETED = "pose.inference.completed"
    """Pose source returned observations for a frame."""

    POSE_INFERENCE_FAILED = "pose.inference.failed"
    """Pose source failed; frame treated as empty."""

    # ========== Zone Events ==========
    ZONE_ENTERED = "zone.entered"
    """Rising edge: a human is now fully inside the zone."""

    ZONE_EXITED = "zone.exited"
    """Falling edge: no human fully inside the zone any more."""

    ZONE_UPDATED = "zone.updated"
    """Zone rectangle committed by the editor."""

    ZONE_UPDATE_REJECTED = "zone.update.rejected"
    """Drag candidate violated the size or bounds invariant."""

    ZONE_DRAG_STARTED = "zone.drag.started"
    """Body or handle drag session opened."""

    ZONE_DRAG_ENDED = "zone.drag.ended"
    """Drag session closed."""

    # ========== Audio Events ==========
    AUDIO_PLAYED = "audio.played"
    """Audio cue started."""

    AUDIO_SKIPPED = "audio.skipped"
    """Audio cue still playing; not restarted."""

    # ========== Lifecycle Events ==========
    MODEL_LOADED = "model.loaded"
    """Pose model loaded from disk or cache."""

    PIPELINE_STARTED = "pipeline.started"
    """Frame processing started."""

    PIPELINE_STOPPED = "pipeline.stopped"
    """Frame processing finished."""

    # ========== Error Events ==========
    AUDIO_PLAYBACK_FAILED = "error.audio_playback"
    """Audio collaborator raised; swallowed at the boundary."""

    OBSERVER_ERROR = "error.observer"
    """A state observer raised; swallowed at the boundary."""


# Event categories for filtering
POSE_EVENTS = {
    LogEvent.POSE_INFERENCE_COMPLETED,
    LogEvent.POSE_INFERENCE_FAILED,
}

ZONE_EVENTS = {
    LogEvent.ZONE_ENTERED,
    LogEvent.ZONE_EXITED,
    LogEvent.ZONE_UPDATED,
    LogEvent.ZONE_UPDATE_REJECTED,
    LogEvent.ZONE_DRAG_STARTED,
    LogEvent.ZONE_DRAG_ENDED,
}

AUDIO_EVENTS = {
    LogEvent.AUDIO_PLAYED,
    LogEvent.AUDIO_SKIPPED,
}

ERROR_EVENTS = {
    LogEvent.AUDIO_PLAYBACK_FAILED,
    LogEvent.OBSERVER_ERROR,
}
