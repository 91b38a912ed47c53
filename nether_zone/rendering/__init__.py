"""
Rendering Layer
===============

Bounded Context: Zone visualization and drawing.

Responsibilities:
- Draw the zone (outline color reflects detection) and its handles
- Draw pose joints in overlay coordinates
- Render statistics
- Pure rendering - no logic, no state

Non-responsibilities:
- Zone logic (handled by geometry)
- Edge triggering (handled by analytics)
- Editing (handled by editing)
"""

from nether_zone.rendering.visualizer import ZoneVisualizer

__all__ = [
    "ZoneVisualizer",
]
