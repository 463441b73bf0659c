"""
Motion Planner - Single responsibility: turning a direction into a target.

The r0tor has no speed or jog command, so a directional move is a
set-position that keeps one axis at its stored target and drives the other
to its end stop. The rotor keeps moving until it reaches the limit or is
stopped. It does NOT execute commands.
"""

from .types import AzEl, Direction


class MotionPlanner:
    """Plans directional moves against fixed axis limits."""

    def __init__(
        self,
        min_az: float = 0.0,
        max_az: float = 360.0,
        min_el: float = 0.0,
        max_el: float = 180.0,
    ):
        self.min_az = min_az
        self.max_az = max_az
        self.min_el = min_el
        self.max_el = max_el

    def plan_direction_move(self, direction: Direction, target: AzEl) -> AzEl:
        """Target for a continuous move in `direction`."""
        if direction is Direction.UP:
            return AzEl(target.azimuth, self.max_el)
        if direction is Direction.DOWN:
            return AzEl(target.azimuth, self.min_el)
        if direction is Direction.CW:
            return AzEl(self.max_az, target.elevation)
        return AzEl(self.min_az, target.elevation)
