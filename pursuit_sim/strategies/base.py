from abc import ABC, abstractmethod

from ..envs.world import WorldPoint


class ActorStrategy(ABC):
    """
    Motion policy for one actor.
    Owns the actor's current position; everything else it keeps is private.
    """

    def __init__(self, x: float, y: float, step_length: float = 1.0):
        if step_length <= 0.0:
            raise ValueError(f"step_length must be positive, got {step_length}")
        self.point = WorldPoint(float(x), float(y))
        self.step_length = float(step_length)

    @abstractmethod
    def next(self, other: WorldPoint, iteration: int) -> WorldPoint:
        """
        Advance one step given the other actor's position and the 1-based
        iteration being computed. Returns the new position (== self.point).
        """

    def __repr__(self):
        return f"{type(self).__name__}(x={self.point.x!r}, y={self.point.y!r})"
