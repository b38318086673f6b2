"""Sensors turning the food around an animal into brain inputs.

An eye is any callable ``eye(animal, foods)`` returning a vector of
``cells`` values in [0, 1]; ``cells`` must match the brain's input layer.
"""
import math

import numpy as np

from .config import FOV_ANGLE, FOV_RANGE, NUM_EYE_CELLS


class BlindEye:
    """Sees nothing: every cell reads 0, so only the biases drive the brain."""

    def __init__(self, cells=NUM_EYE_CELLS):
        self.cells = cells

    def __call__(self, animal, foods):
        return np.zeros(self.cells, dtype=np.float32)


class SectorEye:
    """Splits the field of view into ``cells`` sectors, left to right.

    Every food within ``fov_range`` and inside the ``fov_angle`` cone adds
    ``(fov_range - distance) / fov_range`` to the sector it falls in, so
    close food reads brighter. Cells saturate at 1.
    """

    def __init__(self, fov_range=FOV_RANGE, fov_angle=FOV_ANGLE, cells=NUM_EYE_CELLS):
        if fov_range <= 0:
            raise ValueError(f"fov_range must be positive, got {fov_range}")
        if not 0 < fov_angle <= 2 * math.pi:
            raise ValueError(f"fov_angle must be within (0, 2*pi], got {fov_angle}")
        if cells < 1:
            raise ValueError(f"an eye needs at least one cell, got {cells}")
        self.fov_range = fov_range
        self.fov_angle = fov_angle
        self.cells = cells

    def __call__(self, animal, foods):
        readings = np.zeros(self.cells, dtype=np.float32)
        for food in foods:
            dx = food.position.x - animal.position.x
            dy = food.position.y - animal.position.y
            dist = math.hypot(dx, dy)
            if dist > self.fov_range:
                continue
            angle = (math.atan2(dy, dx) - animal.rotation + math.pi) % (2 * math.pi) - math.pi
            if abs(angle) > self.fov_angle / 2:
                continue
            cell = int((angle + self.fov_angle / 2) / self.fov_angle * self.cells)
            cell = min(cell, self.cells - 1)
            readings[cell] += (self.fov_range - dist) / self.fov_range
        return np.clip(readings, 0.0, 1.0)
