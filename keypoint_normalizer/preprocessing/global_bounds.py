import numpy as np
from dataclasses import dataclass
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from keypoint_normalizer.preprocessing.keypoint_loader import Keypoint3D


AXIS_NAMES = ["X", "Y", "Z"]
DEFAULT_MIN = 0.0
DEFAULT_MAX = 1.0


@dataclass(frozen=True)
class GlobalBounds:
    min_x: float
    max_x: float
    min_y: float
    max_y: float
    min_z: float
    max_z: float

    @property
    def range_x(self) -> float:
        return self.max_x - self.min_x

    @property
    def range_y(self) -> float:
        return self.max_y - self.min_y

    @property
    def range_z(self) -> float:
        return self.max_z - self.min_z

    @property
    def mins(self) -> tuple[float, float, float]:
        return (self.min_x, self.min_y, self.min_z)

    @property
    def maxs(self) -> tuple[float, float, float]:
        return (self.max_x, self.max_y, self.max_z)

    @property
    def ranges(self) -> tuple[float, float, float]:
        return (self.range_x, self.range_y, self.range_z)

    def to_dict(self) -> dict:
        return {
            axis.lower(): {"min": lo, "max": hi, "range": hi - lo}
            for axis, lo, hi in zip(AXIS_NAMES, self.mins, self.maxs)
        }


def extract_axis_values(records: list[Keypoint3D], axis: int) -> np.ndarray:
    values = [r.keypoints[axis] for r in records if len(r.keypoints) > axis]
    return np.array(values, dtype=np.float64)


def _axis_min_max(records: list[Keypoint3D], axis: int) -> tuple[float, float]:
    values = extract_axis_values(records, axis)
    if values.size == 0:
        return DEFAULT_MIN, DEFAULT_MAX
    return float(values.min()), float(values.max())


def compute_global_bounds(records: list[Keypoint3D]) -> GlobalBounds:
    """
    Per-axis min and max over every record that has a value on that axis.

    An axis with no values at all falls back to min 0 and max 1, so an empty
    dataset still yields a usable range of 1.
    """
    min_x, max_x = _axis_min_max(records, 0)
    min_y, max_y = _axis_min_max(records, 1)
    min_z, max_z = _axis_min_max(records, 2)

    return GlobalBounds(
        min_x=min_x, max_x=max_x,
        min_y=min_y, max_y=max_y,
        min_z=min_z, max_z=max_z,
    )
