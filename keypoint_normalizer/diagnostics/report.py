from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from keypoint_normalizer.preprocessing.keypoint_loader import Keypoint3D
from keypoint_normalizer.preprocessing.global_bounds import GlobalBounds, AXIS_NAMES
from keypoint_normalizer.preprocessing.normalize import TargetSize, normalize_keypoint


REPORT_LIMIT = 10


def format_bounds(bounds: GlobalBounds) -> list[str]:
    lines = []
    for axis, lo, hi, rng in zip(AXIS_NAMES, bounds.mins, bounds.maxs, bounds.ranges):
        lines.append(f"Global Min {axis}: {lo}, Global Max {axis}: {hi}, Global Range {axis}: {rng}")
    return lines


def print_bounds(bounds: GlobalBounds):
    for line in format_bounds(bounds):
        print(line)


def format_keypoint_line(original: Keypoint3D, normalized: Keypoint3D) -> str:
    return f"Original: {original.keypoints}, Normalized: {normalized.keypoints}"


def report_dataset(name: str, records: list[Keypoint3D], bounds: GlobalBounds,
                   size: TargetSize, limit: int = REPORT_LIMIT):
    print(f"\nNormalized Keypoints for {name}:")
    for keypoint in records[:limit]:
        normalized = normalize_keypoint(keypoint, bounds, size)
        print(format_keypoint_line(keypoint, normalized))
