import numpy as np
import json
from dataclasses import dataclass
from pathlib import Path
from tqdm import tqdm
import sys

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from keypoint_normalizer.preprocessing.keypoint_loader import Keypoint3D
from keypoint_normalizer.preprocessing.global_bounds import GlobalBounds


NORMALIZATION_METHOD = "global_min_max"


@dataclass(frozen=True)
class TargetSize:
    width: float
    height: float

    @property
    def side(self) -> float:
        return min(self.width, self.height)


DEFAULT_TARGET_SIZE = TargetSize(width=100.0, height=100.0)


def normalize_keypoint(keypoint: Keypoint3D, bounds: GlobalBounds, size: TargetSize) -> Keypoint3D:
    # Every axis shares the square side as numerator; only the divisor differs.
    ranges = np.array(bounds.ranges, dtype=np.float64)
    if not np.all(ranges > 0):
        return keypoint

    if len(keypoint.keypoints) < 3:
        raise ValueError(f"Expected at least 3 coordinates, got {len(keypoint.keypoints)}")

    coords = np.array(keypoint.keypoints[:3], dtype=np.float64)
    mins = np.array(bounds.mins, dtype=np.float64)
    scales = size.side / ranges

    normalized = (coords - mins) * scales
    return Keypoint3D(id=keypoint.id, keypoints=normalized.tolist())


def normalize_dataset(records: list[Keypoint3D], bounds: GlobalBounds, size: TargetSize,
                      show_progress: bool = False) -> list[Keypoint3D]:
    iterator = tqdm(records, desc="Normalizing keypoints") if show_progress else records
    return [normalize_keypoint(record, bounds, size) for record in iterator]


def save_normalized_dataset(name: str, records: list[Keypoint3D], bounds: GlobalBounds,
                            size: TargetSize, output_dir: Path) -> Path:
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    normalized = normalize_dataset(records, bounds, size, show_progress=True)

    output_path = output_dir / f"{name}_normalized.json"
    with open(output_path, "w") as f:
        json.dump([{"id": r.id, "keypoints": r.keypoints} for r in normalized], f, indent=2)

    return output_path


def export_normalized_datasets(datasets: dict[str, list[Keypoint3D]], bounds: GlobalBounds,
                               size: TargetSize, output_dir: Path) -> dict[str, Path]:
    """
    Write every dataset's normalized records and one metadata.json for the run.

    metadata.json is rebuilt from scratch each time, so it only ever lists the
    datasets normalized against the bounds it records.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_paths = {
        name: save_normalized_dataset(name, records, bounds, size, output_dir)
        for name, records in datasets.items()
    }

    metadata = {
        "normalized": True,
        "normalization_method": NORMALIZATION_METHOD,
        "target_size": {"width": size.width, "height": size.height},
        "global_bounds": bounds.to_dict(),
        "datasets": {
            name: {"num_records": len(datasets[name]), "file": path.name}
            for name, path in output_paths.items()
        },
    }

    with open(output_dir / "metadata.json", "w") as f:
        json.dump(metadata, f, indent=2)

    return output_paths
