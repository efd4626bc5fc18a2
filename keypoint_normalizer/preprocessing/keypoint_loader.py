import json
import math
from dataclasses import dataclass, field
from pathlib import Path


DATASET_NAMES = ["TW_Keypoints", "CA_Keypoints"]

NOT_FOUND = "not_found"
DECODE_ERROR = "decode_error"

ID_MIN = -(2 ** 63)
ID_MAX = 2 ** 63 - 1


class KeypointDecodeError(ValueError):
    pass


@dataclass(frozen=True)
class Keypoint3D:
    id: int | None
    keypoints: list[float]


@dataclass
class LoadResult:
    dataset_name: str
    records: list[Keypoint3D] = field(default_factory=list)
    error: str | None = None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def get_dataset_path() -> Path:
    current_file = Path(__file__).resolve()
    project_root = current_file.parent.parent.parent
    dataset_path = project_root / "data" / "raw" / "keypoints"
    return dataset_path


def get_dataset_file(dataset_name: str, dataset_path: Path = None) -> Path:
    if dataset_path is None:
        dataset_path = get_dataset_path()
    return Path(dataset_path) / f"{dataset_name}.json"


def _reject_constant(name):
    raise KeypointDecodeError(f"Invalid JSON constant {name}")


def _is_number(value) -> bool:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(float(value))
    except OverflowError:
        return False


def parse_keypoint_records(payload) -> list[Keypoint3D]:
    if not isinstance(payload, list):
        raise KeypointDecodeError(f"Expected a JSON array of records, got {type(payload).__name__}")

    records = []
    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            raise KeypointDecodeError(f"Record {index}: expected an object, got {type(item).__name__}")

        if "keypoints" not in item:
            raise KeypointDecodeError(f"Record {index}: missing 'keypoints'")

        coords = item["keypoints"]
        if not isinstance(coords, list) or not all(_is_number(v) for v in coords):
            raise KeypointDecodeError(f"Record {index}: 'keypoints' must be an array of numbers")

        record_id = item.get("id")
        if record_id is not None and (not isinstance(record_id, int) or isinstance(record_id, bool)):
            raise KeypointDecodeError(f"Record {index}: 'id' must be an integer")
        if record_id is not None and not ID_MIN <= record_id <= ID_MAX:
            raise KeypointDecodeError(f"Record {index}: 'id' does not fit in 64 bits")

        records.append(Keypoint3D(id=record_id, keypoints=[float(v) for v in coords]))

    return records


def load_keypoints(dataset_name: str, dataset_path: Path = None) -> LoadResult:
    """
    Load one keypoint dataset by name.

    Failures never raise: a missing file or a payload that does not decode
    into keypoint records comes back as an empty result carrying the reason
    and a descriptive message, so the caller decides whether "no data" is
    acceptable.
    """
    file_path = get_dataset_file(dataset_name, dataset_path)

    if not file_path.is_file():
        return LoadResult(
            dataset_name=dataset_name,
            error=f"Failed to locate JSON file {dataset_name}.",
            reason=NOT_FOUND,
        )

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            payload = json.load(f, parse_constant=_reject_constant)
        records = parse_keypoint_records(payload)
    except (OSError, ValueError) as e:
        return LoadResult(
            dataset_name=dataset_name,
            error=f"Error loading JSON from {dataset_name}: {e}",
            reason=DECODE_ERROR,
        )

    return LoadResult(dataset_name=dataset_name, records=records)


def load_keypoints_or_empty(dataset_name: str, dataset_path: Path = None) -> list[Keypoint3D]:
    result = load_keypoints(dataset_name, dataset_path)
    if not result.ok:
        print(result.error)
    return result.records


def combine_datasets(*datasets: list[Keypoint3D]) -> list[Keypoint3D]:
    combined = []
    for records in datasets:
        combined.extend(records)
    return combined


if __name__ == "__main__":
    print("Dataset path:", get_dataset_path())
    print()

    for name in DATASET_NAMES:
        result = load_keypoints(name)
        if result.ok:
            print(f"  {name}: {len(result.records)} records")
        else:
            print(f"  {name}: {result.error}")
