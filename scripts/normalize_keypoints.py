from pathlib import Path
import sys
import argparse

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from keypoint_normalizer.preprocessing.keypoint_loader import (
    DATASET_NAMES,
    get_dataset_path,
    load_keypoints_or_empty,
    combine_datasets,
)
from keypoint_normalizer.preprocessing.global_bounds import compute_global_bounds
from keypoint_normalizer.preprocessing.normalize import (
    DEFAULT_TARGET_SIZE,
    TargetSize,
    export_normalized_datasets,
)
from keypoint_normalizer.diagnostics.report import REPORT_LIMIT, print_bounds, report_dataset


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Min-max normalize 3D keypoint datasets into a fixed-size box")
    parser.add_argument("--data-dir", type=Path, default=None,
                        help=f"Directory holding the dataset JSON files (default: {get_dataset_path()})")
    parser.add_argument("--datasets", nargs="+", default=DATASET_NAMES,
                        help=f"Dataset names to load (default: {' '.join(DATASET_NAMES)})")
    parser.add_argument("--width", type=float, default=DEFAULT_TARGET_SIZE.width,
                        help=f"Target box width (default: {DEFAULT_TARGET_SIZE.width:g})")
    parser.add_argument("--height", type=float, default=DEFAULT_TARGET_SIZE.height,
                        help=f"Target box height (default: {DEFAULT_TARGET_SIZE.height:g})")
    parser.add_argument("--limit", type=int, default=REPORT_LIMIT,
                        help=f"Records printed per dataset (default: {REPORT_LIMIT})")
    parser.add_argument("--output-dir", type=Path, default=None,
                        help="Also write every normalized record and a metadata.json here")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.width <= 0 or args.height <= 0:
        parser.error("--width and --height must be positive")
    if args.limit < 0:
        parser.error("--limit must not be negative")

    size = TargetSize(width=args.width, height=args.height)

    datasets = {name: load_keypoints_or_empty(name, args.data_dir) for name in args.datasets}
    all_records = combine_datasets(*datasets.values())

    bounds = compute_global_bounds(all_records)
    print_bounds(bounds)

    for name, records in datasets.items():
        report_dataset(name, records, bounds, size, limit=args.limit)

    if args.output_dir is not None:
        print()
        output_paths = export_normalized_datasets(datasets, bounds, size, args.output_dir)
        for name, output_path in output_paths.items():
            print(f"Saved {len(datasets[name])} normalized records to: {output_path}")


if __name__ == "__main__":
    main()
