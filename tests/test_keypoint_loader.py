import pytest

from keypoint_normalizer.preprocessing.keypoint_loader import (
    DECODE_ERROR,
    NOT_FOUND,
    Keypoint3D,
    KeypointDecodeError,
    combine_datasets,
    get_dataset_file,
    load_keypoints,
    load_keypoints_or_empty,
    parse_keypoint_records,
)


def test_load_preserves_order_and_converts_to_float(tmp_path, write_dataset):
    write_dataset("TW_Keypoints", [
        {"id": 2, "keypoints": [1, 2, 3]},
        {"id": 1, "keypoints": [0.5, -1.5, 2.25]},
    ])

    result = load_keypoints("TW_Keypoints", tmp_path)

    assert result.ok
    assert result.reason is None
    assert [r.id for r in result.records] == [2, 1]
    assert result.records[0].keypoints == [1.0, 2.0, 3.0]
    assert all(isinstance(v, float) for v in result.records[0].keypoints)


def test_missing_or_null_id_is_none(tmp_path, write_dataset):
    write_dataset("CA_Keypoints", [
        {"keypoints": [1, 2, 3]},
        {"id": None, "keypoints": [4, 5, 6], "label": "ignored"},
    ])

    records = load_keypoints("CA_Keypoints", tmp_path).records

    assert records == [Keypoint3D(None, [1.0, 2.0, 3.0]), Keypoint3D(None, [4.0, 5.0, 6.0])]


def test_empty_array_is_a_successful_empty_load(tmp_path, write_dataset):
    write_dataset("TW_Keypoints", [])

    result = load_keypoints("TW_Keypoints", tmp_path)

    assert result.ok
    assert result.records == []


def test_missing_file_reports_not_found(tmp_path):
    result = load_keypoints("TW_Keypoints", tmp_path)

    assert not result.ok
    assert result.reason == NOT_FOUND
    assert result.records == []
    assert result.error == "Failed to locate JSON file TW_Keypoints."


def test_malformed_json_reports_decode_error(tmp_path, write_dataset):
    write_dataset("TW_Keypoints", '[{"id": 1, "keypoints": [1, 2', raw=True)

    result = load_keypoints("TW_Keypoints", tmp_path)

    assert result.reason == DECODE_ERROR
    assert result.records == []
    assert result.error.startswith("Error loading JSON from TW_Keypoints: ")


@pytest.mark.parametrize("payload", [
    {"id": 1, "keypoints": [1, 2, 3]},
    [{"id": 1, "keypoints": ["1", 2, 3]}],
    [{"id": 1, "keypoints": [True, 2, 3]}],
    [{"id": "one", "keypoints": [1, 2, 3]}],
    [{"id": 1.5, "keypoints": [1, 2, 3]}],
    [{"id": 1}],
    [[1, 2, 3]],
    [{"id": 2 ** 63, "keypoints": [1, 2, 3]}],
    [{"id": -(2 ** 63) - 1, "keypoints": [1, 2, 3]}],
    '[{"id": 1, "keypoints": [NaN, 1, 2]}]',
    '[{"id": 1, "keypoints": [Infinity, 1, 2]}]',
    '[{"id": 1, "keypoints": [-Infinity, 1, 2]}]',
    '[{"id": 1, "keypoints": [1e400, 1, 2]}]',
])
def test_field_mismatch_reports_decode_error(tmp_path, write_dataset, payload):
    write_dataset("CA_Keypoints", payload, raw=isinstance(payload, str))

    result = load_keypoints("CA_Keypoints", tmp_path)

    assert result.reason == DECODE_ERROR
    assert result.records == []


def test_parse_names_offending_record():
    with pytest.raises(KeypointDecodeError, match="Record 1"):
        parse_keypoint_records([{"keypoints": [1, 2, 3]}, {"keypoints": "nope"}])


def test_or_empty_prints_message_and_falls_back(tmp_path, capsys):
    records = load_keypoints_or_empty("TW_Keypoints", tmp_path)

    assert records == []
    assert capsys.readouterr().out.strip() == "Failed to locate JSON file TW_Keypoints."


def test_or_empty_is_silent_on_success(tmp_path, write_dataset, capsys):
    write_dataset("TW_Keypoints", [{"id": 1, "keypoints": [1, 2, 3]}])

    records = load_keypoints_or_empty("TW_Keypoints", tmp_path)

    assert len(records) == 1
    assert capsys.readouterr().out == ""


def test_combine_datasets_concatenates_in_order():
    a = [Keypoint3D(1, [1.0, 1.0, 1.0])]
    b = [Keypoint3D(2, [2.0, 2.0, 2.0]), Keypoint3D(3, [3.0, 3.0, 3.0])]

    assert [r.id for r in combine_datasets(a, b)] == [1, 2, 3]
    assert combine_datasets() == []


def test_bundled_datasets_are_resolved():
    for name in ("TW_Keypoints", "CA_Keypoints"):
        assert get_dataset_file(name).is_file()
        assert load_keypoints(name).ok


def test_non_finite_constants_do_not_reach_bounds(tmp_path, write_dataset):
    write_dataset("TW_Keypoints", '[{"id": 1, "keypoints": [NaN, 1, 2]}, {"id": 2, "keypoints": [3, 4, 5]}]', raw=True)

    result = load_keypoints("TW_Keypoints", tmp_path)

    assert not result.ok
    assert result.records == []
    assert "Invalid JSON constant NaN" in result.error


def test_64_bit_id_limits_are_accepted(tmp_path, write_dataset):
    write_dataset("TW_Keypoints", [
        {"id": 2 ** 63 - 1, "keypoints": [1, 2, 3]},
        {"id": -(2 ** 63), "keypoints": [1, 2, 3]},
    ])

    records = load_keypoints("TW_Keypoints", tmp_path).records

    assert [r.id for r in records] == [2 ** 63 - 1, -(2 ** 63)]
