import json

import pytest


@pytest.fixture
def write_dataset(tmp_path):
    def _write(name, payload, raw=False):
        path = tmp_path / f"{name}.json"
        path.write_text(payload if raw else json.dumps(payload))
        return path
    return _write
