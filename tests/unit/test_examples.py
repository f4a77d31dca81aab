"""Compile the bundled example specs."""

import json
from pathlib import Path

import pytest

from litespec.core import compile_file, validate_data


@pytest.mark.parametrize("name", ["prospect.ls", "schedule.ls"])
def test_example_compiles(examples_dir: Path, name: str) -> None:
    schema = compile_file(examples_dir / name)
    assert schema["type"] == "object"
    assert schema["properties"]


def test_prospect_example(examples_dir: Path) -> None:
    schema = compile_file(examples_dir / "prospect.ls")
    assert sorted(schema["$defs"]) == ["drivers", "quote", "vehicle"]
    assert schema["$defs"]["drivers"]["items"]["permissions"] == {
        "field": [{"license_number": {"view": "agent || admin", "edit": "admin"}}]
    }
    assert schema["properties"]["drivers"] == {"type": "array", "$ref": "#/$defs/drivers"}
    assert schema["$defs"]["quote"]["properties"]["coverage_limit"]["default"] == 100000
    assert len(schema["allOf"]) == 2


def test_schedule_record_is_valid(examples_dir: Path) -> None:
    schema = compile_file(examples_dir / "schedule.ls")
    record = json.loads((examples_dir / "schedule.record.json").read_text())
    result = validate_data(schema, record)
    assert result.valid, result.errors
