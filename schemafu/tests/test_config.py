import dataclasses
import json

import pytest

from schemafu.config import DEFAULT_INDENTATION, DEFAULT_OUTPUT_PATH, PipelineOptions, SchemafuConfig


def test_defaults():
    config = SchemafuConfig()
    assert config.output_path == DEFAULT_OUTPUT_PATH
    assert config.indentation == DEFAULT_INDENTATION


def test_from_dict_ignores_unknown_keys():
    config = SchemafuConfig.from_dict({"indentation": 4, "colour": "blue"})
    assert config.indentation == 4
    assert config.output_path == DEFAULT_OUTPUT_PATH
    assert not hasattr(config, "colour")


def test_from_file(tmp_path):
    path = tmp_path / "schemafu.json"
    path.write_text(json.dumps({"output_path": "build/schema.json"}))
    assert SchemafuConfig.from_file(path).output_path == "build/schema.json"


def test_to_dict_round_trips():
    config = SchemafuConfig(output_path="x.json", indentation=8)
    assert SchemafuConfig.from_dict(config.to_dict()) == config


def test_pipeline_options_are_immutable():
    options = PipelineOptions(strict=True)
    with pytest.raises(dataclasses.FrozenInstanceError):
        options.strict = False
