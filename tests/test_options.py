"""Tests for option validation and config file loading."""

import json

import pytest

from options import (
    ImportOptions,
    InferenceOptions,
    OptionsValidationError,
    load_and_validate_config,
    resolve_import_options,
    resolve_inference_options,
)


def test_import_option_defaults():
    """max_rows defaults to unbounded, preview_rows to 10."""
    options = resolve_import_options(None)
    assert options.max_rows is None
    assert options.preview_rows == 10


def test_camel_and_snake_case_keys():
    """Both spellings of option names are accepted."""
    assert resolve_import_options({"maxRows": 5}).max_rows == 5
    assert resolve_import_options({"max_rows": 5}).max_rows == 5
    assert resolve_inference_options({"conformanceThreshold": 0.8}).conformance_threshold == 0.8


def test_instances_pass_through():
    """Validated options are returned as-is."""
    options = ImportOptions(max_rows=3)
    assert resolve_import_options(options) is options


@pytest.mark.parametrize(
    "value",
    [{"maxRows": 0}, {"maxRows": -1}, {"previewRows": -1}, {"unknown": 1}, ["maxRows", 1]],
)
def test_invalid_import_options(value):
    """Bad values, unknown keys and non-mappings are rejected."""
    with pytest.raises(OptionsValidationError):
        resolve_import_options(value)


@pytest.mark.parametrize("threshold", [0, -0.5, 1.5])
def test_threshold_must_be_a_fraction(threshold):
    """The conformance threshold lies in (0, 1]."""
    with pytest.raises(OptionsValidationError, match="conformance_threshold|conformanceThreshold"):
        resolve_inference_options({"conformance_threshold": threshold})


def test_default_threshold_requires_every_value():
    """The default threshold is 1.0."""
    assert InferenceOptions().conformance_threshold == 1.0


def test_load_yaml_config(tmp_path):
    """YAML config files populate both sections."""
    path = tmp_path / "ingest.yaml"
    path.write_text("importer:\n  maxRows: 100\n  previewRows: 3\ninference:\n  conformanceThreshold: 0.9\n")

    config = load_and_validate_config(path)
    assert config.importer.max_rows == 100
    assert config.importer.preview_rows == 3
    assert config.inference.conformance_threshold == 0.9


def test_load_json_config_with_defaults(tmp_path):
    """Missing sections fall back to defaults."""
    path = tmp_path / "ingest.json"
    path.write_text(json.dumps({"importer": {"max_rows": 7}}))

    config = load_and_validate_config(path)
    assert config.importer.max_rows == 7
    assert config.inference.max_sample_values == 5


def test_config_errors(tmp_path):
    """Unreadable, empty or invalid configs raise OptionsValidationError."""
    with pytest.raises(OptionsValidationError, match="not found"):
        load_and_validate_config(tmp_path / "missing.yaml")

    empty = tmp_path / "empty.yaml"
    empty.write_text("")
    with pytest.raises(OptionsValidationError, match="empty"):
        load_and_validate_config(empty)

    bad_format = tmp_path / "config.toml"
    bad_format.write_text("x = 1")
    with pytest.raises(OptionsValidationError, match="Unsupported"):
        load_and_validate_config(bad_format)

    invalid = tmp_path / "invalid.yaml"
    invalid.write_text("importer:\n  maxRows: 0\n")
    with pytest.raises(OptionsValidationError, match="validation failed"):
        load_and_validate_config(invalid)
