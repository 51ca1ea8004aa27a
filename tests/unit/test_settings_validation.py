"""Tests for settings validation."""

import json
import logging

import pytest
from pydantic import ValidationError

from pofile.settings import (
    DEFAULT_SERIALIZE_OPTIONS,
    AppSettings,
    CatalogSettings,
    SerializeOptions,
    load_app_settings,
    resolve_serialize_options,
)

pytestmark = pytest.mark.unit


def test_serialize_options_defaults():
    options = SerializeOptions()

    assert options.fold_length == 80
    assert options.compact_multiline is True


def test_serialize_options_accepts_aliases_and_names():
    assert SerializeOptions(foldLength=0).fold_length == 0
    assert SerializeOptions(fold_length=40).fold_length == 40
    assert SerializeOptions.model_validate({"compactMultiline": False}).compact_multiline is False


@pytest.mark.parametrize(
    "raw, expected",
    [(None, 80), ("", 80), ("  ", 80), (" 40 ", 40), (12, 12)],
)
def test_fold_length_normalization(raw, expected):
    assert SerializeOptions.model_validate({"fold_length": raw}).fold_length == expected


@pytest.mark.parametrize("raw", [-1, True, "wide"])
def test_fold_length_rejects_invalid_values(raw):
    with pytest.raises(ValidationError):
        SerializeOptions.model_validate({"fold_length": raw})


def test_serialize_options_validate_assignment():
    options = SerializeOptions()

    with pytest.raises(ValidationError):
        options.fold_length = -5


def test_resolve_serialize_options():
    options = SerializeOptions(fold_length=10)

    assert resolve_serialize_options(None) is DEFAULT_SERIALIZE_OPTIONS
    assert resolve_serialize_options(options) is options
    assert resolve_serialize_options({"foldLength": 20}).fold_length == 20


def test_catalog_settings_rejects_zero_plurals():
    with pytest.raises(ValidationError):
        CatalogSettings(nplurals=0)


def test_app_settings_log_level_names():
    assert AppSettings(log_level="debug").log_level == logging.DEBUG
    assert AppSettings(log_level=20).log_level == logging.INFO


def test_load_app_settings_toml(tmp_path):
    path = tmp_path / "settings.toml"
    path.write_text(
        'log_level = "info"\n\n[serialize]\nfold_length = 60\n\n[catalog]\nnplurals = 3\n',
        encoding="utf-8",
    )

    settings = load_app_settings(path)

    assert settings.log_level == logging.INFO
    assert settings.serialize.fold_length == 60
    assert settings.catalog.nplurals == 3
    assert settings.catalog.include_origins is True


def test_load_app_settings_json(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(
        json.dumps({"serialize": {"compactMultiline": False}}), encoding="utf-8"
    )

    settings = load_app_settings(path)

    assert settings.serialize.compact_multiline is False
    assert settings.to_dict()["serialize"] == {
        "fold_length": 80,
        "compact_multiline": False,
    }


def test_load_app_settings_wraps_validation_errors(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"catalog": {"nplurals": 0}}), encoding="utf-8")

    with pytest.raises(ValueError):
        load_app_settings(path)
