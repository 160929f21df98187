"""
Tests for TOML loading into the option tree and saving it back.
"""

import logging
import os
import tempfile

import pytest
import numpy as np

from option_tree import Options
from option_tree.config import (
    load_options,
    save_options,
    populate,
    to_dict,
)


@pytest.fixture
def sample_toml_content():
    return """
nout = 10
timestep = 0.5

[mesh]
nx = 64
ny = 32
symmetric_global_x = true
ddx = [0.1, 0.2, 0.4]

[mesh.ddy]
scale = 1e-3

[solver]
type = "cvode"
atol = 1e-10
use_precon = false
"""


def _write_temp(content):
    with tempfile.NamedTemporaryFile(mode="w", suffix=".toml", delete=False) as f:
        f.write(content)
        return f.name


@pytest.fixture
def temp_toml_file(sample_toml_content):
    filepath = _write_temp(sample_toml_content)
    yield filepath
    os.unlink(filepath)


def test_load_options(temp_toml_file):
    """Test loading a TOML file into a tree."""
    options = load_options(temp_toml_file)

    assert isinstance(options, Options)
    assert options["nout"].as_int() == 10
    assert options["mesh"]["nx"].as_int() == 64
    assert options["mesh"].get("ny", 16, False) == 32
    assert options["mesh:ddy:scale"].as_real() == 1e-3
    assert options["solver:type"] == "cvode"
    assert options["mesh:symmetric_global_x"].as_bool() is True
    assert options["solver:use_precon"].as_bool() is False
    assert options["mesh:nx"].value_source == temp_toml_file
    np.testing.assert_array_almost_equal(
        options["mesh:ddx"].as_(np.ndarray), [0.1, 0.2, 0.4])


def test_load_into_existing_tree(temp_toml_file):
    options = Options()
    options.set("extra", 1, "code")
    loaded = load_options(temp_toml_file, into=options)
    assert loaded is options
    assert options.is_set("extra")
    assert options.is_set("mesh:nx")


def test_later_file_overrides(temp_toml_file, caplog):
    caplog.set_level(logging.WARNING)
    override = _write_temp("[mesh]\nnx = 128\n")
    try:
        options = load_options(temp_toml_file, override)
        assert options["mesh:nx"].as_int() == 128
        assert options["mesh:nx"].value_source == override
        assert options["mesh:ny"].as_int() == 32
        assert "overwritten" in caplog.text
    finally:
        os.unlink(override)


def test_loaded_options_start_unused(temp_toml_file):
    options = load_options(temp_toml_file)
    assert "mesh:ddy:scale" in options.get_unused()


def test_save_and_reload_options(temp_toml_file):
    """Test saving and reloading a tree."""
    options = load_options(temp_toml_file)

    with tempfile.NamedTemporaryFile(mode="wb", suffix=".toml", delete=False) as f:
        output_path = f.name

    try:
        save_options(options, output_path)
        reloaded = load_options(output_path)

        assert reloaded["timestep"] == 0.5
        assert reloaded["solver:type"] == "cvode"
        assert reloaded["mesh:ny"].as_int() == 32
        np.testing.assert_array_equal(
            reloaded["mesh:ddx"].as_opaque(),
            options["mesh:ddx"].as_opaque())
        # saving reads nothing
        assert options["mesh:nx"].used is False
    finally:
        os.unlink(output_path)


def test_dict_bridge():
    options = populate(Options(), {"mesh": {"nx": 4, "ny": 8}, "nout": 10}, "code")
    assert options["mesh:nx"].value_source == "code"
    assert to_dict(options) == {"mesh": {"nx": 4, "ny": 8}, "nout": 10}


def test_to_dict_skips_default_only_options():
    options = Options()
    options["a"] = 1
    options.get("b", 2, False)
    assert to_dict(options) == {"a": 1}


def test_to_dict_rejects_value_with_children():
    options = Options()
    options["solver"] = "cvode"
    options["solver"]["atol"] = 1e-10
    with pytest.raises(ValueError, match="solver"):
        to_dict(options)
