"""Tests for fibcat.config — file loading, validation, and merging."""

from __future__ import annotations

from pathlib import Path

import pytest

from fibcat.config import (
    Config,
    ConfigFileError,
    build_config,
    load_file_config,
)
from fibcat.selector import Algorithm


# ---------------------------------------------------------------------------
# load_file_config
# ---------------------------------------------------------------------------


class TestLoadFileConfig:
    """Tests for reading [tool.fibcat] from pyproject.toml."""

    def test_missing_file_returns_empty(self, tmp_path: Path) -> None:
        assert load_file_config(tmp_path / "nonexistent.toml") == {}

    def test_no_tool_section_returns_empty(self, tmp_path: Path) -> None:
        toml = tmp_path / "pyproject.toml"
        toml.write_text("[project]\nname = 'foo'\n")
        assert load_file_config(toml) == {}

    def test_no_fibcat_section_returns_empty(self, tmp_path: Path) -> None:
        toml = tmp_path / "pyproject.toml"
        toml.write_text("[tool.black]\nline-length = 88\n")
        assert load_file_config(toml) == {}

    def test_valid_full_section(self, tmp_path: Path) -> None:
        toml = tmp_path / "pyproject.toml"
        toml.write_text(
            "[tool.fibcat]\n"
            'algorithms = ["matrix", "Binet"]\n'
            'format = "json"\n'
            "strict-binet = true\n"
            "check = true\n"
        )
        result = load_file_config(toml)
        assert result == {
            "algorithms": (Algorithm.MATRIX, Algorithm.BINET),
            "output_format": "json",
            "strict_binet": True,
            "check": True,
        }

    def test_partial_section(self, tmp_path: Path) -> None:
        toml = tmp_path / "pyproject.toml"
        toml.write_text("[tool.fibcat]\ncheck = true\n")
        assert load_file_config(toml) == {"check": True}

    def test_invalid_toml_raises(self, tmp_path: Path) -> None:
        toml = tmp_path / "pyproject.toml"
        toml.write_text("[tool.fibcat\n")  # malformed
        with pytest.raises(ConfigFileError, match="Invalid TOML"):
            load_file_config(toml)

    def test_unknown_key_raises(self, tmp_path: Path) -> None:
        toml = tmp_path / "pyproject.toml"
        toml.write_text("[tool.fibcat]\nbogus = 42\n")
        with pytest.raises(ConfigFileError, match="unknown key 'bogus'"):
            load_file_config(toml)

    def test_non_table_section_raises(self, tmp_path: Path) -> None:
        toml = tmp_path / "pyproject.toml"
        toml.write_text('[tool]\nfibcat = "doubling"\n')
        with pytest.raises(ConfigFileError, match=r"\[tool.fibcat\] must be a table"):
            load_file_config(toml)

    def test_non_table_tool_raises(self, tmp_path: Path) -> None:
        toml = tmp_path / "pyproject.toml"
        toml.write_text("tool = 3\n")
        with pytest.raises(ConfigFileError, match="'tool' .* must be a table"):
            load_file_config(toml)


# ---------------------------------------------------------------------------
# Value validation
# ---------------------------------------------------------------------------


class TestValueValidation:
    """Tests for type/value checking of individual config fields."""

    def _load(self, tmp_path: Path, body: str) -> dict[str, object]:
        toml = tmp_path / "pyproject.toml"
        toml.write_text(f"[tool.fibcat]\n{body}\n")
        return load_file_config(toml)

    def test_algorithms_non_list_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigFileError, match="must be a list of strings"):
            self._load(tmp_path, 'algorithms = "matrix"')

    def test_algorithms_non_string_elements_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigFileError, match="must be a list of strings"):
            self._load(tmp_path, "algorithms = [1, 2]")

    def test_algorithms_unknown_name_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigFileError, match="unknown algorithm 'golden'"):
            self._load(tmp_path, 'algorithms = ["golden"]')

    def test_algorithms_empty_list_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigFileError, match="must name at least one algorithm"):
            self._load(tmp_path, "algorithms = []")

    def test_algorithms_repeats_dropped(self, tmp_path: Path) -> None:
        result = self._load(tmp_path, 'algorithms = ["dynamic", "Dynamic", "matrix"]')
        assert result == {"algorithms": (Algorithm.DYNAMIC, Algorithm.MATRIX)}

    def test_format_invalid_choice(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigFileError, match="must be 'human' or 'json'"):
            self._load(tmp_path, 'format = "xml"')

    def test_format_non_string_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigFileError, match="must be a string"):
            self._load(tmp_path, "format = 42")

    def test_strict_binet_non_bool_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigFileError, match="must be a boolean"):
            self._load(tmp_path, "strict-binet = 1")

    def test_check_string_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigFileError, match="must be a boolean"):
            self._load(tmp_path, 'check = "yes"')


# ---------------------------------------------------------------------------
# build_config
# ---------------------------------------------------------------------------


class TestBuildConfig:
    """Tests for merging file config and CLI overrides."""

    def test_defaults_when_both_empty(self) -> None:
        cfg = build_config({}, {})
        assert cfg == Config()
        assert cfg.algorithms == (Algorithm.DOUBLING,)

    def test_file_config_applied(self) -> None:
        cfg = build_config({}, {"check": True, "output_format": "json"})
        assert cfg.check is True
        assert cfg.output_format == "json"

    def test_cli_overrides_file(self) -> None:
        cfg = build_config({"output_format": "human"}, {"output_format": "json"})
        assert cfg.output_format == "human"

    def test_algorithms_append(self) -> None:
        cfg = build_config(
            {"algorithms": (Algorithm.BINET,)},
            {"algorithms": (Algorithm.MATRIX,)},
        )
        assert cfg.algorithms == (Algorithm.MATRIX, Algorithm.BINET)

    def test_algorithms_append_skips_repeats(self) -> None:
        cfg = build_config(
            {"algorithms": (Algorithm.MATRIX, Algorithm.CACHED)},
            {"algorithms": (Algorithm.MATRIX,)},
        )
        assert cfg.algorithms == (Algorithm.MATRIX, Algorithm.CACHED)

    def test_algorithms_cli_only(self) -> None:
        cfg = build_config({"algorithms": (Algorithm.DYNAMIC,)}, {})
        assert cfg.algorithms == (Algorithm.DYNAMIC,)

    def test_full_merge(self) -> None:
        file_cfg = {
            "algorithms": (Algorithm.DYNAMIC,),
            "strict_binet": True,
            "output_format": "json",
        }
        cli = {
            "algorithms": (Algorithm.BINET,),
            "check": True,
            "output_format": "human",
        }
        cfg = build_config(cli, file_cfg)
        assert cfg.algorithms == (Algorithm.DYNAMIC, Algorithm.BINET)
        assert cfg.strict_binet is True
        assert cfg.check is True
        assert cfg.output_format == "human"
