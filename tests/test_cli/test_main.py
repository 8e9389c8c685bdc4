"""Tests for dicom_projector.cli.main.

Covers tag argument parsing, the argument parser and the main entry
point against generated DICOM files.
"""

import argparse
import json
import logging
import os
from pathlib import Path
from unittest.mock import patch

import pytest
import structlog

from dicom_projector.cli.main import create_parser, depth_limit, main, parse_tags
from dicom_projector.core.config import get_settings
from dicom_projector.core.tags import Tag


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path, reset_structlog):
    """Fresh settings from a clean environment, debug output kept off stdout."""
    monkeypatch.chdir(tmp_path)
    for name in list(os.environ):
        if name.startswith("DICOM_PROJECTOR_"):
            monkeypatch.delenv(name)
    get_settings(force_reload=True)
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL),
        cache_logger_on_first_use=False,
    )
    with patch("dicom_projector.cli.main.configure_logging") as mock_configure:
        yield mock_configure
    get_settings(force_reload=True)


class TestParseTags:
    def test_hex_and_pair_forms(self):
        tags = parse_tags(["00100010", "(0020,000d)", "0028,0010"])
        assert tags == [Tag(0x0010, 0x0010), Tag(0x0020, 0x000D), Tag(0x0028, 0x0010)]

    def test_invalid_tag(self):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_tags(["00100010", "nope"])


class TestDepthLimit:
    @pytest.mark.parametrize("value, expected", [("0", 0), ("3", 3)])
    def test_accepts_non_negative(self, value, expected):
        assert depth_limit(value) == expected

    @pytest.mark.parametrize("value", ["-1", "-2"])
    def test_rejects_negative(self, value):
        with pytest.raises(argparse.ArgumentTypeError):
            depth_limit(value)

    def test_rejects_text(self):
        with pytest.raises(ValueError):
            depth_limit("abc")


class TestParser:
    def test_defaults_from_settings(self):
        args = create_parser(get_settings()).parse_args(["file.dcm"])
        assert args.input_file == "file.dcm"
        assert args.names is False
        assert args.omit_binary is False
        assert args.default_filter is False
        assert args.tags is None
        assert args.indent is None
        assert args.max_depth == 64
        assert args.name_style == "keyword"

    def test_filters_are_exclusive(self):
        parser = create_parser(get_settings())
        with pytest.raises(SystemExit):
            parser.parse_args(["file.dcm", "--default-filter", "--tags", "00100010"])

    def test_environment_defaults(self, monkeypatch):
        monkeypatch.setenv("DICOM_PROJECTOR_ADD_NAMES", "true")
        monkeypatch.setenv("DICOM_PROJECTOR_JSON_INDENT", "2")
        args = create_parser(get_settings(force_reload=True)).parse_args(["f.dcm"])
        assert args.names is True
        assert args.indent == 2


class TestMain:
    def test_full_document(self, sample_dicom_file, capsys):
        assert main([str(sample_dicom_file)]) == 0

        document = json.loads(capsys.readouterr().out)
        assert document["00100020"] == {"vr": "LO", "Value": ["TEST123"]}
        assert document["00200013"] == {"vr": "IS", "Value": [4242]}
        assert document["00200032"] == {"vr": "DS", "Value": [-125.5, 10.0, 3.25]}
        assert document["00020010"]["Value"] == ["1.2.840.10008.1.2.1"]

        frames = document["7FE00010"]["Value"]["frames"]
        assert [f["sizeInBytes"] for f in frames] == [8, 8]
        assert frames[1]["fileOffset"] - frames[0]["fileOffset"] == 8

        items = document["00081140"]["Value"]
        assert items[0]["00081155"] == {"vr": "UI", "Value": ["1.2.3.4"]}

    def test_names(self, sample_dicom_file, capsys):
        assert main([str(sample_dicom_file), "--names"]) == 0
        document = json.loads(capsys.readouterr().out)
        assert document["00100010"]["name"] == "PatientName"
        assert list(document["00100010"]) == ["name", "vr", "Value"]

    def test_description_names(self, sample_dicom_file, capsys):
        args = [str(sample_dicom_file), "--names", "--name-style", "description"]
        assert main(args) == 0
        document = json.loads(capsys.readouterr().out)
        assert document["00100010"]["name"] == "Patient's Name"

    def test_tags(self, sample_dicom_file, capsys):
        assert main([str(sample_dicom_file), "--tags", "00100020", "(0008,0060)"]) == 0
        document = json.loads(capsys.readouterr().out)
        assert list(document) == ["00080060", "00100020"]

    def test_default_filter(self, sample_dicom_file, capsys):
        assert main([str(sample_dicom_file), "--default-filter"]) == 0
        document = json.loads(capsys.readouterr().out)
        assert "00100010" in document
        assert "00280010" in document
        assert "7FE00010" not in document
        assert "00081140" not in document

    def test_no_file_meta(self, sample_dicom_file, capsys):
        assert main([str(sample_dicom_file), "--no-file-meta"]) == 0
        document = json.loads(capsys.readouterr().out)
        assert not any(key.startswith("0002") for key in document)

    def test_indent(self, sample_dicom_file, capsys):
        assert main([str(sample_dicom_file), "--tags", "00080060", "--indent", "2"]) == 0
        out = capsys.readouterr().out
        assert out.startswith('{\n  "00080060": {\n')

    def test_compact_by_default(self, sample_dicom_file, capsys):
        assert main([str(sample_dicom_file), "--tags", "00080060"]) == 0
        assert capsys.readouterr().out == '{"00080060":{"vr":"CS","Value":["CT"]}}\n'

    def test_output_file(self, sample_dicom_file, temp_dir, capsys):
        output = temp_dir / "out" / "doc.json"
        assert main([str(sample_dicom_file), "-o", str(output)]) == 0

        assert capsys.readouterr().out == ""
        document = json.loads(output.read_text(encoding="utf-8"))
        assert document["00080060"]["Value"] == ["CT"]

    def test_missing_file(self, temp_dir, capsys):
        assert main([str(temp_dir / "missing.dcm")]) == 1
        assert capsys.readouterr().err.startswith("Error: ")

    def test_max_depth_option(self, sample_dicom_file, capsys):
        assert main([str(sample_dicom_file), "--max-depth", "1"]) == 0
        document = json.loads(capsys.readouterr().out)
        assert len(document["00081140"]["Value"]) == 1

    def test_max_depth_zero_rejects_sequences(self, sample_dicom_file, capsys):
        assert main([str(sample_dicom_file), "--max-depth", "0"]) == 1
        assert "maximum depth 0" in capsys.readouterr().err

    def test_negative_max_depth_is_usage_error(self, sample_dicom_file):
        with pytest.raises(SystemExit) as exc_info:
            main([str(sample_dicom_file), "--max-depth", "-1"])
        assert exc_info.value.code == 2

    def test_bad_tag_exits_with_usage_error(self, sample_dicom_file, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([str(sample_dicom_file), "--tags", "xyz"])
        assert exc_info.value.code == 2
        assert "xyz" in capsys.readouterr().err

    def test_verbose_configures_debug(self, sample_dicom_file, isolated_env, capsys):
        main([str(sample_dicom_file), "-v", "--log-format", "json"])
        isolated_env.assert_called_once_with(
            log_level="DEBUG", json_format=True, log_file=None
        )

    def test_log_level_from_settings(self, sample_dicom_file, isolated_env):
        main([str(sample_dicom_file), "-o", str(Path("doc.json"))])
        isolated_env.assert_called_once_with(
            log_level="WARNING", json_format=False, log_file=None
        )
