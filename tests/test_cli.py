"""Tests for the lumiscan command line."""

import json
from pathlib import Path

import pytest

from lumiscan.cli import build_parser, confidence_percent, main
from lumiscan.config import CONFIG_ENV


@pytest.fixture
def storage(tmp_path: Path, monkeypatch) -> Path:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(CONFIG_ENV, raising=False)
    return tmp_path / "rows.json"


def run_cli(storage: Path, *args: str) -> int:
    return main(["--storage", str(storage), *args])


def listed_rows(storage: Path, capsys, *args: str) -> list[dict]:
    capsys.readouterr()
    assert run_cli(storage, "list", "--json", *args) == 0
    return json.loads(capsys.readouterr().out)


class TestCli:
    def test_sample_then_list(self, storage: Path, capsys) -> None:
        assert run_cli(storage, "sample") == 0
        assert "Sample Data Loaded" in capsys.readouterr().err

        rows = listed_rows(storage, capsys)
        assert len(rows) == 10
        assert rows[0]["value"] == "Breast cancer"

    def test_list_filters(self, storage: Path, capsys) -> None:
        run_cli(storage, "sample")

        rows = listed_rows(storage, capsys, "--section", "Nanocarrier", "--search", "wpi")

        assert [row["value"] for row in rows] == ["WPI-CHI-HA nanoparticles"]

    def test_plain_list_is_tab_separated(self, storage: Path, capsys) -> None:
        run_cli(storage, "sample")
        capsys.readouterr()

        run_cli(storage, "list", "--search", "doxorubicin")

        (line,) = capsys.readouterr().out.strip().split("\n")
        assert line.split("\t")[1:] == ["Drug Molecule", "API", "Doxorubicin", "0.93", "p3", "high", "93%"]

    def test_sections(self, storage: Path, capsys) -> None:
        run_cli(storage, "sample")
        capsys.readouterr()

        run_cli(storage, "sections")

        assert capsys.readouterr().out.split("\n")[:2] == ["Therapeutic Context", "Drug Molecule"]

    def test_edit_and_delete(self, storage: Path, capsys) -> None:
        run_cli(storage, "sample")
        row_id = listed_rows(storage, capsys)[0]["id"]

        assert run_cli(storage, "edit", row_id, "confidence", "0.5") == 0
        assert listed_rows(storage, capsys)[0]["confidence"] == 0.5

        assert run_cli(storage, "delete", row_id) == 0
        assert run_cli(storage, "delete", row_id) == 0
        assert "Row Already Removed" in capsys.readouterr().err
        assert len(listed_rows(storage, capsys)) == 9

    def test_bad_confidence_exits_nonzero(self, storage: Path, capsys) -> None:
        run_cli(storage, "sample")
        row_id = listed_rows(storage, capsys)[0]["id"]

        assert run_cli(storage, "edit", row_id, "confidence", "high") == 1
        assert "Invalid Value" in capsys.readouterr().err

    def test_extract_appends(self, storage: Path, capsys) -> None:
        run_cli(storage, "sample")

        assert run_cli(storage, "extract", "--file", "paper.pdf", "--delay", "0") == 0

        assert len(listed_rows(storage, capsys)) == 20

    def test_extract_without_source(self, storage: Path, capsys) -> None:
        assert run_cli(storage, "extract", "--delay", "0") == 0
        assert "Missing Document" in capsys.readouterr().err

    def test_export(self, storage: Path, tmp_path: Path, capsys) -> None:
        run_cli(storage, "sample")
        capsys.readouterr()

        assert run_cli(storage, "export", "csv", "--out", str(tmp_path / "out")) == 0

        path = Path(capsys.readouterr().out.strip())
        assert path == tmp_path / "out" / "lumiscan-data.csv"
        assert path.read_text(encoding="utf-8").startswith("section,key,value,confidence,sourceSpan\n")

    def test_export_empty_exits_nonzero(self, storage: Path, tmp_path: Path, capsys) -> None:
        assert run_cli(storage, "export", "json", "--out", str(tmp_path / "out")) == 1
        assert "No Data to Export" in capsys.readouterr().err

    def test_clear(self, storage: Path, capsys) -> None:
        run_cli(storage, "sample")

        assert run_cli(storage, "clear") == 0
        assert listed_rows(storage, capsys) == []

    def test_command_is_required(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_edit_rejects_unknown_field(self, storage: Path) -> None:
        with pytest.raises(SystemExit):
            run_cli(storage, "edit", "some-id", "id", "x")


class TestConfidencePercent:
    @pytest.mark.parametrize(
        ("confidence", "text"),
        [(0.93, "93%"), (0.86, "86%"), (0.125, "13%"), (0.375, "38%"), (1.0, "100%"), (0.0, "0%")],
    )
    def test_rounds_to_whole_percent(self, confidence: float, text: str) -> None:
        assert confidence_percent(confidence) == text
