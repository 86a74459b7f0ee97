from pathlib import Path

import yaml

import sil_report

REPO_ROOT = Path(__file__).resolve().parents[1]


def test_lattice_listing(capsys) -> None:
    assert sil_report.main(["--lattices"]) == 0

    out = capsys.readouterr().out
    assert out.count("Axioms: OK") == 5
    assert "Lattice: ISO 26262 ASIL (ISO_26262)" in out


def test_report_on_shipped_table(tmp_path: Path, capsys) -> None:
    export = tmp_path / "out.yaml"

    code = sil_report.main(
        [str(REPO_ROOT / "sif_table.csv"), "--config", str(REPO_ROOT / "config.yaml"), "--export", str(export)]
    )

    out = capsys.readouterr().out
    assert code == 1
    assert "SIF-102 Low level shutdown:" in out
    assert "✗ PFD too high" in out
    assert "3/4 SIFs verified." in out
    assert len(yaml.safe_load(export.read_text(encoding="utf-8"))["results"]) == 4


def test_missing_config_is_reported(tmp_path: Path) -> None:
    assert sil_report.main(["--config", str(tmp_path / "none.yaml")]) == 2
