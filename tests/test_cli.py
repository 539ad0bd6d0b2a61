from pathlib import Path

import pytest

from billing_recon.cli import main


@pytest.fixture
def input_files(tmp_path: Path, make_workbook):
    platforms = tmp_path / "platforms.xlsx"
    platforms.write_bytes(
        make_workbook(
            {
                "Base": [
                    {"CLIENTE_CUENTA": "Acme", "ORIGEN": "WIALON", "FECHA_DE_DESACTIVACION": None},
                    {"CLIENTE_CUENTA": "Acme", "ORIGEN": "LEASE", "FECHA_DE_DESACTIVACION": "2025-11-15"},
                ]
            }
        )
    )
    costs = tmp_path / "costs.xlsx"
    costs.write_bytes(make_workbook({"COSTOS": [{"CUENTA": "Acme", "COSTO": 10}, {"CUENTA": "Beta", "COSTO": 5}]}))
    return platforms, costs


def test_cli_prints_summary_and_writes_report(input_files, tmp_path, capsys):
    platforms, costs = input_files
    output = tmp_path / "report.xlsx"

    code = main([str(platforms), str(costs), "--reference-date", "2025-12-01", "--output", str(output)])

    out = capsys.readouterr().out
    assert code == 0
    assert "Clients: 2" in out
    assert "Billable devices: 2" in out
    assert "Recent deactivations (billable): 1" in out
    assert "Beta: 0 devices" in out and "[DISCREPANCY]" in out
    assert output.is_file()


def test_cli_grace_days_override(input_files, capsys):
    platforms, costs = input_files

    main([str(platforms), str(costs), "--reference-date", "2025-12-01", "--grace-days", "5"])

    assert "Billable devices: 1" in capsys.readouterr().out


def test_cli_reports_unreadable_workbook(tmp_path, input_files, capsys):
    platforms, _ = input_files
    bad = tmp_path / "costs.xlsx"
    bad.write_bytes(b"not excel")

    code = main([str(platforms), str(bad)])

    assert code == 1
    assert "Could not process the files" in capsys.readouterr().err


def test_cli_rejects_missing_file(tmp_path):
    with pytest.raises(SystemExit):
        main([str(tmp_path / "missing.xlsx"), str(tmp_path / "other.xlsx")])
