"""
End-to-end tests for the sheet2notion command line.

None of these commands reach the network: they either stop before the
remote call or never make one.
"""

import csv

import pytest
import yaml

from sheet2notion.cli.sync_cli import main
from sheet2notion.config.settings import DATABASE_ID_ENV, TOKEN_ENV


def run_cli(argv):
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


@pytest.fixture
def tasks_csv(tmp_path):
    path = tmp_path / "tasks.csv"
    with open(path, "w", newline="") as f:
        csv.writer(f).writerows([
            ["Sync", "Page ID", "Name", "Notes", "Amount", "Due", "Tags", "Done", "Legacy"],
            ["TRUE", "", "Task A", "", "42", "2023-01-01", "urgent", "yes", ""],
            ["TRUE", "", "", "", "abc", "2023-01-01", "", "maybe", ""],
        ])
    return path


@pytest.mark.e2e
def test_validate_mappings_ok(notion_env, capsys):
    code = run_cli(["validate-mappings", "--mappings", str(notion_env)])

    output = capsys.readouterr().out
    assert code == 0
    assert output.startswith("✓ Mapping configuration")
    assert '"total": 7' in output
    assert '"active": 6' in output


@pytest.mark.e2e
def test_validate_mappings_reports_errors(tmp_path, capsys):
    path = tmp_path / "bad.yaml"
    path.write_text(yaml.safe_dump({"mappings": [
        {"column": "C", "property": "Notes", "type": "rich_text"},
        {"column": "C", "property": "Other", "type": "bogus"},
    ]}))

    code = run_cli(["validate-mappings", "--mappings", str(path)])

    output = capsys.readouterr().out
    assert code == 1
    assert "is invalid" in output
    assert "  - Mapping 2: Invalid data type 'bogus'" in output
    assert "  - At least one title property mapping is required" in output


@pytest.mark.e2e
def test_validate_mappings_missing_file(tmp_path, capsys):
    code = run_cli(["validate-mappings", "--mappings", str(tmp_path / "none.yaml")])

    assert code == 1
    assert "not found" in capsys.readouterr().out


@pytest.mark.e2e
def test_check_row_valid(notion_env, tasks_csv, capsys):
    code = run_cli(["check-row", "--csv", str(tasks_csv), "--row", "1"])

    assert code == 0
    assert "✓ Row 1 is valid" in capsys.readouterr().out


@pytest.mark.e2e
def test_check_row_invalid(notion_env, tasks_csv, capsys):
    code = run_cli(["check-row", "--csv", str(tasks_csv), "--row", "2"])

    output = capsys.readouterr().out
    assert code == 1
    assert "✗ Row 2 has 3 error(s):" in output
    assert "  - [required] C (Name): required field is empty" in output
    assert "  - [number] E (Amount): must be a valid number, got 'abc'" in output
    assert "  - [checkbox] H (Done): must be a boolean value, got 'maybe'" in output


@pytest.mark.e2e
def test_check_row_out_of_range(notion_env, tasks_csv, capsys):
    code = run_cli(["check-row", "--csv", str(tasks_csv), "--row", "9"])

    assert code == 1
    assert "Row 9 not found" in capsys.readouterr().out


@pytest.mark.e2e
def test_sync_without_credentials(notion_env, tasks_csv, monkeypatch, capsys):
    monkeypatch.delenv(TOKEN_ENV)

    code = run_cli(["sync", "--csv", str(tasks_csv), "--row", "1"])

    assert code == 1
    assert "✗ Configuration problem: Notion API token is not set" in capsys.readouterr().out


@pytest.mark.e2e
def test_connection_without_credentials(notion_env, monkeypatch, capsys):
    monkeypatch.delenv(TOKEN_ENV)
    monkeypatch.delenv(DATABASE_ID_ENV)

    code = run_cli(["test-connection"])

    assert code == 1
    assert "must be set" in capsys.readouterr().out


@pytest.mark.e2e
def test_no_command_prints_help(capsys):
    assert run_cli([]) == 1
    assert "Available commands" in capsys.readouterr().out
