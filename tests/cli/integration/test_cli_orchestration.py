"""CLI orchestration integration tests."""

from __future__ import annotations

import json
import sys
from pathlib import Path

from click.testing import CliRunner
from openpyxl import load_workbook
from simple_map_fuzzer.cli import cli
from simple_map_fuzzer.report_building import read_results_csv

SUBJECT_SCRIPT = (
    "import sys; "
    "print('actions', sys.argv[2]); sys.exit(0 if sys.argv[2].startswith('S') else 1)"
)


def _write_config(tmp_path: Path) -> Path:
    config = {
        "generation": {
            "seed": 11,
            "text_map": {"max_width": 3, "max_height": 3},
            "action_sequence": {"alphabet": "SUD", "valid_subset": "UD", "max_length": 3},
        },
        "custom": {"action_sequences": ["SU", "UU"]},
        "run": {"output_dir": "fuzzresults", "max_iterations": 3},
        "subject": {
            "command": [sys.executable, "-c", SUBJECT_SCRIPT, "{map}", "{actions}"],
            "timeout_seconds": 30,
        },
    }
    path = tmp_path / "config.json"
    path.write_text(json.dumps(config), encoding="utf-8")
    return path


def test_generate_config_command_writes_placeholder_file_with_default_name(tmp_path: Path) -> None:
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=str(tmp_path)):
        result = runner.invoke(cli, ["generate-config"])
        output_path = Path("config.yaml").resolve()

        assert result.exit_code == 0
        assert output_path.exists()
        content = output_path.read_text(encoding="utf-8")
        assert "generation:" in content
        assert "subject:" in content


def test_generate_map_command_writes_requested_maps(tmp_path: Path) -> None:
    runner = CliRunner()
    output_dir = tmp_path / "maps"

    result = runner.invoke(
        cli,
        [
            "generate-map",
            "--config",
            str(_write_config(tmp_path)),
            "--output-dir",
            str(output_dir),
            "--count",
            "3",
            "--type",
            "binary",
        ],
    )

    assert result.exit_code == 0
    assert sorted(path.name for path in output_dir.iterdir()) == [
        "map_1.bin",
        "map_2.bin",
        "map_3.bin",
    ]
    assert result.output.splitlines() == [
        str((output_dir / name).resolve()) for name in ("map_1.bin", "map_2.bin", "map_3.bin")
    ]


def test_generate_actions_command_enumerates_configured_alphabet(tmp_path: Path) -> None:
    runner = CliRunner()

    config_path = _write_config(tmp_path)

    result = runner.invoke(
        cli,
        ["generate-actions", "--config", str(config_path), "--valid", "--enumerate", "2"],
    )

    assert result.exit_code == 0
    assert result.output.splitlines() == ["UU", "UD", "DU", "DD"]


def test_generate_actions_command_is_reproducible_with_seed() -> None:
    runner = CliRunner()

    first = runner.invoke(cli, ["generate-actions", "--count", "5", "--seed", "3"])
    second = runner.invoke(cli, ["generate-actions", "--count", "5", "--seed", "3"])

    assert first.exit_code == 0
    assert first.output == second.output
    assert len(first.output.splitlines()) == 5


def test_run_and_report_commands_write_output_tree(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = _write_config(tmp_path)

    run_result = runner.invoke(cli, ["run", "--config", str(config_path)])

    assert run_result.exit_code == 0, run_result.output
    output_dir = (tmp_path / "fuzzresults").resolve()
    assert run_result.output.splitlines() == ["3 iterations (max_iterations)", str(output_dir)]
    results = read_results_csv(output_dir / "logs" / "results.csv")
    assert [result.string_sequence for result in results[:2]] == ["SU", "UU"]
    assert [result.exit_code for result in results[:2]] == [0, 1]
    assert results[0].output_messages == ("actions SU",)
    assert (output_dir / "report" / "overview.html").exists()

    report_dir = tmp_path / "rebuilt"
    report_result = runner.invoke(
        cli,
        [
            "report",
            "--results",
            str(output_dir / "logs" / "results.csv"),
            "--output-dir",
            str(report_dir),
        ],
    )

    assert report_result.exit_code == 0
    assert report_result.output.strip() == str(report_dir.resolve())
    workbook = load_workbook(report_dir / "logs" / "results.xlsx")
    assert workbook["Iterations"].max_row == 4
    assert (report_dir / "report" / "all_maps.html").exists()


def test_run_command_returns_error_without_subject(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"run": {"max_iterations": 1}}), encoding="utf-8")

    result = runner.invoke(cli, ["run", "--config", str(config_path)])

    assert result.exit_code != 0
    assert "Configuration section 'subject' is required" in str(result.exception)
