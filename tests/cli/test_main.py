"""Tests for the click command line."""

from click.testing import CliRunner

import cli.main as cli_mod

COMPARE_CSV = (
    "Submitter,Total_PRs,Status\n"
    "bob,15,new\n"
    "alice,3,\n"
    "dave,3,new\n"
    "carol,,churned\n"
    "erin,,churned\n"
)


def test_check_valid(pivot_csv):
    r = CliRunner().invoke(cli_mod.cli, ["check", str(pivot_csv)])
    assert r.exit_code == 0, r.output
    assert "is a valid pivot table" in r.output


def test_check_invalid(write_pivot):
    path = write_pivot(",2022-01\nalpha,-1\n")
    r = CliRunner().invoke(cli_mod.cli, ["check", str(path)])
    assert r.exit_code == 1
    assert "negative" in r.output


def test_check_missing_file(tmp_path):
    r = CliRunner().invoke(cli_mod.cli, ["check", str(tmp_path / "blaah.csv")])
    assert r.exit_code == 1


def test_extract_csv(pivot_csv, tmp_path):
    output = tmp_path / "top.csv"
    r = CliRunner().invoke(
        cli_mod.cli,
        ["extract", str(pivot_csv), "-o", str(output), "-p", "3", "-t", "2"],
    )
    assert r.exit_code == 0, r.output
    assert output.read_text() == "Submitter,Total_PRs\nbob,15\nalice,3\ndave,3\n"
    assert "Accumulating data between 2023-04 and 2023-06" in r.output


def test_extract_default_output_name(pivot_csv, tmp_path):
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=tmp_path) as cwd:
        r = runner.invoke(cli_mod.cli, ["extract", str(pivot_csv), "--type", "commenters"])
        assert r.exit_code == 0, r.output
        written = (tmp_path / cwd / "top-commenters_LATEST.csv").read_text()
    assert written.startswith("Commenter,Total_Comments\nbob,15\n")


def test_extract_markdown_with_history(pivot_csv, tmp_path, fast_plots):
    output = tmp_path / "top.md"
    r = CliRunner().invoke(
        cli_mod.cli,
        ["extract", str(pivot_csv), "-o", str(output), "-p", "0", "-t", "1", "--history"],
    )
    assert r.exit_code == 0, r.output
    text = output.read_text()
    assert text.startswith("# Top Submitters\n")
    assert 'over the 0 months before "2023-06".' in text
    assert "| [bob](plot/bob.png) |" in text
    history = tmp_path / "top_submitters_fullHistory.csv"
    assert history.read_text().splitlines()[1] == "bob,0,0,0,5,5,5"
    assert [call["name"] for call in fast_plots] == ["bob"]


def test_extract_unknown_month_falls_back(pivot_csv, tmp_path):
    output = tmp_path / "top.csv"
    r = CliRunner().invoke(
        cli_mod.cli,
        ["extract", str(pivot_csv), "-o", str(output), "-m", "2021-05", "-p", "3", "-t", "1"],
    )
    assert r.exit_code == 0, r.output
    assert output.read_text() == "Submitter,Total_PRs\nbob,15\n"


def test_extract_invalid_month(pivot_csv):
    r = CliRunner().invoke(cli_mod.cli, ["extract", str(pivot_csv), "-m", "2023-13"])
    assert r.exit_code == 2
    assert "end_month" in r.output


def test_extract_invalid_top_size(pivot_csv):
    r = CliRunner().invoke(cli_mod.cli, ["extract", str(pivot_csv), "-t", "0"])
    assert r.exit_code == 2


def test_extract_invalid_input(write_pivot, tmp_path):
    path = write_pivot("user,2022-01\nalpha,one\n")
    r = CliRunner().invoke(cli_mod.cli, ["extract", str(path), "-o", str(tmp_path / "o.csv")])
    assert r.exit_code == 1
    assert "Invalid input file" in r.output
    assert not (tmp_path / "o.csv").exists()


def test_extract_missing_output_directory(pivot_csv, tmp_path):
    r = CliRunner().invoke(
        cli_mod.cli,
        ["extract", str(pivot_csv), "-o", str(tmp_path / "missing" / "top.csv")],
    )
    assert r.exit_code == 2
    assert "does not exist" in r.output


def test_compare_csv(pivot_csv, tmp_path):
    output = tmp_path / "compare.csv"
    r = CliRunner().invoke(
        cli_mod.cli,
        ["compare", str(pivot_csv), "-o", str(output), "-p", "3", "-t", "3", "-c", "3"],
    )
    assert r.exit_code == 0, r.output
    assert output.read_text() == COMPARE_CSV


def test_compare_with_history(pivot_csv, tmp_path, fast_plots):
    output = tmp_path / "compare.md"
    r = CliRunner().invoke(
        cli_mod.cli,
        [
            "compare",
            str(pivot_csv),
            "-o",
            str(output),
            "-p",
            "3",
            "-t",
            "3",
            "-c",
            "3",
            "--history",
        ],
    )
    assert r.exit_code == 0, r.output
    history = (tmp_path / "top_submitters_evolution_fullHistory.csv").read_text().splitlines()
    assert history[1].startswith("bob (new),")
    assert history[-1].startswith("erin (churned),")
    assert "| [carol](plot/carol.png) |" in output.read_text()
    assert len(fast_plots) == 5


def test_compare_offset_too_large(pivot_csv, tmp_path):
    r = CliRunner().invoke(
        cli_mod.cli,
        ["compare", str(pivot_csv), "-o", str(tmp_path / "c.csv"), "-c", "6"],
    )
    assert r.exit_code == 1
    assert "Failed to compare data" in r.output


def test_compare_negative_offset(pivot_csv):
    r = CliRunner().invoke(cli_mod.cli, ["compare", str(pivot_csv), "-c", "-1"])
    assert r.exit_code == 2


def test_log_format_json(pivot_csv, tmp_path):
    r = CliRunner().invoke(
        cli_mod.cli,
        ["--log-format", "json", "--log-level", "debug", "check", str(pivot_csv)],
    )
    assert r.exit_code == 0, r.output
