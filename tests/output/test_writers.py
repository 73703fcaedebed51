"""Unit tests for the CSV and Markdown writers."""

from top_contributors.output.writers import render_markdown_table, write_csv, write_markdown

ROWS = [["Submitter", "Total_PRs"], ["alpha", "12"], ["bravo", "3"]]


def test_write_csv(tmp_path):
    """Test the CSV layout."""
    path = write_csv(ROWS, tmp_path / "out.csv")
    assert path.read_text() == "Submitter,Total_PRs\nalpha,12\nbravo,3\n"


def test_write_csv_comparison_rows(tmp_path):
    """Empty totals and statuses are written as empty fields."""
    rows = [
        ["Submitter", "Total_PRs", "Status"],
        ["alpha", "1", ""],
        ["zebra", "", "churned"],
    ]
    path = write_csv(rows, tmp_path / "compare.csv")
    assert path.read_text() == "Submitter,Total_PRs,Status\nalpha,1,\nzebra,,churned\n"


def test_write_csv_header_only(tmp_path):
    """A ranking without entries still has its header."""
    path = write_csv([["Submitter", "Total_PRs"]], tmp_path / "empty.csv")
    assert path.read_text() == "Submitter,Total_PRs\n"


def test_render_markdown_table():
    """Numbers are right-aligned, text left-aligned."""
    assert render_markdown_table(ROWS) == (
        "| Submitter | Total_PRs |\n"
        "| --------- | --------: |\n"
        "| alpha     |        12 |\n"
        "| bravo     |         3 |\n"
    )


def test_render_markdown_table_header_only():
    """A table without data rows still gets its separator line."""
    assert render_markdown_table([["Submitter", "Total_PRs"]]) == (
        "| Submitter | Total_PRs |\n"
        "| --------- | --------- |\n"
    )


def test_render_markdown_table_with_links():
    """Identity cells link to their chart."""
    rows = [["Submitter", "Total_PRs", "Status"], ["alpha", "12", "new"]]
    table = render_markdown_table(rows, link_dir="plot")
    lines = table.splitlines()
    assert lines[0] == "| Submitter | Total_PRs | Status |"
    assert lines[1] == "| --------- | --------: | ------ |"
    assert lines[2] == "| [alpha](plot/alpha.png) |        12 | new    |"


def test_write_markdown(tmp_path):
    """The introduction precedes the table."""
    path = write_markdown(ROWS, tmp_path / "out.md", introduction="# Top Submitters\n")
    text = path.read_text()
    assert text.startswith("# Top Submitters\n\n| Submitter | Total_PRs |\n")
    assert text.endswith("| bravo     |         3 |\n")
