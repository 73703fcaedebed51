"""Unit tests for the plotting tools."""

import pytest

from top_contributors.output.plots import (
    BarChartConfig,
    convert_values,
    plot_bar_chart,
    simplify_axis_labels,
)


@pytest.fixture
def mock_plt(mocker):
    """Fixture for a mock matplotlib.pyplot."""
    fig_mock = mocker.MagicMock()
    ax_mock = mocker.MagicMock()
    subplots_mock = mocker.patch("matplotlib.pyplot.subplots", return_value=(fig_mock, ax_mock))
    mocker.patch("matplotlib.pyplot.close")
    return subplots_mock, fig_mock, ax_mock


def test_plot_bar_chart(mock_plt, tmp_path):
    """Test that the chart is rendered with the expected labels."""
    subplots_mock, fig_mock, ax_mock = mock_plt
    path = plot_bar_chart(
        tmp_path,
        "alpha",
        ["2022-12", "2023-01", "2023-02"],
        ["1", "2", "3"],
        title="Submissions by alpha",
    )

    assert path == tmp_path / "alpha.png"
    subplots_mock.assert_called_once_with(figsize=BarChartConfig().figsize)
    ax_mock.set_title.assert_called_with("Submissions by alpha")
    ax_mock.set_ylabel.assert_called_with("Count")
    ax_mock.set_xticklabels.assert_called_with(["2022", "2023", ""])
    fig_mock.savefig.assert_called_once_with(tmp_path / "alpha.png", dpi=150)


def test_plot_bar_chart_rejects_bad_values(mock_plt, tmp_path):
    """Malformed values fail before anything is drawn."""
    subplots_mock, _, _ = mock_plt
    with pytest.raises(ValueError):
        plot_bar_chart(tmp_path, "alpha", ["2022-12"], ["junk"])
    subplots_mock.assert_not_called()


def test_simplify_axis_labels():
    """Only the first month of each year keeps a label."""
    labels = [f"2020-{month:02d}" for month in range(1, 13)] + ["2021-01", "2021-02"]
    expected = ["2020"] + [""] * 11 + ["2021", ""]
    assert simplify_axis_labels(labels) == expected


def test_convert_values():
    """Test numeric conversion."""
    assert convert_values(["1", "2", " 3 "]) == [1.0, 2.0, 3.0]


@pytest.mark.parametrize("bad", ["", " ", "junk"])
def test_convert_values_errors(bad):
    """Blank and non-numeric cells are rejected."""
    with pytest.raises(ValueError):
        convert_values(["1", "2", bad])
