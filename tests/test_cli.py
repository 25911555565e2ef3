import json

import pytest
from typer.testing import CliRunner

from cli import app
from config.charts import ChartConfig

runner = CliRunner()


@pytest.fixture
def wide_file(tmp_path, wide_csv):
    path = tmp_path / "wide.csv"
    path.write_text(wide_csv, encoding="utf-8")
    return path


def test_columns_lists_defaults(wide_file):
    """Test columns command prints columns and default selections."""
    result = runner.invoke(app, ["columns", str(wide_file)])

    assert result.exit_code == 0
    assert "Columns (4): year, sales_us, sales_eu, profit" in result.stdout
    assert "Rows: 3" in result.stdout
    assert "Default X: year" in result.stdout
    assert "Default Y: sales_us" in result.stdout


def test_columns_unsupported_file(tmp_path):
    """Test columns command rejects unknown extensions."""
    path = tmp_path / "table.xlsx"
    path.write_text("a,b\n1,2\n", encoding="utf-8")

    result = runner.invoke(app, ["columns", str(path)])

    assert result.exit_code == 1
    assert "Please upload a .csv or .json file." in result.output


def test_columns_missing_file(tmp_path):
    """Test columns command reports unreadable files."""
    result = runner.invoke(app, ["columns", str(tmp_path / "missing.csv")])

    assert result.exit_code == 1
    assert "Could not read" in result.output


def test_spec_defaults(wide_file):
    """Test spec command prints the default plot as JSON."""
    result = runner.invoke(app, ["spec", str(wide_file)])

    assert result.exit_code == 0
    figure = json.loads(result.stdout)
    assert [trace["name"] for trace in figure["data"]] == ["sales_us"]
    assert figure["data"][0]["x"] == [2000, 2001, 2002]
    assert figure["data"][0]["line"]["color"] == ChartConfig.SERIES_COLOR_SEQUENCE[0]
    assert figure["layout"]["title"]["text"] == ChartConfig.DEFAULT_TITLE


def test_spec_with_options(wide_file):
    """Test spec command applies selections, style and color overrides."""
    result = runner.invoke(
        app,
        [
            "spec", str(wide_file),
            "--x", "year",
            "--y", "profit", "--y", "sales_eu",
            "--title", "Quarterly",
            "--line-style", "dashed",
            "--no-markers",
            "--color", "profit=#FF0000",
        ],
    )

    assert result.exit_code == 0
    figure = json.loads(result.stdout)
    assert [trace["name"] for trace in figure["data"]] == ["profit", "sales_eu"]
    profit = figure["data"][0]
    assert profit["line"] == {"color": "#ff0000", "dash": "dash"}
    assert profit["mode"] == "lines"
    assert figure["layout"]["title"]["text"] == "Quarterly"


def test_spec_invalid_color(wide_file):
    """Test spec command exits on an invalid color value."""
    result = runner.invoke(app, ["spec", str(wide_file), "--color", "profit=blue"])

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_spec_malformed_color_option(wide_file):
    """Test spec command rejects color overrides without a series name."""
    result = runner.invoke(app, ["spec", str(wide_file), "--color", "#ff0000"])

    assert result.exit_code != 0


def test_spec_empty_selection_warns(tmp_path):
    """Test spec command warns when there is nothing to plot."""
    path = tmp_path / "single.csv"
    path.write_text("only\n1\n2\n", encoding="utf-8")

    result = runner.invoke(app, ["spec", str(path)])

    assert result.exit_code == 0
    assert "Nothing to plot" in result.output


def test_spec_writes_html(wide_file, tmp_path):
    """Test spec command writes an HTML figure."""
    out = tmp_path / "plot.html"

    result = runner.invoke(app, ["spec", str(wide_file), "--html", str(out)])

    assert result.exit_code == 0
    assert out.exists()
    assert "plotly" in out.read_text(encoding="utf-8").lower()
    assert f"Wrote {out}" in result.stdout


def test_spec_invalid_json(tmp_path):
    """Test spec command reports JSON shape errors."""
    path = tmp_path / "bad.json"
    path.write_text('{"a": 1}', encoding="utf-8")

    result = runner.invoke(app, ["spec", str(path)])

    assert result.exit_code == 1
    assert "Error parsing file" in result.output
