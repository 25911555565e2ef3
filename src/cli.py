import json
from pathlib import Path
from typing import List, Optional

import typer

from core.dependencies import DependencyContainer
from data.errors import ParseError, format_error_for_ui
from ui.state.controller import ReactiveController
from ui.state.plot_state import LineStyle

app = typer.Typer(
    name="scientiflow",
    help="Inspect CSV/JSON datasets and produce line plot specifications.",
    add_completion=False,
)


def _build_controller() -> ReactiveController:
    container = DependencyContainer(logger_name="scientiflow_cli", file_logging=False, console_output=False)
    return container.create_controller()


def _load_or_exit(controller: ReactiveController, file: Path) -> None:
    try:
        controller.load_file(file)
    except ParseError as e:
        typer.secho(format_error_for_ui(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    except OSError as e:
        typer.secho(f"Could not read '{file}': {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


def _parse_color_overrides(values: List[str]) -> List[tuple]:
    overrides = []
    for value in values:
        series_id, sep, color = value.rpartition("=")
        if not sep or not series_id:
            raise typer.BadParameter(f"Expected SERIES=#RRGGBB, got '{value}'", param_hint="--color")
        overrides.append((series_id, color))
    return overrides


@app.command()
def columns(file: Path = typer.Argument(..., help="CSV or JSON file to inspect.")):
    """
    List the columns of a dataset and the default axis selections.
    """
    controller = _build_controller()
    _load_or_exit(controller, file)
    state = controller.state
    typer.echo(f"Columns ({len(state.columns)}): {', '.join(state.columns)}")
    typer.echo(f"Rows: {len(state.dataset)}")
    typer.echo(f"Default X: {state.x_column or '-'}")
    typer.echo(f"Default Y: {', '.join(state.y_columns) or '-'}")


@app.command()
def spec(
    file: Path = typer.Argument(..., help="CSV or JSON file to plot."),
    x: Optional[str] = typer.Option(None, "--x", "-x", help="Column for the X axis."),
    y: Optional[List[str]] = typer.Option(None, "--y", "-y", help="Column to plot as a series (repeatable)."),
    title: Optional[str] = typer.Option(None, "--title", help="Plot title."),
    x_label: Optional[str] = typer.Option(None, "--x-label", help="X axis label."),
    y_label: Optional[str] = typer.Option(None, "--y-label", help="Y axis label."),
    line_style: LineStyle = typer.Option(LineStyle.SOLID, "--line-style", case_sensitive=False),
    markers: bool = typer.Option(True, "--markers/--no-markers", help="Show point markers."),
    color: Optional[List[str]] = typer.Option(None, "--color", help="Series color as SERIES=#RRGGBB (repeatable)."),
    html: Optional[Path] = typer.Option(None, "--html", help="Write an HTML figure instead of printing JSON."),
):
    """
    Print the plot specification for a dataset as JSON, or write it as an HTML figure.
    """
    controller = _build_controller()
    _load_or_exit(controller, file)

    if x is not None:
        controller.set_x_column(x)
    if y:
        controller.set_y_columns(y)

    style_changes = {"line_style": line_style.value, "show_markers": markers}
    if title is not None:
        style_changes["title"] = title
    if x_label is not None:
        style_changes["x_label"] = x_label
    if y_label is not None:
        style_changes["y_label"] = y_label
    controller.set_style_option(**style_changes)

    try:
        for series_id, series_color in _parse_color_overrides(color or []):
            controller.override_color(series_id, series_color)
    except ValueError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    plot = controller.plot
    if plot.is_empty:
        typer.secho("Nothing to plot: select an X column and at least one Y column.", fg=typer.colors.YELLOW, err=True)

    if html is not None:
        from ui.chart_renderer import build_figure

        build_figure(plot).write_html(str(html))
        typer.secho(f"Wrote {html}", fg=typer.colors.GREEN)
    else:
        typer.echo(json.dumps(plot.to_dict(), indent=2))


if __name__ == "__main__":
    app()
