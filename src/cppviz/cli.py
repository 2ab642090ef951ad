import sys
from pathlib import Path

import click
from loguru import logger

from . import __version__, get_language_map
from .codeviews.flowchart.flowchart_driver import FlowchartDriver
from .codeviews.includes.include_driver import IncludeGraphDriver
from .utils import repo_scanner
from .utils.postprocessor import GRAPH_FORMATS


def configure_logging(verbose):
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


@click.group()
@click.version_option(version=__version__, prog_name="cppviz")
@click.help_option("-h", "--help")
@click.option("-v", "--verbose", is_flag=True, help="Log progress and diagnostics to stderr.")
def main(verbose):
    """Mermaid flowcharts and include graphs for C/C++ code."""
    configure_logging(verbose)


@main.command()
@click.argument("code_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", "output_file", type=click.Path(dir_okay=False), default=None,
              help="Base name of the files to write; stdout when omitted.")
@click.option("--format", "graph_format", type=click.Choice(GRAPH_FORMATS), default="mermaid", show_default=True)
@click.option("--direction", type=click.Choice(["TD", "LR"]), default="TD", show_default=True)
@click.option("--click-bindings", is_flag=True, help="Add click handlers carrying the source line.")
@click.option("--png", "output_png", is_flag=True, help="Also render the DOT output with graphviz.")
def flowchart(code_file, output_file, graph_format, direction, click_bindings, output_png):
    """Draw the control flow of CODE_FILE."""
    src_language = get_language_map().get(code_file.suffix.lower(), "cpp")
    src_code = code_file.read_text(encoding="utf-8", errors="replace")
    properties = {
        "direction": direction,
        "click_bindings": click_bindings,
        "source_path": str(code_file.resolve()),
        "output_png": output_png,
    }
    logger.info("Building {} flowchart for {}", src_language, code_file)
    driver = FlowchartDriver(src_language, src_code, output_file, graph_format, properties)
    if not output_file:
        click.echo(driver.mermaid, nl=False)


@main.command()
@click.argument("root_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("-f", "--folder", "folders", multiple=True,
              help="Only draw files in this folder (relative to ROOT_DIR, 'Root' for the top). Repeatable.")
@click.option("--ignore", "ignore_folders", multiple=True,
              help="Folder name to skip, replacing the built-in list. Repeatable.")
@click.option("-o", "--output", "output_file", type=click.Path(dir_okay=False), default=None,
              help="Base name of the files to write; stdout when omitted.")
@click.option("--format", "graph_format", type=click.Choice(GRAPH_FORMATS), default="mermaid", show_default=True)
def deps(root_dir, folders, ignore_folders, output_file, graph_format):
    """Draw the #include dependencies between files under ROOT_DIR."""
    properties = {}
    if ignore_folders:
        properties["ignore_folders"] = list(ignore_folders)
    driver = IncludeGraphDriver(root_dir, list(folders), output_file, graph_format, properties)
    logger.info(
        "Include graph has {} files and {} edges",
        driver.graph.number_of_nodes(),
        driver.graph.number_of_edges(),
    )
    if not output_file:
        click.echo(driver.mermaid, nl=False)


@main.command()
@click.argument("root_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
def folders(root_dir):
    """List the folders under ROOT_DIR that contain C/C++ files."""
    project_folders = repo_scanner.get_project_folders(root_dir)
    if not project_folders:
        raise click.ClickException("No source folders found.")
    for folder in project_folders:
        click.echo(folder)


if __name__ == "__main__":
    main()
