"""Click CLI with analyze and serve subcommands."""

import os
from pathlib import Path

import click

from . import __version__
from .analyzer import run_analysis
from .config import Settings, setup_logging
from .git_stats import GitService
from .report import build_report, write_ai_context, write_html_report, write_json_report


@click.group()
@click.version_option(version=__version__)
def cli():
    """Projectify: dependency graph and blast radius analysis."""


@cli.command()
@click.argument("project_path", type=click.Path(exists=True, file_okay=False, path_type=Path), default=".")
@click.option("--top", "-n", "top_limit", type=click.IntRange(min=0), default=None, help="Number of top risks to show")
@click.option("-o", "--output-dir", type=click.Path(file_okay=False, path_type=Path), default=None, help="Report directory")
@click.option("--json/--no-json", "write_json", default=True, help="Write the JSON analysis report")
@click.option("--html/--no-html", "write_html", default=True, help="Write the interactive HTML graph report")
@click.option("--context/--no-context", "write_context", default=False, help="Write the AI context Markdown")
@click.option("--git/--no-git", "include_git", default=True, help="Include commit history statistics")
@click.option("--ignore", "-i", "ignore", multiple=True, help="Glob pattern to skip (repeatable)")
@click.option("--log-level", default=None, help="Logging level (DEBUG, INFO, ...)")
def analyze(
    project_path: Path,
    top_limit: int | None,
    output_dir: Path | None,
    write_json: bool,
    write_html: bool,
    write_context: bool,
    include_git: bool,
    ignore: tuple[str, ...],
    log_level: str | None,
):
    """Analyze a project and rank files by blast radius."""
    overrides: dict = {"project_path": project_path}
    if top_limit is not None:
        overrides["top_limit"] = top_limit
    if output_dir is not None:
        overrides["output_dir"] = output_dir
    if ignore:
        overrides["ignore_patterns"] = list(ignore)
    if log_level is not None:
        overrides["log_level"] = log_level

    try:
        config = Settings(**overrides)
    except ValueError as e:
        raise click.UsageError(str(e)) from e

    setup_logging(config.log_level)

    try:
        click.echo(click.style(f"Starting analysis for: {config.project_path}", fg="blue"))
        analysis, graph = run_analysis(config.project_path, config.ignore_patterns)
        click.echo(click.style(f"Found {analysis.file_count} files.", fg="green"))

        top_risks = graph.get_top_blast_radius(config.top_limit)
        click.echo(click.style("\nTop Blast Radius Risks:", bold=True, underline=True))
        for node in top_risks:
            click.echo(
                f"{click.style(os.path.basename(node.id), fg='cyan')} : "
                f"{click.style(f'{node.blast_radius:.1f}%', fg='red')} impact "
                f"({node.affected_files} files)"
            )

        git = None
        if include_git:
            git = GitService(config.project_path).get_analysis(config.git_log_limit)

        if write_json:
            report = build_report(config.project_path, analysis, graph, config.top_limit, git)
            report_path = write_json_report(report, config.report_path)
            click.echo(click.style(f"\nJSON report saved to {report_path}", fg="green"))

        if write_html:
            html_path = write_html_report(config.project_path, analysis, graph, config.html_path)
            click.echo(click.style(f"HTML report saved to {html_path}", fg="green"))

        if write_context:
            context_path = write_ai_context(graph, config.context_path)
            click.echo(click.style(f"AI context saved to {context_path}", fg="green"))
    except Exception as e:
        click.echo(click.style(f"Analysis failed: {e}", fg="red"), err=True)
        raise SystemExit(1) from e


@cli.command()
def serve():
    """Run the MCP server for the project set in PROJECTIFY_PROJECT_PATH."""
    from .server import main

    main()


def main():
    """Entry point for the projectify command."""
    cli()


if __name__ == "__main__":
    main()
