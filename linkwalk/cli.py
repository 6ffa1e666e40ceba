# === FILE: linkwalk/cli.py ===
#!/usr/bin/env python3
"""
Command line entry point for LinkWalk.

Commands:
  crawl     Walk the link graph from a root and print or save the results
  config    Show the effective configuration

Global options:
  --config PATH       YAML/JSON config file (optional; CLI options override it)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stdout if omitted)
  --log-format FORMAT Logging format string

crawl options:
  ROOT                Root node id (overrides config ``root``)
  --depth N           Maximum link-following depth
  --http              Fetch over HTTP instead of the fixture graph
  --graph PATH        Graph fixture file (YAML/JSON)
  --max-concurrency N Cap on in-flight fetches
  --json PATH         Save a JSON report
  --html PATH         Save an HTML report
  --template DIR      Directory with Jinja2 templates
  --pretty            Print the JSON report to stdout (indent 2)

Example:
  linkwalk crawl http://golang.org/ --depth 4
"""
import sys
from pathlib import Path
from typing import Any, Dict

import click
from pydantic import ValidationError

from linkwalk import __version__
from linkwalk.config import WalkConfig, load_config
from linkwalk.fixtures import DEMO_ROOT
from linkwalk.logger import init_logging
from linkwalk.engine import Engine
from linkwalk.report.json_report import render_json
from linkwalk.report.html_report import render_html
from linkwalk.report.text_report import render_lines

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _merge(cfg: Dict[str, Any], **overrides: Any) -> WalkConfig:
    data = dict(cfg)
    data.update({k: v for k, v in overrides.items() if v is not None})
    return WalkConfig(**data)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='LinkWalk, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML/JSON configuration file.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file path (stdout if omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Logging format string'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """LinkWalk command group."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    raw: Dict[str, Any] = {'root': DEMO_ROOT}
    if config_path is not None:
        try:
            raw = load_config(config_path).model_dump()
        except (OSError, ValueError, TypeError) as e:
            print_error(f'Failed to load configuration: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = raw


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('root', required=False)
@click.option('--depth', '-d', 'max_depth', type=click.IntRange(min=0), default=None,
              help='Maximum link-following depth')
@click.option('--http', 'use_http', is_flag=True,
              help='Fetch over HTTP instead of the fixture graph')
@click.option(
    '--graph', '-g', 'graph',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Graph fixture file (YAML/JSON)'
)
@click.option('--max-concurrency', 'max_concurrency', type=click.IntRange(min=1), default=None,
              help='Cap on in-flight fetches')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save a JSON report to a file'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save an HTML report to a file'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Directory with Jinja2 templates (bundled template by default)'
)
@click.option(
    '--pretty', is_flag=True,
    help='Print the JSON report to stdout (indent 2)'
)
@click.pass_context
def crawl_cmd(ctx, root, max_depth, use_http, graph, max_concurrency,
              json_output, html_output, template_dir, pretty):
    """Walk the graph and report every visited node."""
    try:
        cfg = _merge(
            ctx.obj['config'],
            root=root,
            max_depth=max_depth,
            fetcher='http' if use_http else None,
            graph=graph,
            max_concurrency=max_concurrency,
        )
    except (ValidationError, OSError) as e:
        print_error(f'Invalid configuration: {e}')

    click.echo(f'Walking from {cfg.root} (max depth {cfg.max_depth})')
    try:
        report = Engine(cfg).run()
    except Exception as e:
        print_error(f'Walk failed: {e}')

    if not json_output and not html_output:
        if pretty:
            click.echo(report.json(pretty=True))
        else:
            for line in render_lines(report):
                click.echo(line)
        return

    if json_output:
        try:
            saved_json = render_json(report, json_output)
            click.echo(f'JSON report: {saved_json}')
        except OSError as e:
            print_error(f'Failed to save JSON report: {e}')

    if html_output:
        try:
            saved_html = render_html(report, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Failed to save HTML report: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the effective configuration as JSON."""
    try:
        cfg = WalkConfig(**ctx.obj['config'])
    except (ValidationError, OSError) as e:
        print_error(f'Invalid configuration: {e}')
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
