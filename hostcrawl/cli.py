#!/usr/bin/env python3
"""
Command line entry point for hostcrawl.

Commands:
  crawl     Crawl every page of the seed's host and print/save the results
  config    Show the effective configuration

Global options:
  --config PATH       YAML/JSON config file (default: configs/default.yaml if present)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stderr only if omitted)
  --log-format FORMAT Logging format string

crawl options:
  --url URL           Seed URL (overrides seed_url)
  --workers INT       Number of parallel workers (overrides worker_count)
  --timeout SEC       Per-request timeout (overrides request_timeout)
  --json PATH         Save a JSON report
  --html PATH         Save an HTML report
  --template DIR      Directory with Jinja2 templates for the HTML report
  --pretty            Indent the JSON report
  --quiet             Do not print pages as they are visited
  --crawl-timeout SEC Timeout for the whole crawl (seconds)

Additionally:
  --version, -v       Show the hostcrawl version

Example:
  hostcrawl crawl --url https://example.com --workers 20 --json report.json
"""
import asyncio
import sys
from pathlib import Path

import click

from hostcrawl import __version__
from hostcrawl.config import load_config
from hostcrawl.engine import run_crawl
from hostcrawl.errors import ConfigError
from hostcrawl.logger import init_logging
from hostcrawl.report.console import ConsoleReporter
from hostcrawl.report.html_report import render_html
from hostcrawl.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _load(ctx, **overrides):
    try:
        return load_config(ctx.obj['config_path'], overrides=overrides)
    except (FileNotFoundError, ValueError, TypeError) as e:
        # pydantic.ValidationError is a ValueError
        print_error(f'Failed to load configuration: {e}')


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='hostcrawl, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Path to a YAML or JSON configuration file.'
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
    help='Log file (stderr if omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(name)s %(message)s',
    show_default=True,
    help='Logging format string'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """hostcrawl command group."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.option('--url', '-u', 'seed_url', default=None, help='Seed URL to crawl')
@click.option('--workers', '-w', 'worker_count', type=int, default=None, help='Number of parallel workers')
@click.option('--timeout', 'request_timeout', type=float, default=None, help='Per-request timeout (seconds)')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save a JSON report to this file'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save an HTML report to this file'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Directory with Jinja2 templates'
)
@click.option('--pretty', is_flag=True, help='Indent the JSON report')
@click.option('--quiet', '-q', is_flag=True, help='Do not print pages as they are visited')
@click.option(
    '--crawl-timeout', 'crawl_timeout',
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help='Timeout for the whole crawl (seconds)'
)
@click.pass_context
def crawl(ctx, seed_url, worker_count, request_timeout, json_output, html_output,
          template_dir, pretty, quiet, crawl_timeout):
    """Crawl the seed's host and report every visited page."""
    cfg = _load(ctx, seed_url=seed_url, worker_count=worker_count, request_timeout=request_timeout)
    reporter = ConsoleReporter(quiet=quiet)
    try:
        if crawl_timeout is not None:
            stats, results = asyncio.run(
                asyncio.wait_for(run_crawl(cfg, reporter), timeout=crawl_timeout)
            )
        else:
            stats, results = asyncio.run(run_crawl(cfg, reporter))
    except asyncio.TimeoutError:
        print_error(f'Crawl did not finish within {crawl_timeout} seconds')
    except ConfigError as e:
        print_error(f'Invalid configuration: {e}')

    if json_output:
        try:
            saved_json = render_json(results, json_output, stats=stats, pretty=pretty)
            click.echo(f'JSON report: {saved_json}')
        except OSError as e:
            print_error(f'Failed to save JSON report: {e}')

    if html_output:
        try:
            saved_html = render_html(results, html_output, template_dir=template_dir, stats=stats)
            click.echo(f'HTML report: {saved_html}')
        except OSError as e:
            print_error(f'Failed to save HTML report: {e}')

    click.echo(
        f'Crawled {stats.pages} page(s), {stats.failures} failure(s) in {stats.elapsed:.2f} s'
    )


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the effective configuration as JSON."""
    cfg = _load(ctx)
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
