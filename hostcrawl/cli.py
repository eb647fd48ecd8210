# === FILE: hostcrawl/cli.py ===
#!/usr/bin/env python3
"""
Command line entry point for hostcrawl.

Commands:
  crawl     Crawl a site starting at URL and print/save the page inventory
  config    Show the effective configuration

Global options:
  --config PATH       YAML/JSON config (default: configs/default.yaml if present)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stderr only when omitted)
  --log-format FORMAT Logging format string

crawl options:
  --concurrency, -c N Number of concurrent fetchers (default 25)
  --format, -f        stdout format: text or json
  --json-stdout, -j   Shorthand for --format json
  --pretty            Indent JSON output by 2
  --json PATH         Save the JSON report to a file
  --html PATH         Save the HTML report to a file
  --template DIR      Directory with the Jinja2 report template
  --crawl-timeout SEC Timeout for the whole crawl (seconds, > 0)

Also:
  --version, -v       Show the hostcrawl version

Example:
  hostcrawl crawl https://example.com -c 10 --format json --pretty
"""
import asyncio
import sys
from pathlib import Path

import click

from hostcrawl import __version__
from hostcrawl.aggregator import aggregate_results
from hostcrawl.config import load_config
from hostcrawl.crawler.models import InvalidURLError
from hostcrawl.engine import start_crawl
from hostcrawl.logger import DEFAULT_FORMAT, init_logging
from hostcrawl.report import DEFAULT_TEMPLATE_DIR, render_html, render_json, render_text

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='hostcrawl, version %(version)s')
@click.option(
    '--config', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML or JSON config file.'
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
    help='Log file path (stderr only when omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Logging format string'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """hostcrawl: crawl every page of a single host."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Failed to load configuration: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('url', required=False)
@click.option(
    '--concurrency', '-c', 'concurrency',
    type=click.IntRange(min=1),
    default=None,
    help='Number of concurrently operating HTTP fetchers (overrides config)'
)
@click.option(
    '--format', '-f', 'output_format',
    default='text', show_default=True,
    type=click.Choice(['text', 'json']),
    help='Format of the results printed to stdout'
)
@click.option(
    '--pretty', is_flag=True,
    help='Indent JSON output by 2'
)
@click.option(
    '--json-stdout', '-j', 'json_stdout',
    is_flag=True,
    help='Print the results to stdout as JSON (same as --format json)'
)
@click.option(
    '--json', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the JSON report to a file'
)
@click.option(
    '--html', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the HTML report to a file'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=DEFAULT_TEMPLATE_DIR,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Directory with the report.html.j2 template'
)
@click.option(
    '--crawl-timeout', 'crawl_timeout',
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help='Timeout for the whole crawl (seconds, > 0)'
)
@click.pass_context
def crawl(ctx, url, concurrency, output_format, pretty, json_stdout, json_output, html_output, template_dir,
          crawl_timeout):
    """Crawl URL (or seed_url from the config) and report its pages."""
    cfg = ctx.obj['config']
    if json_stdout:
        output_format = 'json'
    if concurrency is not None:
        cfg = cfg.model_copy(update={'concurrency': concurrency})
    seed = url or cfg.seed_url
    if not seed:
        print_error('You must provide a URL to start the crawl')

    try:
        if crawl_timeout is not None:
            pages = asyncio.run(
                asyncio.wait_for(start_crawl(cfg, seed), timeout=crawl_timeout)
            )
        else:
            pages = asyncio.run(start_crawl(cfg, seed))
    except InvalidURLError as e:
        print_error(f'Invalid URL: {e}')
    except asyncio.TimeoutError:
        print_error(f'Crawl did not finish within {crawl_timeout} seconds')
    except Exception as e:
        print_error(f'Crawl failed: {e}')

    report = aggregate_results(pages, seed=seed)

    if json_output:
        try:
            saved_json = render_json(report, json_output, pretty=pretty)
            click.echo(f'JSON report: {saved_json}', err=True)
        except Exception as e:
            print_error(f'Failed to save JSON report: {e}')

    if html_output:
        try:
            saved_html = render_html(report, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}', err=True)
        except Exception as e:
            print_error(f'Failed to save HTML report: {e}')

    if output_format == 'json':
        click.echo(report.json(pretty=pretty))
    elif report.pages:
        click.echo(render_text(report.pages))


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the effective configuration as JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
