"""
hn-digest CLI

Run the top-stories pipeline once (e.g. from cron), or serve the HTTP trigger.
"""
import json
import logging
import sys

import click
from dotenv import load_dotenv

from .config import Settings
from .core import StoryPipeline, build_client
from .exceptions import FetchFailure
from .notifier import DryRunNotifier


@click.group()
@click.option('--log-level', default=None, help='Logging level (default: LOG_LEVEL or INFO)')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, log_level, verbose):
    """HN Digest - Hacker News top stories to ntfy push notifications"""
    load_dotenv()
    settings = Settings.from_env()
    level = 'DEBUG' if verbose else (log_level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    ctx.ensure_object(dict)
    ctx.obj['settings'] = settings


@cli.command('run')
@click.option('--mode', type=click.Choice(['story', 'digest']), default=None, help='Override NOTIFY_MODE')
@click.option('--limit', type=int, default=None, help='Override STORY_LIMIT')
@click.option('--dry-run', is_flag=True, help='Log notifications instead of sending them')
@click.pass_context
def run(ctx, mode, limit, dry_run):
    """Fetch, summarize and notify once"""
    settings: Settings = ctx.obj['settings']
    if limit is not None:
        settings = settings.model_copy(update={'story_limit': limit})

    with build_client(settings) as client:
        notifier = DryRunNotifier() if dry_run else None
        pipeline = StoryPipeline.from_settings(settings, client, notifier=notifier)
        try:
            result = pipeline.run(mode)
        except FetchFailure as e:
            logging.getLogger(__name__).error("%s", e)
            click.echo(json.dumps({'error': 'Failed to fetch top stories'}), err=True)
            sys.exit(1)
    click.echo(json.dumps(result.to_response()))


@cli.command('serve')
@click.option('--host', default='0.0.0.0', help='Bind address')
@click.option('--port', default=8000, type=int, help='Bind port')
def serve(host, port):
    """Serve the /api/hn trigger endpoint"""
    import uvicorn

    uvicorn.run('hn_digest.app:create_app', factory=True, host=host, port=port)


def main():
    cli(obj={})


if __name__ == '__main__':
    main()
