# === FILE: mail_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа MailScout: обход сайта и сбор e-mail адресов в CSV.

Опции:
  --url, -u URL         Стартовый URL (обязателен, если не задан в конфиге)
  --output, -o PATH     CSV-файл с результатами (обязателен, если не задан в конфиге)
  --depth, -d INT       Максимальная глубина обхода (default: 3)
  --cross-domain        Переходить по ссылкам на другие хосты
  --max-pages INT       Макс. число страниц (default: 100)
  --debug               Подробный журнал решений краулера
  --config, -c PATH     YAML/JSON-конфиг; опции командной строки важнее
  --timeout SEC         Таймаут одного запроса (default: 10)
  --max-queue INT       Лимит очереди ожидающих URL (default: 10000)
  --crawl-timeout SEC   Таймаут всего обхода (секунд)
  --log-file PATH       Дополнительно писать логи в файл

Дополнительно:
  --version, -v         Показать версию MailScout

Пример:
  mail-scout --url https://example.com --output emails.csv --depth 2 --debug
"""
import asyncio
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from mail_scout import __version__
from mail_scout.config import build_config
from mail_scout.engine import run_extraction
from mail_scout.events import create_event_log
from mail_scout.logger import configure

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='MailScout, version %(version)s')
@click.option('--url', '-u', 'url', default=None, help='Стартовый URL для обхода.')
@click.option(
    '--output', '-o', 'output',
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help='CSV-файл с результатами.'
)
@click.option(
    '--depth', '-d', 'depth',
    type=click.IntRange(min=0), default=None,
    help='Максимальная глубина обхода  [default: 3]'
)
@click.option('--cross-domain', 'cross_domain', is_flag=True, help='Переходить на другие хосты.')
@click.option(
    '--max-pages', 'max_pages',
    type=click.IntRange(min=1), default=None,
    help='Макс. число страниц  [default: 100]'
)
@click.option('--debug', is_flag=True, help='Подробный журнал решений краулера.')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к YAML/JSON-конфигу.'
)
@click.option('--timeout', 'timeout', type=float, default=None, help='Таймаут запроса, секунд  [default: 10]')
@click.option(
    '--max-queue', 'max_queue',
    type=click.IntRange(min=1), default=None,
    help='Лимит очереди ожидающих URL  [default: 10000]'
)
@click.option('--crawl-timeout', 'crawl_timeout', type=float, default=None, help='Таймаут всего обхода (секунд)')
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (только stdout, если не указан)'
)
def cli(url, output, depth, cross_domain, max_pages, debug, config_path, timeout, max_queue,
        crawl_timeout, log_file):
    """Обойти сайт и сохранить найденные e-mail адреса в CSV."""
    try:
        cfg = build_config(
            config_path,
            url=url,
            output=output,
            max_depth=depth,
            cross_domain=True if cross_domain else None,
            max_pages=max_pages,
            timeout=timeout,
            max_queue_size=max_queue,
            debug=True if debug else None,
        )
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        print_error(f'Ошибка конфигурации ({fields}): {e}')
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')

    logger = configure(
        level='DEBUG' if cfg.debug else 'INFO',
        log_file=str(log_file) if log_file else None,
    )
    events = create_event_log(cfg.debug, logger)
    if cfg.debug:
        click.echo('[DEBUG] Debug mode is active')

    click.echo(f'Starting email extraction from: {cfg.url}')
    try:
        if crawl_timeout:
            summary = asyncio.run(
                asyncio.wait_for(run_extraction(cfg, events, logger), timeout=crawl_timeout)
            )
        else:
            summary = asyncio.run(run_extraction(cfg, events, logger))
    except asyncio.TimeoutError:
        print_error(f'Обход не завершён за {crawl_timeout} секунд')
    except Exception as e:
        print_error(f'Error: {e}')

    click.echo('')
    click.echo('Extraction complete!')
    click.echo(f'Pages visited: {summary.pages_visited} ({summary.pages_failed} failed)')
    click.echo(f'Emails found: {summary.found}')
    click.echo(f'New unique emails: {summary.written}')
    click.echo(f'Results saved to: {summary.output}')


if __name__ == "__main__":
    cli()
