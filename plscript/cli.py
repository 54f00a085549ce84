from __future__ import annotations

import logging
import sys
from typing import Optional

import click
import oracledb

from .classifier import classify
from .config import ConfigError, Settings, load_settings
from .loader import ScriptSourceError, load_script
from .logging_setup import setup_logging
from .runner import ScriptRunner, format_results
from .splitter import StatementSplitter

logger = logging.getLogger(__name__)

_source_path = click.argument(
    "path",
    required=False,
    type=click.Path(exists=True, dir_okay=False, file_okay=True, path_type=str),
)
_source_query = click.option("-q", "--query", default=None, help="스크립트 텍스트를 직접 전달 (PATH 대신)")


@click.group(name="plscript")
@click.option("--log-level", default=None, envvar="PLSCRIPT_LOG_LEVEL", help="로그 레벨 (기본 WARNING)")
@click.pass_context
def app(ctx: click.Context, log_level: Optional[str]) -> None:
    """
    plscript CLI

    한국어 주석: SQL*Plus 스타일 스크립트를 실행 가능한 문장 단위로 분할합니다.
    """
    try:
        settings = load_settings()
        if log_level:
            settings.log_level = log_level.upper()
        setup_logging(settings.log_level)
    except ConfigError as exc:
        click.echo(f"Invalid configuration: {exc}", err=True)
        sys.exit(1)
    ctx.obj = settings


@app.command(name="split")
@_source_path
@_source_query
@click.option("--show-kind", is_flag=True, default=False, help="각 문장의 종류(Simple/Block)를 함께 출력")
@click.pass_obj
def split_cmd(settings: Settings, path: Optional[str], query: Optional[str], show_kind: bool) -> None:
    """
    Print the statements of a script, one after another, separated by "/" lines.
    """
    try:
        raw_text = load_script(query=query, path=path)
    except ScriptSourceError as exc:
        click.echo(f"Split failed: {exc}", err=True)
        sys.exit(1)
    for stmt in StatementSplitter(settings.splitter).split(raw_text):
        if show_kind:
            click.echo(f"-- {stmt.kind.value} @{stmt.offset}")
        click.echo(stmt.text)
        click.echo("/")


@app.command(name="classify")
@click.argument("statement")
def classify_cmd(statement: str) -> None:
    """Print the status message for a statement that returned no rows."""
    click.echo(classify(statement))


@app.command(name="run")
@_source_path
@_source_query
@click.option("--dsn", envvar="ORACLE_DSN", default=None, help="host:port/service")
@click.option("--user", envvar="ORACLE_USER", default=None)
@click.option("--password", envvar="ORACLE_PASSWORD", default=None)
@click.option(
    "--stop-on-error/--continue-on-error",
    default=None,
    help="오류 발생 시 중단 여부 (기본값은 PLSCRIPT_STOP_ON_ERROR)",
)
@click.pass_obj
def run_cmd(
    settings: Settings,
    path: Optional[str],
    query: Optional[str],
    dsn: Optional[str],
    user: Optional[str],
    password: Optional[str],
    stop_on_error: Optional[bool],
) -> None:
    """
    Execute every statement of a script in order against an Oracle database.

    한국어 주석: 연결 계열 오류(ORA-03113 등)는 항상 실행을 중단합니다.
    """
    try:
        raw_text = load_script(query=query, path=path)
    except ScriptSourceError as exc:
        click.echo(f"Run failed: {exc}", err=True)
        sys.exit(1)

    dsn = dsn or settings.dsn
    if not dsn:
        click.echo("Run failed: no DSN given (--dsn or ORACLE_DSN)", err=True)
        sys.exit(1)
    if stop_on_error is None:
        stop_on_error = settings.stop_on_error

    statements = StatementSplitter(settings.splitter).split(raw_text)

    try:
        conn = oracledb.connect(user=user or settings.user, password=password or settings.password, dsn=dsn)
    except oracledb.Error as exc:
        click.echo(f"Run failed: {exc}", err=True)
        sys.exit(1)
    runner = ScriptRunner(conn, stop_on_error=stop_on_error)
    results = runner.run(statements)
    # Nothing to commit on a session that is already gone.
    lost = bool(results) and runner.is_connection_error(results[-1].error or "")
    commit_failed = False
    if not lost:
        try:
            conn.commit()
        except oracledb.Error as exc:
            click.echo(f"Commit failed: {exc}", err=True)
            commit_failed = True
    try:
        conn.close()
    except oracledb.Error as exc:
        logger.warning("could not close connection: %s", exc)

    if results:
        click.echo(format_results(results))
    if commit_failed or any(not r.ok for r in results):
        sys.exit(1)
