import logging
import sys
import time
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from linkcheck.configs import load_check_config
from linkcheck.container import Container
from linkcheck.domain.check_speed import CheckSpeed
from linkcheck.domain.status import Status
from linkcheck.exceptions import ConfigError
from linkcheck.services.result_formatter import format_result, status_style

USAGE = """
Description:
  linkcheck crawls a site and reports the status of each link on the site.
  Use the optional flags to set the crawl speed. Fast speeds may trigger
  the rate limiters of the site being checked.

Flags:
  -normal: 2 requests per second. Default speed if no flag is used.
  -slow: 1 request per second.
  -fast: 10 requests per second.
  -furious: 20 requests per second.
  -warp: 100 requests per second.

Usage:
  linkcheck https://somewebpage123.com
"""

app = typer.Typer(add_completion=False)


def _usage() -> None:
    sys.stderr.write(USAGE)


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )


def _pick_speed(normal: bool, slow: bool, fast: bool, furious: bool, warp: bool) -> Optional[CheckSpeed]:
    flags = (
        (normal, CheckSpeed.NORMAL),
        (slow, CheckSpeed.SLOW),
        (fast, CheckSpeed.FAST),
        (furious, CheckSpeed.FURIOUS),
        (warp, CheckSpeed.WARP),
    )
    for enabled, speed in flags:
        if enabled:
            return speed
    return None


@app.command()
def run(
    url: Optional[str] = typer.Argument(None, help="Site to check"),
    slow: bool = typer.Option(False, "-slow", help="1 request per second"),
    normal: bool = typer.Option(False, "-normal", help="2 requests per second"),
    fast: bool = typer.Option(False, "-fast", help="10 requests per second"),
    furious: bool = typer.Option(False, "-furious", help="20 requests per second"),
    warp: bool = typer.Option(False, "-warp", help="100 requests per second"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Also report links that are up"),
    config_file: Optional[str] = typer.Option(None, "--config", help="YAML check config"),
    progress: Optional[bool] = typer.Option(None, "--progress/--no-progress", help="Show a progress indicator"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level"),
):
    _setup_logging(log_level)

    try:
        options = load_check_config(config_file) if config_file else {}
    except (OSError, ConfigError) as e:
        sys.stderr.write(f"{e}\n")
        raise typer.Exit(code=1)

    config_site = options.pop("site", None)
    site = url or config_site
    if not site or site == "help":
        _usage()
        raise typer.Exit(code=1)

    speed = _pick_speed(normal, slow, fast, furious, warp)
    if speed is not None:
        options["speed"] = speed
        options.pop("rate", None)
        options.pop("burst", None)
    if verbose:
        options["verbose"] = True
    if progress is not None:
        options["progress"] = progress
    else:
        options.setdefault("progress", True)

    container = Container()
    timeout = options.pop("timeout", None)
    if timeout is not None:
        container.config.HTTP_TIMEOUT.from_value(timeout)

    try:
        checker = container.link_checker(output=sys.stderr, **options)
    except ConfigError as e:
        sys.stderr.write(f"{e}\n")
        raise typer.Exit(code=1)

    console = Console()
    started = time.monotonic()

    # The crawl runs in the background so results print while it is going.
    worker = checker.start(site)
    for result in checker.stream_results():
        if checker.verbose or result.status is not Status.UP:
            console.print(format_result(result), style=status_style(result.status), markup=False, highlight=False)
    worker.join()

    console.print(f"\nlinkcheck completed in {time.monotonic() - started:.2f}s", markup=False, highlight=False)


def main():
    app()
