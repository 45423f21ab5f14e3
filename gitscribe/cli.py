"""Command-line entry point: ``gitscribe burndown`` writes a milestone burndown PNG."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from gitscribe.analytics.burndown import BurndownOptions, EffortSource
from gitscribe.core.config import DEFAULT_CHART_HEIGHT, DEFAULT_CHART_WIDTH, VERSION
from gitscribe.core.errors import GitscribeError
from gitscribe.core.gitlab_client import GitLabAPI
from gitscribe.core.service import BurndownService
from gitscribe.visual.charts import burndown_chart, render_png

logger = logging.getLogger("gitscribe.cli")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="gitscribe", description="An automated GitLab progress reporter")
    ap.add_argument("-v", "--version", action="version", version=f"%(prog)s {VERSION}")
    ap.add_argument("-d", "--debug", action="store_true", help="run in debug mode")
    sub = ap.add_subparsers(dest="command", required=True)

    bd = sub.add_parser("burndown", help="generate a burndown chart for a milestone")
    bd.add_argument("--host", required=True, help="a URL to the GitLab instance")
    bd.add_argument("-t", "--token", required=True, help="the GitLab personal token with API access rights")
    bd.add_argument("-m", "--milestone", required=True, help="the title of the milestone to report on")
    bd.add_argument("-g", "--group", required=True, help="the name of the group owning the milestone")
    bd.add_argument("-o", "--output", required=True, type=Path, help="the path to the output PNG file")
    bd.add_argument(
        "-s",
        "--storypoints",
        action="store_true",
        help="use a label storypoints::[0-9]+ as effort marker instead of time",
    )
    bd.add_argument("--include-open", action="store_true", help="include effort of open issues")
    bd.add_argument("--use-estimate", action="store_true", help="use the effort estimate instead of spent")
    bd.add_argument("-w", "--width", type=int, default=DEFAULT_CHART_WIDTH, help="chart width in pixels")
    bd.add_argument("--height", type=int, default=DEFAULT_CHART_HEIGHT, help="chart height in pixels")
    return ap


def options_from_args(args: argparse.Namespace) -> BurndownOptions:
    return BurndownOptions(
        effort_source=EffortSource.ESTIMATE if args.storypoints else EffortSource.SPENT,
        include_open=args.include_open,
        use_estimate=args.use_estimate,
        width=args.width,
        height=args.height,
    )


def configure_logging(debug: bool) -> None:
    logging.basicConfig(format="[%(asctime)s] %(levelname)s %(name)s - %(message)s", level=logging.WARNING)
    logging.getLogger("gitscribe").setLevel(logging.DEBUG if debug else logging.WARNING)


def run_burndown(args: argparse.Namespace, service: BurndownService | None = None) -> None:
    service = service or BurndownService(GitLabAPI(args.host, args.token))
    options = options_from_args(args)
    milestone, series = service.build_burndown(args.group, args.milestone, options)
    chart = burndown_chart(series, milestone.title, width=options.width, height=options.height)
    logger.debug("Generating PNG image")
    args.output.write_bytes(render_png(chart))
    logger.debug("Wrote %s", args.output)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.debug)
    try:
        run_burndown(args)
    except (GitscribeError, LookupError) as exc:
        print(f"gitscribe: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
