from __future__ import annotations

"""CLI entrypoint: register the viewsvn:// handler, or open the log a link points at."""

import argparse
import logging
import sys

from viewsvn import __version__
from viewsvn.config import ViewSvnConfig, load_config
from viewsvn.dispatch import dispatch
from viewsvn.errors import ViewSvnError
from viewsvn.launcher import SubprocessRunner
from viewsvn.log import configure_logging
from viewsvn.protocol_handler import register_protocol_handler

LOGGER = logging.getLogger("viewsvn")


def _register(config: ViewSvnConfig) -> None:
    register_protocol_handler(config.registry_root)


def _view_log(url: str, config: ViewSvnConfig) -> None:
    runner = SubprocessRunner(timeout_seconds=config.launch_timeout_seconds)
    dispatch(url, runner=runner, viewer=config.viewer, logger=LOGGER)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="viewsvn",
        description=(
            "Open TortoiseSVN's log at the revision named in a viewsvn:// url. "
            "Run without arguments to register this program as the viewsvn:// handler."
        ),
    )
    parser.add_argument("-u", "--url", help="viewsvn:// url to open")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    args = build_parser().parse_args(argv)

    config = load_config()
    configure_logging(config.log_level, config.log_file)
    print(f"Log path: {config.log_file}")
    LOGGER.info("Argument count: %s", len(argv))

    try:
        # argparse rejects any argument list without --url, so no url means no arguments.
        if args.url is None:
            _register(config)
        else:
            _view_log(args.url, config)
    except ViewSvnError as exc:
        LOGGER.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
