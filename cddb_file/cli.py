from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .commands import check as cmd_check
from .commands import scan as cmd_scan
from .commands import show as cmd_show
from .config import Settings, find_config
from .models import CddbFileError

LOG_FORMAT = "%(levelname).1s | %(name)s | %(message)s"

C_RESET = "\033[0m"
LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",  # Cyan
    logging.INFO: "\033[37m",  # Light gray
    logging.WARNING: "\033[33m",  # Yellow
    logging.ERROR: "\033[31m",  # Red
    logging.CRITICAL: "\033[35m",  # Magenta
}

logger = logging.getLogger(__name__)


class ShortPathFormatter(logging.Formatter):
    def __init__(self, fmt: str, roots: list[Path]) -> None:
        super().__init__(fmt)
        self.roots = [str(root) for root in roots if root]

    def _shorten(self, message: str) -> str:
        for root in self.roots:
            if not root:
                continue
            if not message:
                break
            message = message.replace(f"{root}/", "")
            message = message.replace(root, "")
        return message

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        return self._shorten(message)


class ColorFormatter(ShortPathFormatter):
    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = LEVEL_COLORS.get(record.levelno)
        if not color:
            return message
        return f"{color}{message}{C_RESET}"


def configure_logging(level_name: str, roots: list[Path]) -> None:
    log_level = getattr(logging, level_name.upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(log_level)
    handler = logging.StreamHandler()
    handler.setFormatter(ColorFormatter(LOG_FORMAT, roots))
    root_logger.addHandler(handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Read CDDB/freedb disc data files")
    parser.add_argument("--config", type=Path, help="Path to cddb.yaml")
    parser.add_argument("--log-level", default="WARNING", help="Python logging level")

    subparsers = parser.add_subparsers(dest="command", required=True)
    show_parser = subparsers.add_parser("show", help="Print the contents of one data file")
    show_parser.add_argument("path", type=Path, help="CDDB data file")
    show_parser.add_argument(
        "--json",
        action="store_true",
        help="Emit machine-readable JSON to stdout",
    )
    check_parser = subparsers.add_parser(
        "check", help="Verify that data files parse completely"
    )
    check_parser.add_argument("paths", type=Path, nargs="+", help="CDDB data files")
    scan_parser = subparsers.add_parser(
        "scan", help="List every disc found under freedb-style category directories"
    )
    scan_parser.add_argument(
        "roots",
        type=Path,
        nargs="*",
        help="Roots to scan (defaults to library.roots from the config)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    config_path = find_config(args.config)
    settings = Settings.load(config_path) if config_path else Settings()
    configure_logging(args.log_level, list(settings.library.roots))
    if config_path:
        logger.debug("Loaded settings from %s", config_path)

    try:
        match args.command:
            case "show":
                cmd_show.run(settings, args.path, json_output=args.json)
            case "check":
                report = cmd_check.run(settings, args.paths)
                for line in report.checks:
                    print(line)
                if not report.ok:
                    raise SystemExit(1)
            case "scan":
                cmd_scan.run(settings, args.roots)
            case _:
                parser.error("Unknown command")
    except (OSError, CddbFileError) as exc:
        logger.error("%s", exc)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
