"""Command-line entry point and interactive menu.

Usage::

    zipstats csv parking.csv properties.csv population.txt log.txt
    zipstats --serve --port 8080 json parking.json properties.csv population.txt log.txt
    zipstats --serve            # configure the files later via POST /parking/arguments
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable, Sequence

from zipstats.aggregator import StatsAggregator
from zipstats.audit import AuditLog
from zipstats.config import StatsConfig
from zipstats.exceptions import DatasetLoadError, InvalidQuestionError, ZipStatsConfigError
from zipstats.models.answers import render_answer
from zipstats.models.questions import Question
from zipstats.validation import validate_config

EXIT_CHOICE = "0"


class Menu:
    """Interactive console loop over a :class:`StatsAggregator`."""

    def __init__(
        self,
        aggregator: StatsAggregator,
        audit: AuditLog,
        *,
        read: Callable[[str], str] | None = None,
        write: Callable[[str], None] | None = None,
    ) -> None:
        self._aggregator = aggregator
        self._audit = audit
        self._read = read if read is not None else input
        self._write = write if write is not None else print

    def run(self) -> None:
        self._write("Welcome to our parking analysis app. Please, choose the action: ")
        while True:
            self._print_options()
            try:
                choice = self._read("").strip()
            except EOFError:
                return
            self._audit.log_choice(choice)
            if choice == EXIT_CHOICE:
                return
            self.handle_choice(choice)

    def _print_options(self) -> None:
        self._write(f"{EXIT_CHOICE} - Exit the app")
        for question in Question:
            self._write(f"{int(question)} - {question.title}")

    def handle_choice(self, choice: str) -> None:
        try:
            question = Question.parse(choice)
        except InvalidQuestionError:
            self._write("Unknown answer, try choosing action once again:\n")
            return

        area_code: str | None = None
        if question.is_area_scoped:
            self._write("Enter ZIP-code, please: ")
            try:
                area_code = self._read("").strip()
            except EOFError:
                return
            self._audit.log_choice(area_code)
            if not area_code:
                self._write("You should enter ZIP-code for this question")
                return
        elif question is Question.COMPOSITE_REPORT:
            self._write(
                "Here is the statistics of amount of fines per person sorted by the average market value:"
            )
            self._write("Press any key to see the result: ")
            try:
                self._read("")
            except EOFError:
                return

        try:
            answer = self._aggregator.compute(question, area_code)
        except DatasetLoadError as exc:
            self._write(f"The problem occurred: {exc}")
            return
        self._write(render_answer(answer))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zipstats",
        description="Population, parking fine and property statistics by ZIP code.",
    )
    parser.add_argument(
        "arguments",
        nargs="*",
        metavar="ARG",
        help="format parking-file properties-file population-file log-file",
    )
    parser.add_argument("--serve", action="store_true", help="Run the HTTP front end instead of the menu")
    parser.add_argument("--host", default="127.0.0.1", help="HTTP bind address (default: %(default)s)")
    parser.add_argument("--port", type=int, default=8080, help="HTTP port (default: %(default)s)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config: StatsConfig | None = None
    if args.arguments or not args.serve:
        try:
            config = StatsConfig.from_args(args.arguments, host=args.host, port=args.port)
            validate_config(config)
        except ZipStatsConfigError as exc:
            print(exc, file=sys.stderr)
            return 1
        print("Arguments are correct")

    if args.serve:
        from zipstats.rest import run_server

        if config is not None:
            AuditLog(config.log_file).log_arguments(config.arguments)
        run_server(config, host=args.host, port=args.port)
        return 0

    assert config is not None  # noqa: S101
    audit = AuditLog(config.log_file)
    audit.log_arguments(config.arguments)
    aggregator = StatsAggregator.from_config(config, audit=audit)
    Menu(aggregator, audit).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
