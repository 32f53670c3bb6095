import argparse


def add_mode_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject unknown unit suffixes instead of ignoring them",
    )


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tp", description="Parse and format human-readable durations"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    parse = subparsers.add_parser("parse", help="Parse a duration expression")
    parse.add_argument(
        "text", nargs="+", help="Duration expression, e.g. 2h 30m 15s or 1mo 2d"
    )
    add_mode_argument(parse)
    output = parse.add_mutually_exclusive_group()
    output.add_argument(
        "--sql", action="store_true", help="Print as an SQL interval literal"
    )
    output.add_argument(
        "--components",
        action="store_true",
        help="Print total seconds and each normalized component",
    )

    fmt = subparsers.add_parser("format", help="Format a number of seconds")
    fmt.add_argument("total", type=int, help="Total number of seconds")
    fmt.add_argument(
        "--sql", action="store_true", help="Print as an SQL interval literal"
    )

    subparsers.add_parser("units", help="List recognized unit suffixes")

    serve = subparsers.add_parser("serve", help="Run the timeperiod web API")
    serve.add_argument("--host", default="127.0.0.1", help="Host interface for the API")
    serve.add_argument(
        "--port", type=int, default=8000, help="Port to bind the HTTP server"
    )
    add_mode_argument(serve)

    return parser


def parse_args(argv):
    parser = create_parser()
    return parser.parse_args(argv)
