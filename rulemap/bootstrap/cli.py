import argparse
import logging
import sys
from pathlib import Path

from rulemap.bootstrap.config.settings import NamingStrategy, RulemapSettings
from rulemap.bootstrap.deps import build_serializer, get_settings
from rulemap.core.errors import RulemapError
from rulemap.core.helpers.utils import setup_logging
from rulemap.core.models.context import Context, Formatting


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rulemap",
        description=(
            "Read a document, map it through an entity class and print it back.\n\n"
            "Without --target the document is decoded and re-encoded as is,\n"
            "which is handy to reformat or validate a payload."
        ),
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument(
        "file",
        type=str,
        help="Path to the input document, '-' reads from stdin"
    )

    parser.add_argument(
        "-t", "--target",
        type=str,
        help=(
            "Entity class the document is mapped to, as a registered name\n"
            "or a dotted import path, e.g. shop.models.Product"
        )
    )

    parser.add_argument(
        "-x", "--exclude",
        action="append",
        default=[],
        metavar="PROPERTY",
        help="Top-level property to leave out (repeatable)"
    )

    parser.add_argument(
        "--compact",
        action="store_true",
        help="Emit compact output instead of the configured formatting"
    )

    parser.add_argument(
        "--naming",
        type=str,
        choices=[strategy.value for strategy in NamingStrategy],
        help="Override the configured naming convention"
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        help="Path to a rulemap configuration file"
    )

    parser.add_argument(
        "-l", "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help=(
            "Logging verbosity.\n"
            "DEBUG shows every skipped or unknown property."
        ),
    )

    return parser


def _read(file: str) -> bytes:
    if file == "-":
        return sys.stdin.buffer.read()
    return Path(file).read_bytes()


def _write(document: str | bytes) -> None:
    if isinstance(document, bytes):
        sys.stdout.buffer.write(document)
        sys.stdout.buffer.flush()
    else:
        sys.stdout.write(document + "\n")


def run(args: argparse.Namespace, settings: RulemapSettings) -> int:
    logger = logging.getLogger("bootstrap.cli")

    if args.naming:
        settings = settings.model_copy(update={"naming": NamingStrategy(args.naming)})

    serializer = build_serializer(settings)
    formatting = Formatting.compact if args.compact else settings.formatting
    context = Context(formatting=formatting, exclude=args.exclude)

    try:
        data = _read(args.file)
    except OSError as ex:
        print(f"rulemap: cannot read '{args.file}': {ex}", file=sys.stderr)
        return 1

    try:
        if args.target:
            entity = serializer.deserialize(data, args.target, context)
            document = serializer.serialize(entity, context)
        else:
            document = serializer.encode(serializer.deserialize(data), context)
    except RulemapError as ex:
        logger.debug("Mapping failed", exc_info=ex)
        print(f"rulemap: {type(ex).__name__}: {ex}", file=sys.stderr)
        return 1

    _write(document)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    return run(args, get_settings(args.config))


if __name__ == "__main__":
    sys.exit(main())
