import argparse
import logging
import sys
import time

from fibo_add import __version__
from fibo_add.adder import add
from fibo_add.config import get_config
from fibo_add.errors import ConfigError, FiboError
from fibo_add.fibo import fibonacci
from fibo_add.logging_setup import setup_logging
from fibo_add.timing import timed

logger = logging.getLogger(__name__)


def _non_negative_int(text):
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {text!r}")
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return value


def build_parser():
    parser = argparse.ArgumentParser(
        prog="fibo-demo",
        description="Print a sum of two integers followed by the first N Fibonacci numbers.",
    )
    parser.add_argument(
        "-a", "--a",
        type=int,
        default=None,
        help="First addend (config demo.a, default 1).",
    )
    parser.add_argument(
        "-b", "--b",
        type=int,
        default=None,
        help="Second addend (config demo.b, default 2).",
    )
    parser.add_argument(
        "-n", "--count",
        type=_non_negative_int,
        default=None,
        help="Print fibo(1) through fibo(COUNT) (config demo.count, default 10).",
    )
    parser.add_argument(
        "-c", "--config",
        metavar="PATH",
        default=None,
        help="YAML config file. Overrides the FIBO_ADD_CONFIG environment variable.",
    )
    parser.add_argument(
        "-d", "--debug",
        action="store_true",
        help="Enable DEBUG level logging.",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Write log records to stderr as JSON lines.",
    )
    parser.add_argument(
        "--timing",
        action="store_true",
        help="Log how long the Fibonacci loop took.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def print_fibonacci_table(count, out=None):
    """Write ``fibo(i) = F(i)`` for i in 1..count, one per line."""
    out = out or sys.stdout
    for i in range(1, count + 1):
        print("fibo(%d) = %d" % (i, fibonacci(i)), file=out)


def run_demo(a, b, count, out=None, timing=False):
    """Print the addition lines, then the Fibonacci table."""
    out = out or sys.stdout
    print("a = %d, b = %d" % (a, b), file=out)

    c = add(a, b)
    print("a + b = %d" % c, file=out)

    table = timed(print_fibonacci_table, level=logging.INFO) if timing else print_fibonacci_table
    table(count, out=out)


def main(argv=None):
    """Entry point for ``fibo-demo`` and ``python -m fibo_add``. Returns the exit code."""
    args = build_parser().parse_args(argv)

    try:
        config = get_config(args.config)
        a = args.a if args.a is not None else config.get_int('demo.a', 1)
        b = args.b if args.b is not None else config.get_int('demo.b', 2)
        count = args.count if args.count is not None else config.get_int('demo.count', 10)
        json_logs = args.json_logs or config.get_bool('logging.json', False)
    except ConfigError as e:
        setup_logging(debug=args.debug, json_format=args.json_logs)
        logger.error({"event": "config_load", "status": "failed", "path": e.path, "error": e.detail})
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    setup_logging(
        debug=args.debug,
        json_format=json_logs,
        level=config.get('logging.level', 'INFO'),
    )

    if count < 0:
        logger.error({"event": "demo_start", "status": "failed", "error": "demo.count must be >= 0", "count": count})
        print(f"ERROR: demo.count must be >= 0, got {count}", file=sys.stderr)
        return 1

    logger.debug({"event": "demo_start", "a": a, "b": b, "count": count, "config": config.path})
    start_time = time.time()
    try:
        run_demo(a, b, count, timing=args.timing)
    except FiboError as e:
        logger.exception({"event": "demo_end", "status": "failed", "error": str(e)})
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    logger.debug({"event": "demo_end", "status": "success", "duration_seconds": round(time.time() - start_time, 3)})
    return 0


if __name__ == "__main__":
    sys.exit(main())
