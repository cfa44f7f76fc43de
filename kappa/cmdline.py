"""
This is an interpreter for the Kappa Lisp dialect.

For example:

    kappa program.lisp

will load program.lisp form by form, printing each result or error.

    kappa

with no arguments starts an interactive session.

    kappa -h

will explain all the arguments.
"""
import sys, argparse, logging

from kappa import __version__
from kappa.config import get_log_level

parser = argparse.ArgumentParser(
    prog="kappa",
    description="Interpreter for the Kappa Lisp dialect.",
)
parser.add_argument("files", nargs="*", help="source files to load, in order.")
parser.add_argument('-e', "--eval", action="append", default=[], metavar="EXPR", help="Evaluate EXPR and print the result.")
parser.add_argument("--no-prelude", action="store_true", help="Start with the builtins only, without library.lisp.")
parser.add_argument("--log-level", default=None, help="Logging level (default: $KAPPA_LOG_LEVEL or WARNING).")
parser.add_argument("--version", action="version", version="%(prog)s " + __version__)

PROMPT = "kappa> "


def report(results, out=None):
    out = out or sys.stdout
    from .printer import to_string
    failures = 0
    for r in results:
        if r.ok:
            print(to_string(r.value), file=out)
        else:
            failures += 1
            where = "" if r.expr is None else " in expression:\n\t" + to_string(r.expr)
            print("error: %s%s" % (r.error, where), file=out)
    return failures


def repl(itp, stdin=None, out=None):
    stdin = stdin or sys.stdin
    out = out or sys.stdout
    while True:
        out.write(PROMPT)
        out.flush()
        line = stdin.readline()
        if not line:
            out.write("\n")
            return
        if line.strip():
            report(itp.load(line), out)


def run(args):
    logging.basicConfig(level=(args.log_level or get_log_level()).upper())
    from .interpreter import Interpreter
    itp = Interpreter(prelude=None if args.no_prelude else 'auto')
    failures = 0
    for path in args.files:
        try:
            failures += report(itp.load_file(path))
        except OSError as ex:
            print("error: cannot read %s: %s" % (path, ex), file=sys.stderr)
            failures += 1
    for code in args.eval:
        failures += report(itp.load(code))
    if not args.files and not args.eval:
        repl(itp)
    return 1 if failures else 0


def main(argv=None):
    return run(parser.parse_args(argv))
