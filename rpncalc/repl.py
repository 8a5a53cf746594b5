import argparse
import logging
import os
import sys

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory, InMemoryHistory
from prompt_toolkit.lexers import PygmentsLexer
from prompt_toolkit.styles import style_from_pygments_cls
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from rpncalc.parser import evaluate_line
from rpncalc.rpn import InputError, Quit, RPNError, Stack
from rpncalc.syntax import RPNLexer

log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())


PROMPT = '> '
HISTORY_PATH = os.path.join(os.path.expanduser('~'), '.rpncalc_history')


def load_style(style_name):
    try:
        return style_from_pygments_cls(get_style_by_name(style_name))
    except ClassNotFound:
        raise SystemExit('unknown style: {}'.format(style_name))


def interactive_source(history_path=HISTORY_PATH, style=None, input=None, output=None):
    # References:
    # https://python-prompt-toolkit.readthedocs.io/en/master/pages/asking_for_input.html
    history = FileHistory(history_path) if history_path else InMemoryHistory()
    session = PromptSession(
        lexer=PygmentsLexer(RPNLexer),
        history=history,
        style=style,
        include_default_pygments_style=False,
        input=input,
        output=output,
    )
    return session.prompt


def file_source(f, out):
    def source(prompt):
        out.write(prompt)
        out.flush()
        line = f.readline()
        if line == '':
            raise EOFError
        return line.rstrip('\r\n')
    return source


def iter_source(lines):
    lines = iter(lines)

    def source(prompt):
        try:
            return next(lines)
        except StopIteration:
            raise EOFError from None
    return source


def report(stack, out):
    if len(stack) == 0:
        print('Result: <empty>', file=out)
    else:
        print('Result: {!r}'.format(stack.peek()), file=out)


def repl(stack=None, source=None, out=None, once=False):
    """
    Read lines from a source and evaluate them until quit or end of input.

    :param stack: Stack to evaluate against (a new one if omitted)
    :param source: Callable taking a prompt and returning one line
    :param out: Text stream for reports (stdout if omitted)
    :param once: Return after a single line
    :returns: The stack, when the user quits or once is set
    :raises InputError: when the source is exhausted or fails
    """
    stack = stack if stack is not None else Stack()
    out = out if out is not None else sys.stdout
    source = source if source is not None else file_source(sys.stdin, out)

    while True:
        try:
            line = source(PROMPT)
        except (EOFError, KeyboardInterrupt) as e:
            raise InputError('end of input', eof=True) from e
        except OSError as e:
            raise InputError('failed to read input: {}'.format(e)) from e

        try:
            evaluate_line(stack, line)
        except Quit:
            log.info('quit with {} value(s) on the stack'.format(len(stack)))
            return stack
        except RPNError as e:
            print('Error: {}'.format(e), file=out)
        else:
            report(stack, out)

        if once:
            return stack


def cli_main(argv=None):
    argv = argv if argv is not None else sys.argv[1:]

    # any cleaner way to handle this w/ argparse positional args?
    if len(argv) >= 1 and argv[0] == '--version':
        from rpncalc import __version__
        version = 'rpncalc {}'.format(__version__)
        raise SystemExit(version)

    parser = argparse.ArgumentParser(
        description='Evaluate reverse Polish notation',
        prog='rpncalc',
    )
    parser.add_argument('-e', '--eval', action='append', metavar='EXPR', help='evaluate an expression and exit (repeatable)')
    parser.add_argument('-1', '--once', action='store_true', help='evaluate a single line and exit')
    parser.add_argument('-s', '--seed', type=int, help='seed for the random operator (#)')
    parser.add_argument('--history', type=str, default=HISTORY_PATH, help='input history file (default "~/.rpncalc_history")')
    parser.add_argument('--no-history', action='store_true', help='do not save input history')
    parser.add_argument('--style', type=str, default='default', help='pygments style for highlighting input (default "default")')
    parser.add_argument('-v', '--verbose', action='store_true', help='verbose evaluator output')
    parser.add_argument('--version', action='store_true', help='print calculator version and exit')
    args = parser.parse_args(argv)

    if args.version:
        from rpncalc import __version__
        version = 'rpncalc {}'.format(__version__)
        raise SystemExit(version)

    log_fmt = '%(message)s'
    if args.verbose:
        logging.basicConfig(format=log_fmt, level=logging.INFO, stream=sys.stdout)

    stack = Stack()
    if args.seed is not None:
        stack.rng.seed(args.seed)

    style = load_style(args.style)

    if args.eval:
        source = iter_source(args.eval)
    elif sys.stdin.isatty():
        history_path = None if args.no_history else args.history
        source = interactive_source(history_path, style)
    else:
        source = file_source(sys.stdin, sys.stdout)

    try:
        repl(stack, source, sys.stdout, once=args.once)
    except InputError as e:
        if not e.eof:
            raise SystemExit(e)
        log.info('end of input with {} value(s) on the stack'.format(len(stack)))


if __name__ == '__main__':
    cli_main()
