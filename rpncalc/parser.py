import logging
import re

from rpncalc.rpn import Bool, Int, Op, Quit, RPNError, TokenSyntaxError

log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())


OPERATIONS = {op.value: op for op in Op}

BOOLEANS = {
    'true': True,
    'false': False,
}

RE_INT = re.compile(r'[+-]?[0-9]+')


class LineTokens:

    def __init__(self, line, tokens):
        self.line = line
        self.tokens = tokens

    def __len__(self):
        return len(self.tokens)

    def __iter__(self):
        return iter(self.tokens)

    def __repr__(self):
        s = '{}({!r}, {!r})'
        s = s.format(type(self).__name__, self.line, self.tokens)
        return s

    def __str__(self):
        return str(self.tokens)


def lex_tokens(line):
    # split on runs of whitespace (no quoting, no escapes)
    tokens = line.split()
    return LineTokens(line, tokens)


def parse_operation(token):
    return OPERATIONS.get(token)


def parse_value(token):
    if RE_INT.fullmatch(token):
        # literals past sys.get_int_max_str_digits() are not ints
        try:
            return Int(int(token))
        except ValueError:
            return None
    if token in BOOLEANS:
        return Bool(BOOLEANS[token])
    return None


def classify_token(token):
    """
    Classify a single token as an operation or a value.

    Operators are looked up before literals are parsed.

    :param token: A whitespace-free token
    :returns: An Op or a Value
    :raises TokenSyntaxError: if the token is neither
    """
    op = parse_operation(token)
    if op is not None:
        return op

    value = parse_value(token)
    if value is not None:
        return value

    raise TokenSyntaxError('invalid token', token)


def evaluate_line(stack, line):
    """
    Evaluate one line of RPN input against a stack.

    Tokens are applied left to right. The first failure stops the line;
    whatever earlier tokens did to the stack is kept.

    :param stack: Stack shared across lines
    :param line: Raw line of text
    :returns: Number of tokens applied
    :raises Quit: if the line requested termination
    :raises RPNError: on the first syntax, underflow, or type error
    """
    tokens = lex_tokens(line)

    applied = 0
    for token in tokens:
        try:
            item = classify_token(token)
            if isinstance(item, Op):
                stack.eval(item)
            else:
                log.info('token "{}" -> push {!r}'.format(token, item))
                stack.push(item)
        except Quit:
            log.info('token "{}" -> quit'.format(token))
            raise
        except RPNError as e:
            if e.token is None:
                e.token = token
            log.info('token "{}" -> {} error, skipping rest of line'.format(token, e.kind))
            raise

        applied += 1

    return applied
