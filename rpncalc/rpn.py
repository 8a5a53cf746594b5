import enum
import functools
import logging
import random

log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())


class RPNError(Exception):
    """Base class for calculator errors, optionally naming the offending token."""
    kind = 'error'

    def __init__(self, message, token=None):
        super().__init__(message)
        self.message = message
        self.token = token

    def __str__(self):
        if self.token is None:
            return self.message
        return '{}: "{}"'.format(self.message, self.token)


class Underflow(RPNError):
    """Tried to pop from an empty stack."""
    kind = 'underflow'


class OperandTypeError(RPNError):
    """Tried to operate on invalid types (e.g. 4 + true)."""
    kind = 'type'


class TokenSyntaxError(RPNError):
    """Unable to parse a token of the input."""
    kind = 'syntax'


class InputError(RPNError):
    """The line source ran dry or failed."""
    kind = 'io'

    def __init__(self, message, eof=False):
        super().__init__(message)
        self.eof = eof


class Quit(RPNError):
    """The user quit the calculator (with `quit`)."""
    kind = 'quit'

    def __init__(self, message='quit requested', token=None):
        super().__init__(message, token)


@functools.total_ordering
class Value:
    """
    An element of the stack: either an Int or a Bool.

    Values of different variants are never equal and order by
    variant first (every Int sorts before every Bool).
    """

    __slots__ = ('_value',)

    # variant order used when comparing across variants
    TAG = None
    TYPE = None

    def __init__(self, value):
        if self.TYPE is None:
            raise TypeError('Value is abstract, use Int or Bool')
        if type(value) is not self.TYPE:
            raise TypeError('{} requires a {} payload: {!r}'.format(
                type(self).__name__, self.TYPE.__name__, value))
        object.__setattr__(self, '_value', value)

    @property
    def value(self):
        return self._value

    def __setattr__(self, name, value):
        raise AttributeError('{} is immutable'.format(type(self).__name__))

    def __reduce__(self):
        return (type(self), (self._value,))

    def _key(self):
        return (self.TAG, self._value)

    def __eq__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        return '{}({})'.format(type(self).__name__, self.display())

    def display(self):
        return str(self._value)


class Int(Value):
    __slots__ = ()
    TAG = 0
    TYPE = int

    def display(self):
        try:
            return str(self._value)
        except ValueError:
            # past sys.get_int_max_str_digits()
            sign = '-' if self._value < 0 else ''
            return '{}<{}-bit int>'.format(sign, self._value.bit_length())


class Bool(Value):
    __slots__ = ()
    TAG = 1
    TYPE = bool

    def display(self):
        return 'true' if self._value else 'false'


class Op(enum.Enum):
    """Types of RPN calculator operations."""

    # pop x, pop y, push x + y
    ADD = '+'
    # pop x, push ~x
    NEG = '~'
    # pop x, pop y, push x == y
    EQ = '='
    # pop x, pop y, push x, push y
    SWAP = '<->'
    # pop x, push random number in [0, x)
    RAND = '#'
    QUIT = 'quit'


class Stack:

    def __init__(self, values=None, *, rng=None):
        self.data = list(values or [])
        self.rng = rng if rng is not None else random.Random()

    def __len__(self):
        return len(self.data)

    # top to bottom
    def __iter__(self):
        return reversed(self.data)

    def __repr__(self):
        s = '{}({!r})'
        s = s.format(type(self).__name__, self.data)
        return s

    def push(self, value):
        self.data.append(value)

    def pop(self):
        try:
            return self.data.pop()
        except IndexError:
            raise Underflow('stack underflow') from None

    def peek(self):
        try:
            return self.data[-1]
        except IndexError:
            raise Underflow('stack underflow') from None

    def eval(self, op):
        """
        Evaluate an operator using values on the stack.

        Operands are consumed as they are popped: if a later pop or
        the type check fails, the earlier operands stay consumed.

        :param op: Op to apply
        :raises Quit: for Op.QUIT, leaving the stack untouched
        :raises Underflow: if the stack holds too few values
        :raises OperandTypeError: if an operand has the wrong variant
        """
        if op is Op.QUIT:
            raise Quit(token=op.value)

        if op is Op.ADD:
            a = self.pop()
            b = self.pop()
            result = add(a, b)
        elif op is Op.NEG:
            result = neg(self.pop())
        elif op is Op.EQ:
            a = self.pop()
            b = self.pop()
            result = eq(a, b)
        elif op is Op.SWAP:
            a = self.pop()
            b = self.pop()
            self.push(a)
            self.push(b)
            log.info('eval {}: swapped {!r} and {!r}'.format(op.name, a, b))
            return
        elif op is Op.RAND:
            result = rand(self.pop(), self.rng)
        else:
            raise ValueError('unknown operation: {!r}'.format(op))

        log.info('eval {}: {!r}'.format(op.name, result))
        self.push(result)


def add(a, b):
    if isinstance(a, Int) and isinstance(b, Int):
        return Int(a.value + b.value)
    raise OperandTypeError('+ requires two ints, got {!r} and {!r}'.format(a, b))


def neg(e):
    if isinstance(e, Int):
        return Int(-e.value)
    return Bool(not e.value)


def eq(a, b):
    if type(a) is not type(b):
        raise OperandTypeError('= requires values of the same type, got {!r} and {!r}'.format(a, b))
    return Bool(a.value == b.value)


def rand(a, rng):
    if not isinstance(a, Int):
        raise OperandTypeError('# requires an int, got {!r}'.format(a))

    # empty range [0, x) for x <= 0: fall back to zero
    if a.value <= 0:
        log.info('eval RAND: bound {} is not positive, using 0'.format(a.display()))
        return Int(0)

    return Int(rng.randrange(a.value))
