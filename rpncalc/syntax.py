from pygments.lexer import RegexLexer, words
from pygments.token import Error, Keyword, Number, Operator, Text

from rpncalc.parser import BOOLEANS, OPERATIONS

# References:
# https://pygments.org/docs/lexerdevelopment/
# https://pygments.org/docs/tokens/

# a token only counts if it fills the whole whitespace-delimited word
END = r'(?=\s|$)'


class RPNLexer(RegexLexer):
    name = 'RPN'
    aliases = ['rpn']
    filenames = ['*.rpn']

    symbols = sorted((s for s in OPERATIONS if not s.isalpha()), key=len, reverse=True)
    keywords = sorted(s for s in OPERATIONS if s.isalpha())

    tokens = {
        'root': [
            (r'\s+', Text),  # whitespace
            (words(symbols, suffix=END), Operator),  # operators
            (words(keywords, suffix=END), Keyword),  # quit
            (r'[+-]?[0-9]+' + END, Number.Integer),  # ints
            (words(sorted(BOOLEANS), suffix=END), Keyword.Constant),  # bools
            (r'\S+', Error),  # anything else is a syntax error
        ],
    }
