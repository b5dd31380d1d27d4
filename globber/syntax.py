"""
Pattern Compiler
Lexical and syntactic analysis of extended glob patterns in to immutable token sequences.

A compiled pattern is a tuple of Token named tuples. Each Token has a type, one of the token type constants below, and
a value whose meaning depends on the type:
 - LITERAL (str): The character to match.
 - ANY_CHAR, ANY_SEQUENCE, ANY_RECURSIVE (None)
 - CHAR_CLASS (CharClass): Character specifiers, and whether the class is negated.
 - QUANTIFIER (Group): Quantifier kind, and a tuple of compiled alternative token sequences.

Being built from tuples, compiled patterns are hashable, and compare equal when structurally equal.
"""
import logging
from collections import namedtuple
from globber.errors import (IllegalChar, IllegalOr, EmptyPattern, UnclosedPattern, UnclosedRange, EmptyRange,
                            IllegalWildcard, IllegalRecursion, IllegalEscape)

LITERAL = 'literal'
ANY_CHAR = 'any_char'
ANY_SEQUENCE = 'any_sequence'
ANY_RECURSIVE = 'any_recursive'
CHAR_CLASS = 'char_class'
QUANTIFIER = 'quantifier'

# Quantifier kinds are the characters that introduce them.
ZERO_OR_ONE = '?'
ZERO_OR_MORE = '*'
ONE_OR_MORE = '+'
EXACTLY_ONE = '@'
NONE_OF = '!'
QUANTIFIERS = (ZERO_OR_ONE, ZERO_OR_MORE, ONE_OR_MORE, EXACTLY_ONE, NONE_OF)

SEPARATOR = '/'

Token = namedtuple('Token', ['type', 'value'])
CharClass = namedtuple('CharClass', ['specifiers', 'negated'])
# Inclusive character range. A single character c is CharSpecifier(c, c).
CharSpecifier = namedtuple('CharSpecifier', ['low', 'high'])
Group = namedtuple('Group', ['kind', 'alternatives'])

log = logging.getLogger('globber')


def parse(pattern):
    """
    Compile a glob pattern.

    :param pattern: Pattern text to compile.
    :type pattern: str
    :return: Compiled token sequence.
    :rtype: tuple[Token]
    :raises globber.errors.PatternError: If the pattern is malformed.
    """
    tokens = _Parser(pattern).parse()
    if log.isEnabledFor(logging.DEBUG):
        log.debug('Compiled pattern \'%s\' in to %d tokens\n%s', pattern, len(tokens), format_tokens(tokens))
    return tokens


class _Parser:
    """
    Single pass, left to right parser over a span of a pattern. Group alternatives are parsed by child parsers over
    their own span of the same text, so error offsets are always relative to the full pattern.
    """
    def __init__(self, pattern, begin=0, end=None):
        """
        :param pattern: Full pattern text.
        :type pattern: str
        :param begin: Offset the span to parse starts at.
        :type begin: int
        :param end: Offset the span to parse ends at (exclusive,) or None for the end of the pattern.
        :type end: int | None
        """
        self.pattern = pattern
        self.begin = begin
        self.end = len(pattern) if end is None else end
        self.i = begin

    def parse(self):
        tokens = []

        while self.i < self.end:
            c = self.pattern[self.i]

            if c in QUANTIFIERS and self.i + 1 < self.end and self.pattern[self.i + 1] == '(':
                tokens.append(Token(QUANTIFIER, Group(c, self._parse_alternatives())))
            elif c == '?':
                self.i += 1
                tokens.append(Token(ANY_CHAR, None))
            elif c == '*':
                tokens.append(self._parse_wildcard())
            elif c == '\\':
                tokens.append(self._parse_escape())
            elif c == '[':
                tokens.append(self._parse_class())
            elif c in '])|(':
                raise IllegalChar(self.i, self.pattern)
            else:
                self.i += 1
                tokens.append(Token(LITERAL, c))

        return tuple(tokens)

    def _parse_wildcard(self):
        start = self.i
        after = start + 1

        if after >= self.end or self.pattern[after] != '*':
            self.i = after
            return Token(ANY_SEQUENCE, None)

        # ** must have a separator or the pattern boundary on both sides.
        if start > self.begin and self.pattern[start - 1] != SEPARATOR:
            raise IllegalRecursion(start, self.pattern)

        after += 1
        if after < self.end:
            if self.pattern[after] == '*':
                raise IllegalWildcard(after, self.pattern)
            if self.pattern[after] != SEPARATOR:
                raise IllegalRecursion(after, self.pattern)

        self.i = after
        return Token(ANY_RECURSIVE, None)

    def _parse_escape(self):
        if self.i + 1 >= self.end:
            raise IllegalEscape(self.i, self.pattern)

        self.i += 2
        return Token(LITERAL, self.pattern[self.i - 1])

    def _parse_class(self):
        start = self.i
        i = start + 1
        negated = False
        if i < self.end and self.pattern[i] == '!':
            negated = True
            i += 1

        # Pairs of (character, escaped)
        members = []
        closed = False
        while i < self.end:
            c = self.pattern[i]
            if c == '\\':
                if i + 1 >= self.end:
                    break
                members.append((self.pattern[i + 1], True))
                i += 2
                continue
            if c == ']':
                closed = True
                break
            if c in '[()|':
                raise IllegalChar(i, self.pattern)
            members.append((c, False))
            i += 1

        if not closed:
            raise UnclosedRange(self.end - 1, self.pattern)
        if len(members) == 0:
            raise EmptyRange(start, self.pattern)

        self.i = i + 1
        return Token(CHAR_CLASS, CharClass(_char_specifiers(members), negated))

    def _parse_alternatives(self):
        body = self.i + 2
        stack = []
        splits = []
        escaped = False
        close = None

        i = body
        while i < self.end:
            c = self.pattern[i]
            if escaped:
                escaped = False
            elif c == '\\':
                escaped = True
            elif c in '([':
                stack.append(c)
            elif c == ']':
                if len(stack) == 0 or stack[-1] != '[':
                    raise IllegalChar(i, self.pattern)
                stack.pop()
            elif c == ')':
                if len(stack) == 0:
                    close = i
                    break
                if stack[-1] != '(':
                    raise IllegalChar(i, self.pattern)
                stack.pop()
            elif c == '|' and len(stack) == 0:
                splits.append(i)
            i += 1

        if close is None:
            raise UnclosedPattern(self.end - 1, self.pattern)
        if close == body:
            raise EmptyPattern(body, self.pattern)

        spans = []
        start = body
        for stop in splits + [close]:
            if stop == start:
                raise IllegalOr(start, self.pattern)
            spans.append((start, stop))
            start = stop + 1

        self.i = close + 1
        return tuple(_Parser(self.pattern, start, stop).parse() for start, stop in spans)


def _char_specifiers(members):
    """
    Convert character class members in to specifiers. Runs of 'a-b' become ranges, unless the '-' is escaped, or is
    the first or last member.

    :param members: Class members, as (character, escaped) pairs.
    :type members: list[tuple[str, bool]]
    :rtype: tuple[CharSpecifier]
    """
    specifiers = []
    i = 0
    while i < len(members):
        low = members[i][0]
        if i + 2 < len(members) and members[i + 1] == ('-', False):
            specifiers.append(CharSpecifier(low, members[i + 2][0]))
            i += 3
        else:
            specifiers.append(CharSpecifier(low, low))
            i += 1
    return tuple(specifiers)


def format_tokens(tokens, indent=0):
    """
    Render a compiled token sequence as an indented tree, one token per line.

    :param tokens: Compiled token sequence.
    :type tokens: tuple[Token]
    :param indent: Indentation level to start at.
    :type indent: int
    :rtype: str
    """
    lines = []
    pad = '  ' * indent
    for token in tokens:
        if token.type == LITERAL:
            lines.append('{}{} {!r}'.format(pad, token.type, token.value))
        elif token.type == CHAR_CLASS:
            members = ''.join(s.low if s.low == s.high else '{}-{}'.format(s.low, s.high)
                              for s in token.value.specifiers)
            lines.append('{}{} [{}{}]'.format(pad, token.type, '!' if token.value.negated else '', members))
        elif token.type == QUANTIFIER:
            lines.append('{}{} {}()'.format(pad, token.type, token.value.kind))
            for alternative in token.value.alternatives:
                lines.append('{}  |'.format(pad))
                lines.append(format_tokens(alternative, indent + 2))
        else:
            lines.append('{}{}'.format(pad, token.type))
    return '\n'.join(lines)
