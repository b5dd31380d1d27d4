"""
Extended glob pattern matching.

Patterns are compiled once, and can then be matched against any number of strings. Matches are anchored, the whole
string must match the pattern.

    ?               Any single character
    *               Any sequence of characters
    **              Zero or more sequences of characters, may bridge adjacent path separators
    [abc] [a-z]     One character in the given set or range
    [!abc] [!a-z]   One character not in the given set or range
    ?(p|p|...)      Zero or one of the alternatives
    *(p|p|...)      Zero or more of the alternatives
    +(p|p|...)      One or more of the alternatives
    @(p|p|...)      Exactly one of the alternatives
    !(p|p|...)      None of the alternatives
    \\c              Literal character c

'**' must be surrounded by path separators '/' or the pattern boundaries, e.g. '**/*.txt' or 'src/**/test'.
"""
from globber.errors import (PatternError, IllegalChar, IllegalOr, EmptyPattern, IllegalPattern, UnclosedPattern,
                            IllegalRange, UnclosedRange, EmptyRange, IllegalWildcard, IllegalRecursion, IllegalEscape)
from globber.matcher import Matcher
from globber.syntax import parse

__version__ = '0.2'

__all__ = ['compile', 'is_match', 'Pattern', 'PatternError', 'IllegalChar', 'IllegalOr', 'EmptyPattern',
           'IllegalPattern', 'UnclosedPattern', 'IllegalRange', 'UnclosedRange', 'EmptyRange', 'IllegalWildcard',
           'IllegalRecursion', 'IllegalEscape']


def compile(pattern):
    """
    Compile a glob pattern in to a reusable token sequence.

    :param pattern: Glob pattern text.
    :type pattern: str
    :return: Compiled, immutable token sequence.
    :rtype: tuple[globber.syntax.Token]
    :raises globber.PatternError: If the pattern is malformed.
    """
    return parse(pattern)


def is_match(tokens, text):
    """
    Return whether the whole of a string matches a compiled token sequence.

    :param tokens: Token sequence returned by compile.
    :type tokens: tuple[globber.syntax.Token]
    :param text: String to match.
    :type text: str
    :rtype: bool
    """
    return Matcher(tokens).matches(text)


class Pattern:
    """
    Compiled glob pattern.

    >>> Pattern('*.rs').matches('src/lib.rs')
    True
    >>> Pattern('[a-z].rs').matches('A.rs')
    False
    """
    def __init__(self, pattern):
        """
        :param pattern: Glob pattern text.
        :type pattern: str
        :raises globber.PatternError: If the pattern is malformed.
        """
        self.pattern = pattern
        self.tokens = parse(pattern)
        self._matcher = Matcher(self.tokens)

    def matches(self, text):
        """
        Return whether the whole of the given string matches the pattern.

        :param text: String to match.
        :type text: str
        :rtype: bool
        """
        return self._matcher.matches(text)

    def __eq__(self, other):
        return isinstance(other, Pattern) and self.tokens == other.tokens

    def __hash__(self):
        return hash(self.tokens)

    def __repr__(self):
        return 'Pattern({!r})'.format(self.pattern)

    def __str__(self):
        return self.pattern
