"""
Backtracking Matcher
Anchored evaluation of compiled token sequences against strings.

Each step of the evaluation results in a Status:
 - MATCHED: The rest of the tokens matched the rest of the input.
 - RETRYABLE: A token failed at the current offset, but an enclosing wildcard or quantifier group may still succeed by
              trying a different expansion.
 - EXHAUSTED: The input ran out where a token required another character. Consuming more input in an enclosing
              wildcard can not help, though an enclosing group may still try another alternative.

Patterns with many wildcards separated by near duplicate literals can take exponential time to reject an input. Treat
patterns from untrusted sources accordingly.
"""
from enum import Enum
from globber.syntax import (LITERAL, ANY_SEQUENCE, ANY_RECURSIVE, CHAR_CLASS, QUANTIFIER, ZERO_OR_ONE, ZERO_OR_MORE,
                            ONE_OR_MORE, EXACTLY_ONE, SEPARATOR)


class Status(Enum):
    MATCHED = 'matched'
    RETRYABLE = 'retryable'
    EXHAUSTED = 'exhausted'


class Matcher:
    """
    Matches strings against a compiled token sequence. Holds no state besides the tokens, so a single instance may be
    shared between threads.
    """
    def __init__(self, tokens):
        """
        :param tokens: Compiled token sequence.
        :type tokens: tuple[globber.syntax.Token]
        """
        self.tokens = tuple(tokens)

    def matches(self, text):
        """
        Return whether the whole of the given string matches the tokens.

        :param text: String to match.
        :type text: str
        :rtype: bool
        """
        return _match(self.tokens, text, 0) == Status.MATCHED

    def __eq__(self, other):
        return isinstance(other, Matcher) and self.tokens == other.tokens

    def __hash__(self):
        return hash(self.tokens)


def _match(tokens, text, pos):
    """
    Match a token sequence against the input starting at a given offset.

    :type tokens: tuple[globber.syntax.Token]
    :type text: str
    :type pos: int
    :rtype: Status
    """
    length = len(text)

    for index, token in enumerate(tokens):
        if token.type in (ANY_SEQUENCE, ANY_RECURSIVE):
            return _match_wildcard(tokens, index, text, pos)
        if token.type == QUANTIFIER:
            return _match_group(token.value, tokens[index + 1:], text, pos)

        if pos >= length:
            return Status.EXHAUSTED
        c = text[pos]
        pos += 1

        if token.type == LITERAL:
            if c != token.value:
                return Status.RETRYABLE
        elif token.type == CHAR_CLASS:
            if _in_class(token.value, c) == token.value.negated:
                return Status.RETRYABLE

    return Status.MATCHED if pos == length else Status.RETRYABLE


def _in_class(char_class, c):
    for specifier in char_class.specifiers:
        if specifier.low <= c <= specifier.high:
            return True
    return False


def _match_wildcard(tokens, index, text, pos):
    """
    Match a * or ** wildcard at tokens[index], trying the shortest expansion first.
    """
    rest = tokens[index + 1:]

    result = _match(rest, text, pos)
    if result == Status.MATCHED:
        return result

    # ** may also stand in for zero directories, absorbing the separator that follows it.
    if tokens[index].type == ANY_RECURSIVE and len(rest) > 0 and rest[0] == (LITERAL, SEPARATOR):
        skipped = _match(rest[1:], text, pos)
        if skipped != Status.RETRYABLE:
            return skipped

    if result == Status.EXHAUSTED:
        return result
    return _match_expanding(rest, text, pos)


def _match_expanding(rest, text, pos):
    """
    Consume one more character at a time, retrying the rest of the tokens after each, until the result is anything
    other than RETRYABLE or the input runs out.
    """
    result = Status.RETRYABLE
    while pos < len(text):
        pos += 1
        result = _match(rest, text, pos)
        if result != Status.RETRYABLE:
            return result
    return result


def _count_matches(group, rest, text, pos, limit=None):
    """
    Count the alternatives of a group that, followed by the rest of the tokens, match the input. Stops counting once
    the limit is reached.
    """
    count = 0
    for alternative in group.alternatives:
        if _match(alternative + rest, text, pos) == Status.MATCHED:
            count += 1
            if limit is not None and count >= limit:
                break
    return count


def _match_group(group, rest, text, pos):
    kind = group.kind

    if kind == ZERO_OR_ONE:
        count = _count_matches(group, rest, text, pos, limit=2)
        if count == 1:
            return Status.MATCHED
        if count > 1:
            return Status.RETRYABLE
        return _match(rest, text, pos)

    if kind == ZERO_OR_MORE:
        if _count_matches(group, rest, text, pos, limit=1) > 0:
            return Status.MATCHED
        return _match(rest, text, pos)

    if kind == ONE_OR_MORE:
        if _count_matches(group, rest, text, pos, limit=1) > 0:
            return Status.MATCHED
        return Status.RETRYABLE

    if kind == EXACTLY_ONE:
        if _count_matches(group, rest, text, pos, limit=2) == 1:
            return Status.MATCHED
        return Status.RETRYABLE

    # NONE_OF, the excluded span is at least one character long.
    if _count_matches(group, rest, text, pos, limit=1) > 0:
        return Status.RETRYABLE
    return _match_expanding(rest, text, pos)
