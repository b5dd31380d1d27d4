class PatternError(ValueError):
    """
    Base class for glob pattern syntax errors.

    Every error carries the 0-based character offset of the fault, and the full pattern text it was found in, so it
    can be rendered with a position indicator.
    """
    desc = 'Illegal pattern'

    def __init__(self, position, pattern=''):
        """
        :param position: Character offset of the offending character.
        :type position: int
        :param pattern: Pattern text being compiled.
        :type pattern: str
        """
        super().__init__(position, pattern)
        self.position = position
        self.pattern = pattern

    def __str__(self):
        return render(self)

    def __repr__(self):
        return '{}({!r}, {!r})'.format(self.__class__.__name__, self.position, self.pattern)

    def __eq__(self, other):
        return (type(self) is type(other) and
                self.position == other.position and
                self.pattern == other.pattern)

    def __hash__(self):
        return hash((type(self), self.position, self.pattern))


class IllegalChar(PatternError):
    desc = 'Illegal character'


class IllegalOr(PatternError):
    desc = 'Empty alternative in pattern group'


class EmptyPattern(IllegalOr):
    desc = 'Empty pattern group'


class IllegalPattern(PatternError):
    desc = 'Illegal pattern group'


class UnclosedPattern(IllegalPattern):
    desc = 'Pattern group is not closed'


class IllegalRange(PatternError):
    desc = 'Illegal character range'


class UnclosedRange(IllegalRange):
    desc = 'Character range is not closed'


class EmptyRange(PatternError):
    desc = 'Character range is empty'


class IllegalWildcard(PatternError):
    desc = 'Only * and ** wildcards are allowed'


class IllegalRecursion(PatternError):
    desc = '** must be surrounded by path separators or the pattern boundaries'


class IllegalEscape(PatternError):
    desc = 'Escape is not followed by a character'


def render(error):
    """
    Render a human readable message for a pattern error, with a caret under the offending character.

    :param error: Error to render.
    :type error: PatternError
    :return: Multi-line error message.
    :rtype: str
    """
    rule = '-' * 37
    caret = '-' * error.position + '^'
    return 'Glob syntax error\n{0}\n{1}\n{2}\n{3}\n{0}'.format(rule, error.desc, error.pattern, caret)
