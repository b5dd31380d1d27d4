import pytest
from globber import errors
from globber.syntax import (parse, format_tokens, Token, CharClass, CharSpecifier, Group, LITERAL, ANY_CHAR,
                            ANY_SEQUENCE, ANY_RECURSIVE, CHAR_CLASS, QUANTIFIER)


def _literals(text):
    return tuple(Token(LITERAL, c) for c in text)


def test_basic_tokens():
    assert parse('a?*') == (Token(LITERAL, 'a'), Token(ANY_CHAR, None), Token(ANY_SEQUENCE, None))
    assert parse('**') == (Token(ANY_RECURSIVE, None),)
    assert parse('/**/x') == (Token(LITERAL, '/'), Token(ANY_RECURSIVE, None)) + _literals('/x')
    assert parse('') == ()


def test_escapes():
    assert parse('star\\*') == _literals('star*')
    assert parse('\\[\\]\\(\\)\\|') == _literals('[]()|')
    assert parse('\\\\') == _literals('\\')
    assert parse('\\?\\(a\\)') == _literals('?(a)')


def test_plain_operator_characters():
    assert parse('a+b@c!d') == _literals('a+b@c!d')
    assert parse('!') == _literals('!')


def test_char_classes():
    assert parse('[a-z]') == (Token(CHAR_CLASS, CharClass((CharSpecifier('a', 'z'),), False)),)
    assert parse('[!a-c-]') == (Token(CHAR_CLASS, CharClass((CharSpecifier('a', 'c'), CharSpecifier('-', '-')),
                                                           True)),)
    assert parse('[-a]') == (Token(CHAR_CLASS, CharClass((CharSpecifier('-', '-'), CharSpecifier('a', 'a')),
                                                         False)),)
    assert parse('[a\\-c]') == (Token(CHAR_CLASS, CharClass((CharSpecifier('a', 'a'), CharSpecifier('-', '-'),
                                                             CharSpecifier('c', 'c')), False)),)
    assert parse('[\\]]') == (Token(CHAR_CLASS, CharClass((CharSpecifier(']', ']'),), False)),)


def test_groups():
    assert parse('@(a|b*)') == (Token(QUANTIFIER, Group('@', (_literals('a'),
                                                              _literals('b') + (Token(ANY_SEQUENCE, None),)))),)

    tokens = parse('x+(a|?(b|c))')
    assert tokens[0] == Token(LITERAL, 'x')
    group = tokens[1].value
    assert group.kind == '+'
    assert group.alternatives[0] == _literals('a')
    inner = group.alternatives[1][0].value
    assert inner == Group('?', (_literals('b'), _literals('c')))

    for kind in '?*+@!':
        assert parse(kind + '(a)')[0].value.kind == kind


def test_group_splits_top_level_only():
    tokens = parse('@(a[xy]|@(b|c)|\\|)')
    alternatives = tokens[0].value.alternatives
    assert len(alternatives) == 3
    assert alternatives[2] == _literals('|')


def test_group_boundaries_bound_recursion():
    tokens = parse('@(**|a)')
    assert tokens[0].value.alternatives[0] == (Token(ANY_RECURSIVE, None),)


def test_compile_is_deterministic():
    pattern = '!(+(ab|def)*+(.jpg|.gif))'
    assert parse(pattern) == parse(pattern)
    assert hash(parse(pattern)) == hash(parse(pattern))


@pytest.mark.parametrize('pattern, error, position', [
    ('a/**b', errors.IllegalRecursion, 4),
    ('a/bc**', errors.IllegalRecursion, 4),
    ('a/*****', errors.IllegalWildcard, 4),
    ('a/b**c**d', errors.IllegalRecursion, 3),
    ('a**b', errors.IllegalRecursion, 1),
    ('***', errors.IllegalWildcard, 2),
    ('****', errors.IllegalWildcard, 2),
    ('a**/b', errors.IllegalRecursion, 1),
    ('a/\\***', errors.IllegalRecursion, 4),
])
def test_wildcard_errors(pattern, error, position):
    with pytest.raises(error) as info:
        parse(pattern)
    assert type(info.value) is error
    assert info.value.position == position
    assert info.value.pattern == pattern


@pytest.mark.parametrize('pattern, error, position', [
    ('[!]', errors.EmptyRange, 0),
    ('[]', errors.EmptyRange, 0),
    ('[]]]]]', errors.EmptyRange, 0),
    ('abc[]', errors.EmptyRange, 3),
    ('abc[!]', errors.EmptyRange, 3),
    ('[dfsfsdfsdf', errors.UnclosedRange, 10),
    ('[!sdfdsfdf', errors.UnclosedRange, 9),
    ('abc[def', errors.UnclosedRange, 6),
    ('abc[!def', errors.UnclosedRange, 7),
    ('abc[', errors.UnclosedRange, 3),
    ('abc[!', errors.UnclosedRange, 4),
    ('abc[d', errors.UnclosedRange, 4),
    ('abc[!d', errors.UnclosedRange, 5),
    ('[a\\', errors.UnclosedRange, 2),
    ('[adc(]', errors.IllegalChar, 4),
    ('[adc[]', errors.IllegalChar, 4),
    ('[adc]]', errors.IllegalChar, 5),
    ('[adc)]', errors.IllegalChar, 4),
])
def test_range_errors(pattern, error, position):
    with pytest.raises(error) as info:
        parse(pattern)
    assert type(info.value) is error
    assert info.value.position == position


@pytest.mark.parametrize('pattern, error, position', [
    ('abc\\', errors.IllegalEscape, 3),
    ('a|b', errors.IllegalChar, 1),
    ('a)', errors.IllegalChar, 1),
    ('(a', errors.IllegalChar, 0),
    ('@(a|b', errors.UnclosedPattern, 4),
    ('x@(a', errors.UnclosedPattern, 3),
    ('@()', errors.EmptyPattern, 2),
    ('@(a|)', errors.IllegalOr, 4),
    ('@(|a)', errors.IllegalOr, 2),
    ('@(a||b)', errors.IllegalOr, 4),
    ('@(a]', errors.IllegalChar, 3),
    ('@([a)]', errors.IllegalChar, 4),
    ('src/@(a|b**)', errors.IllegalRecursion, 9),
    ('@(a[|]b)', errors.IllegalChar, 4),
    ('!(a|@(b|))', errors.IllegalOr, 8),
])
def test_pattern_errors(pattern, error, position):
    with pytest.raises(error) as info:
        parse(pattern)
    assert type(info.value) is error
    assert info.value.position == position


def test_error_hierarchy():
    assert issubclass(errors.UnclosedRange, errors.IllegalRange)
    assert issubclass(errors.UnclosedPattern, errors.IllegalPattern)
    assert issubclass(errors.EmptyPattern, errors.IllegalOr)
    assert issubclass(errors.PatternError, ValueError)

    with pytest.raises(errors.IllegalRange):
        parse('[abc')
    with pytest.raises(errors.IllegalPattern):
        parse('+(abc')


def test_format_tokens():
    assert format_tokens(parse('a[!b-c]@(x|*)')) == '\n'.join([
        "literal 'a'",
        "char_class [!b-c]",
        "quantifier @()",
        "  |",
        "    literal 'x'",
        "  |",
        "    any_sequence",
    ])


def test_compile_logs_token_tree(caplog):
    import logging

    caplog.set_level(logging.DEBUG, logger='globber')
    parse('a?')

    messages = [record.getMessage() for record in caplog.records if record.name == 'globber']
    assert messages == ["Compiled pattern 'a?' in to 2 tokens\nliteral 'a'\nany_char"]
