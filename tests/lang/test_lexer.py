"""Tokenizer tests."""

import pytest

from azalea.lang import Lexer, TokenType, tokenize
from azalea.lang.keywords import is_keyword, is_operator


def kinds_and_values(source):
    return [(token.type, token.value) for token in tokenize(source)]


def test_output_statement_tokens() -> None:
    assert kinds_and_values('say "Hello"') == [
        (TokenType.KEYWORD, "say"),
        (TokenType.STRING, "Hello"),
        (TokenType.EOF, ""),
    ]


def test_keywords_are_classified_once_at_lex_time() -> None:
    tokens = tokenize("form formula plus plenty")
    assert [token.type for token in tokens[:-1]] == [
        TokenType.KEYWORD,
        TokenType.IDENTIFIER,
        TokenType.KEYWORD,
        TokenType.IDENTIFIER,
    ]


def test_number_stops_at_second_dot() -> None:
    assert kinds_and_values("3.14.15") == [
        (TokenType.NUMBER, "3.14"),
        (TokenType.SYMBOL, "."),
        (TokenType.NUMBER, "15"),
        (TokenType.EOF, ""),
    ]


def test_string_escapes_are_kept_verbatim() -> None:
    tokens = tokenize('say "a\\"b" \'c\'')
    assert tokens[1].type is TokenType.STRING
    assert tokens[1].value == 'a\\"b'
    assert tokens[2].value == "c"


def test_unterminated_string_consumes_rest_of_input() -> None:
    assert kinds_and_values('say "abc give 1') == [
        (TokenType.KEYWORD, "say"),
        (TokenType.STRING, "abc give 1"),
        (TokenType.EOF, ""),
    ]


def test_comments_are_skipped() -> None:
    source = "// greeting\nsay 1 /* inline\n comment */ say 2"
    assert [token.value for token in tokenize(source)] == ["say", "1", "say", "2", ""]


def test_unterminated_block_comment_consumes_rest_of_input() -> None:
    assert [token.value for token in tokenize("say 1 /* oops say 2")] == ["say", "1", ""]


def test_symbolic_operators_are_dropped() -> None:
    assert kinds_and_values("x + y = 3") == [
        (TokenType.IDENTIFIER, "x"),
        (TokenType.IDENTIFIER, "y"),
        (TokenType.NUMBER, "3"),
        (TokenType.EOF, ""),
    ]


def test_punctuation_symbols() -> None:
    tokens = tokenize("a, b; c? d! e/f.")
    symbols = [token.value for token in tokens if token.type is TokenType.SYMBOL]
    assert symbols == [",", ";", "?", "!", "/", "."]


def test_slash_followed_by_star_or_slash_starts_a_comment() -> None:
    assert kinds_and_values("a / b") == [
        (TokenType.IDENTIFIER, "a"),
        (TokenType.SYMBOL, "/"),
        (TokenType.IDENTIFIER, "b"),
        (TokenType.EOF, ""),
    ]


def test_token_positions_are_start_positions() -> None:
    tokens = tokenize("say x\n  give y")
    positions = [(token.value, token.line, token.column) for token in tokens]
    assert positions == [
        ("say", 1, 1),
        ("x", 1, 5),
        ("give", 2, 3),
        ("y", 2, 8),
        ("", 2, 9),
    ]


@pytest.mark.parametrize(
    "source",
    [
        "",
        "   \n\n",
        'form x from 3 plus 4\nsay x',
        'if 1 over 0 do say "yes" end else do say "no" end',
        '@@ # $ %% "unterminated',
        "/* never closed",
        "1.2.3.4..5",
    ],
)
def test_stream_ends_with_exactly_one_eof_and_positions_never_decrease(source) -> None:
    tokens = tokenize(source)
    assert tokens[-1].type is TokenType.EOF
    assert sum(1 for token in tokens if token.type is TokenType.EOF) == 1
    positions = [(token.line, token.column) for token in tokens]
    assert positions == sorted(positions)


def test_lexer_instance_matches_module_function() -> None:
    source = "loop 3 do say step end"
    assert Lexer(source).tokenize() == tokenize(source)


def test_value_tokens() -> None:
    tokens = tokenize('x 1 "s" plus ,')
    assert [token.is_value for token in tokens] == [True, True, True, False, False, False]


def test_keyword_and_operator_helpers() -> None:
    assert is_keyword("form") and is_keyword("plus")
    assert not is_keyword("formula")
    assert is_operator("times")
    assert not is_operator("add")
    assert not is_operator("say")
