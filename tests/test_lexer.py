# =============================================================================
# test_lexer.py - Lexer Unit Tests
# =============================================================================
# Tests for the Teeny tokenizer.
#
# Test coverage includes:
#   - Operators, including the one-character lookahead forms
#   - Keywords (exact, case-sensitive) versus identifiers
#   - Number and string literal boundaries
#   - Comments, whitespace and the implicit trailing newline
#   - Token locations
#   - Error conditions
# =============================================================================

import pytest
from teenyc.lexer import Lexer, TokenType, Token, KEYWORDS
from teenyc.errors import (
    LexicalError,
    UnsupportedCharacterError,
    InvalidStringCharacterError,
    MalformedNumberError,
)


# =============================================================================
# Helper Functions
# =============================================================================

def tokenize(source: str) -> list:
    """Tokenize the whole source, EOF included."""
    return list(Lexer(source, "<test>").tokenize())


def kinds(source: str) -> list:
    """Token types for the whole source, EOF included."""
    return [t.type for t in tokenize(source)]


# =============================================================================
# Basic Token Recognition Tests
# =============================================================================

class TestBasicTokens:
    """Test basic token recognition for simple inputs."""

    def test_empty_source(self):
        """The appended newline is the only token before EOF."""
        assert kinds("") == [TokenType.NEWLINE, TokenType.EOF]

    def test_whitespace_only(self):
        """Spaces, tabs and carriage returns are skipped."""
        assert kinds("   \t \r ") == [TokenType.NEWLINE, TokenType.EOF]

    def test_arithmetic_operators(self):
        assert kinds("+ -\t* /   ") == [
            TokenType.PLUS,
            TokenType.MINUS,
            TokenType.ASTERISK,
            TokenType.SLASH,
            TokenType.NEWLINE,
            TokenType.EOF,
        ]

    def test_all_operators(self):
        """Two-character operators only form when '=' follows directly."""
        assert kinds("+- */ >>= = != <<= ==") == [
            TokenType.PLUS,
            TokenType.MINUS,
            TokenType.ASTERISK,
            TokenType.SLASH,
            TokenType.GT,
            TokenType.GTEQ,
            TokenType.EQ,
            TokenType.NOTEQ,
            TokenType.LT,
            TokenType.LTEQ,
            TokenType.EQEQ,
            TokenType.NEWLINE,
            TokenType.EOF,
        ]

    def test_operator_spellings(self):
        tokens = tokenize("== != <= >= < > =")
        spellings = [t.spelling for t in tokens[:-2]]
        assert spellings == ["==", "!=", "<=", ">=", "<", ">", "="]

    def test_newlines_are_tokens(self):
        assert kinds("\n\n") == [
            TokenType.NEWLINE,
            TokenType.NEWLINE,
            TokenType.NEWLINE,
            TokenType.EOF,
        ]

    def test_carriage_return_is_skipped(self):
        """CRLF line endings produce a single NEWLINE per line."""
        assert kinds("PRINT x\r\n") == [
            TokenType.PRINT,
            TokenType.IDENT,
            TokenType.NEWLINE,
            TokenType.NEWLINE,
            TokenType.EOF,
        ]


# =============================================================================
# Comment Tests
# =============================================================================

class TestComments:
    """Test '#' comments."""

    def test_comment_skipped_newline_kept(self):
        assert kinds("+- # This is a comment!\n */") == [
            TokenType.PLUS,
            TokenType.MINUS,
            TokenType.NEWLINE,
            TokenType.ASTERISK,
            TokenType.SLASH,
            TokenType.NEWLINE,
            TokenType.EOF,
        ]

    def test_comment_on_last_line(self):
        """A comment without a trailing newline still ends the line."""
        assert kinds("# only a comment") == [TokenType.NEWLINE, TokenType.EOF]

    def test_comment_may_contain_anything(self):
        assert kinds('# "%" ! $ \\') == [TokenType.NEWLINE, TokenType.EOF]


# =============================================================================
# Keyword and Identifier Tests
# =============================================================================

class TestKeywords:
    """Keyword resolution is exact and case-sensitive."""

    @pytest.mark.parametrize("spelling,expected", sorted(KEYWORDS.items()))
    def test_keyword(self, spelling, expected):
        tokens = tokenize(spelling)
        assert tokens[0].type == expected
        assert tokens[0].spelling == spelling

    @pytest.mark.parametrize("spelling", [
        "print", "Print", "PRINTX", "LETS", "Let", "ENDIFS", "WHILE1", "GOT", "x",
    ])
    def test_near_keywords_are_identifiers(self, spelling):
        tokens = tokenize(spelling)
        assert tokens[0].type == TokenType.IDENT
        assert tokens[0].spelling == spelling

    def test_keywords_mixed_with_operators(self):
        assert kinds("IF+-123 foo*THEN/") == [
            TokenType.IF,
            TokenType.PLUS,
            TokenType.MINUS,
            TokenType.NUMBER,
            TokenType.IDENT,
            TokenType.ASTERISK,
            TokenType.THEN,
            TokenType.SLASH,
            TokenType.NEWLINE,
            TokenType.EOF,
        ]

    def test_identifier_with_digits(self):
        tokens = tokenize("abc123")
        assert tokens[0].type == TokenType.IDENT
        assert tokens[0].spelling == "abc123"

    def test_identifier_cannot_start_with_digit(self):
        """'1abc' is the number 1 followed by the identifier abc."""
        tokens = tokenize("1abc")
        assert tokens[0].type == TokenType.NUMBER
        assert tokens[0].spelling == "1"
        assert tokens[1].type == TokenType.IDENT
        assert tokens[1].spelling == "abc"

    def test_underscore_not_allowed(self):
        with pytest.raises(UnsupportedCharacterError):
            tokenize("my_var")


# =============================================================================
# Number Literal Tests
# =============================================================================

class TestNumbers:
    """Test numeric literal boundaries."""

    def test_integer(self):
        tokens = tokenize("123")
        assert tokens[0].type == TokenType.NUMBER
        assert tokens[0].spelling == "123"

    def test_decimal(self):
        tokens = tokenize("9.8654")
        assert tokens[0].type == TokenType.NUMBER
        assert tokens[0].spelling == "9.8654"
        assert tokens[1].type == TokenType.NEWLINE

    def test_numbers_between_operators(self):
        tokens = tokenize("+-123 9.8654*/")
        assert [t.type for t in tokens] == [
            TokenType.PLUS,
            TokenType.MINUS,
            TokenType.NUMBER,
            TokenType.NUMBER,
            TokenType.ASTERISK,
            TokenType.SLASH,
            TokenType.NEWLINE,
            TokenType.EOF,
        ]
        assert tokens[2].spelling == "123"
        assert tokens[3].spelling == "9.8654"

    def test_sign_is_not_part_of_literal(self):
        tokens = tokenize("-5")
        assert tokens[0].type == TokenType.MINUS
        assert tokens[1].spelling == "5"

    @pytest.mark.parametrize("source", ["9.", "9. ", "9.x", "LET a = 12.\n"])
    def test_decimal_point_needs_digit(self, source):
        with pytest.raises(MalformedNumberError):
            tokenize(source)

    def test_malformed_number_is_lexical_error(self):
        with pytest.raises(LexicalError):
            tokenize("9.")

    def test_leading_decimal_point_unsupported(self):
        with pytest.raises(UnsupportedCharacterError):
            tokenize(".5")

    def test_non_ascii_digit_unsupported(self):
        with pytest.raises(UnsupportedCharacterError):
            tokenize("٣")


# =============================================================================
# String Literal Tests
# =============================================================================

class TestStrings:
    """Test string literal boundaries."""

    def test_simple_string(self):
        tokens = tokenize('"abc"')
        assert tokens[0].type == TokenType.STRING
        assert tokens[0].spelling == "abc"

    def test_empty_string(self):
        tokens = tokenize('""')
        assert tokens[0].type == TokenType.STRING
        assert tokens[0].spelling == ""

    def test_string_keeps_spaces_and_punctuation(self):
        tokens = tokenize('"hello, world! #1 = ok?"')
        assert tokens[0].spelling == "hello, world! #1 = ok?"
        assert tokens[1].type == TokenType.NEWLINE

    def test_string_then_comment(self):
        assert kinds('+- "This is a string" # This is a comment!\n */') == [
            TokenType.PLUS,
            TokenType.MINUS,
            TokenType.STRING,
            TokenType.NEWLINE,
            TokenType.ASTERISK,
            TokenType.SLASH,
            TokenType.NEWLINE,
            TokenType.EOF,
        ]

    @pytest.mark.parametrize("source", [
        '"a%b"',
        '"back\\slash"',
        '"tab\there"',
        '"carriage\rreturn"',
    ])
    def test_forbidden_characters(self, source):
        with pytest.raises(InvalidStringCharacterError):
            tokenize(source)

    def test_unterminated_string(self):
        """The string runs into the line break, which is forbidden."""
        with pytest.raises(InvalidStringCharacterError) as exc_info:
            tokenize('PRINT "oops\nPRINT "fine"')
        assert exc_info.value.char == "\n"

    def test_forbidden_character_is_lexical_error(self):
        with pytest.raises(LexicalError):
            tokenize('"100%"')


# =============================================================================
# Error Condition Tests
# =============================================================================

class TestErrors:
    """Test characters that form no token."""

    def test_bang_requires_equals(self):
        with pytest.raises(UnsupportedCharacterError) as exc_info:
            tokenize("a ! b")
        assert exc_info.value.char == "!"
        assert "'!='" in exc_info.value.hint

    @pytest.mark.parametrize("char", ["$", "(", ")", ";", ",", "%", "&", "'"])
    def test_unsupported_characters(self, char):
        with pytest.raises(UnsupportedCharacterError):
            tokenize(f"LET a = 1 {char}")

    def test_error_location(self):
        with pytest.raises(LexicalError) as exc_info:
            tokenize("PRINT 1\nLET x = $")
        location = exc_info.value.location
        assert location.filename == "<test>"
        assert location.line == 2
        assert location.column == 9

    def test_error_message_shows_source_line(self):
        with pytest.raises(LexicalError) as exc_info:
            tokenize("LET x = $")
        message = str(exc_info.value)
        assert "<test>:1:9: error:" in message
        assert "    LET x = $" in message


# =============================================================================
# Lexer Behaviour Tests
# =============================================================================

class TestLexerBehaviour:
    """Test cursor progress, EOF handling and token locations."""

    def test_eof_is_sticky(self):
        lexer = Lexer("")
        assert lexer.next_token().type == TokenType.NEWLINE
        for _ in range(3):
            assert lexer.next_token().type == TokenType.EOF

    def test_stream_ends_in_eof(self):
        tokens = tokenize('LET a = 1\nPRINT a\nPRINT "done"')
        assert tokens[-1].type == TokenType.EOF
        assert sum(1 for t in tokens if t.type == TokenType.EOF) == 1

    def test_source_gets_trailing_newline(self):
        assert Lexer("PRINT 1").source == "PRINT 1\n"

    def test_locations(self):
        tokens = tokenize("LET x\n  PRINT")
        assert (tokens[0].line, tokens[0].column) == (1, 1)
        assert (tokens[1].line, tokens[1].column) == (1, 5)
        assert (tokens[2].line, tokens[2].column) == (1, 6)
        assert (tokens[3].line, tokens[3].column) == (2, 3)

    def test_spellings_reconstruct_line(self):
        """Joining spellings with single spaces rebuilds a normalized line."""
        line = "LET foo = bar * 3 + 2"
        tokens = tokenize(line)
        assert " ".join(t.spelling for t in tokens[:-2]) == line

    def test_line_structure_preserved(self):
        source = "LET a = 1 # set a\n\nPRINT a\n"
        tokens = tokenize(source)
        newline_count = sum(1 for t in tokens if t.type == TokenType.NEWLINE)
        assert newline_count == source.count("\n") + 1

    def test_token_is_immutable(self):
        token = tokenize("x")[0]
        with pytest.raises(AttributeError):
            token.spelling = "y"

    def test_token_repr(self):
        token = Token(TokenType.IDENT, "foo", 3, 7)
        assert repr(token) == "Token(IDENT, 'foo', 3:7)"

    def test_token_describe(self):
        assert Token(TokenType.IDENT, "foo").describe() == "identifier 'foo'"
        assert Token(TokenType.THEN, "THEN").describe() == "'THEN'"
        assert Token(TokenType.NEWLINE, "\n").describe() == "newline"
        assert Token(TokenType.EQEQ, "==").describe() == "'=='"
