from app.serialize import rows_to_csv
from app.tokenizer import ParserState, parse_csv, scan_line


def test_simple_rows():
    assert parse_csv("a,b\nc,d") == [["a", "b"], ["c", "d"]]


def test_fields_are_trimmed():
    assert parse_csv(" a , b \n") == [["a", "b"]]


def test_quoted_field_spans_lines():
    rows = parse_csv('"line1\nline2",ok')
    assert rows == [["line1\nline2", "ok"]]


def test_escaped_quotes_inside_quotes():
    assert parse_csv('"say ""hi""",x') == [['say "hi"', "x"]]


def test_quoted_comma_is_not_a_separator():
    assert parse_csv('name,"Smith, Ada"') == [["name", "Smith, Ada"]]


def test_blank_and_empty_rows_are_skipped():
    rows = parse_csv("a,b\n\n , \n,\nc,d\n")
    assert rows == [["a", "b"], ["c", "d"]]


def test_rows_may_have_different_widths():
    assert parse_csv("a,b,c\nd\ne,") == [["a", "b", "c"], ["d"], ["e", ""]]


def test_unterminated_quote_closes_at_end_of_input():
    assert parse_csv('a,"b\n') == [["a", "b"]]


def test_open_quote_carries_state_to_next_line():
    state = scan_line(ParserState(), 'x,"abc')
    assert state.in_quotes
    assert state.current_row == ["x"]
    assert state.field_buffer == "abc\n"
    assert state.rows == []

    scan_line(state, 'def",y')
    assert not state.in_quotes
    assert state.rows == [["x", "abc\ndef", "y"]]


def test_clean_input_round_trips():
    text = "name,email,phone\nAda,ada@x.com,4155552671\nBob,bob@y.org,"
    assert rows_to_csv(parse_csv(text)) == text
