from app.rows import (
    Accepted,
    RejectReason,
    Rejected,
    count_unescaped_quotes,
    validate_row,
)


def test_wrong_width_is_rejected():
    assert validate_row(["Ada"], 2, 1, None) == Rejected(RejectReason.WRONG_WIDTH)
    assert validate_row(["Ada", "a@x.com", "x"], 2, 1, None) == Rejected(RejectReason.WRONG_WIDTH)


def test_email_is_normalized_and_written_back():
    assert validate_row(["Ada", "ada@x.con"], 2, 1, None) == Accepted(["Ada", "ada@x.com"])


def test_invalid_email_is_rejected():
    assert validate_row(["Bob", "not-an-email"], 2, 1, None) == Rejected(RejectReason.INVALID_EMAIL)


def test_no_email_column_means_no_email_check():
    assert validate_row(["Bob", "not-an-email"], 2, None, None) == Accepted(["Bob", "not-an-email"])


def test_invalid_phone_is_cleared_not_rejected():
    outcome = validate_row(["Bob", "bob@x.com", "123"], 3, 1, 2)
    assert outcome == Accepted(["Bob", "bob@x.com", ""], phone_cleared=True)


def test_valid_and_empty_phones_are_kept():
    assert validate_row(["Bob", "bob@x.com", "+1 (415) 555-2671"], 3, 1, 2) == Accepted(
        ["Bob", "bob@x.com", "+1 (415) 555-2671"]
    )
    assert validate_row(["Bob", "bob@x.com", " "], 3, 1, 2) == Accepted(["Bob", "bob@x.com", ""])


def test_shared_email_and_phone_column_is_phone_checked_too():
    outcome = validate_row(["Bob", "bob@x.com"], 2, 1, 1)
    assert outcome == Accepted(["Bob", ""], phone_cleared=True)


def test_fields_are_cleaned():
    outcome = validate_row([' "Ada" ', ",ada@x.com"], 2, 1, None)
    assert outcome == Accepted(["Ada", "ada@x.com"])


def test_odd_quotes_are_rejected():
    assert validate_row(["x", 'say "hi'], 2, None, None) == Rejected(RejectReason.MALFORMED_QUOTES)


def test_quote_then_comma_is_rejected():
    assert validate_row(["x", 'a "b", c'], 2, None, None) == Rejected(RejectReason.MALFORMED_QUOTES)


def test_leading_comma_then_quote_is_rejected():
    assert validate_row(["x", ',,"y"'], 2, None, None) == Rejected(RejectReason.MALFORMED_QUOTES)


def test_escaped_quote_pair_is_allowed():
    assert validate_row(["x", 'a ""b'], 2, None, None) == Accepted(["x", 'a ""b'])


def test_input_row_is_not_mutated():
    row = ["Ada ", "ada@x.con"]
    validate_row(row, 2, 1, None)
    assert row == ["Ada ", "ada@x.con"]


def test_count_unescaped_quotes():
    assert count_unescaped_quotes("") == 0
    assert count_unescaped_quotes('""') == 0
    assert count_unescaped_quotes('"""') == 1
    assert count_unescaped_quotes('a"b"c') == 2
