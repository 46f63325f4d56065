from app.serialize import quote_field, rows_to_csv


def test_quote_only_when_needed():
    assert quote_field("plain") == "plain"
    assert quote_field("") == ""
    assert quote_field("a,b") == '"a,b"'
    assert quote_field('say "hi"') == '"say ""hi"""'
    assert quote_field("l1\nl2") == '"l1\nl2"'


def test_rows_joined_without_trailing_newline():
    rows = [["name", "email"], ["Smith, Ada", "ada@x.com"]]
    assert rows_to_csv(rows) == 'name,email\n"Smith, Ada",ada@x.com'


def test_no_rows():
    assert rows_to_csv([]) == ""
