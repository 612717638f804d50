from taskflow.core.logger import format_exception_short


def test_format_exception_short_with_context():
    assert (
        format_exception_short(ValueError("bad\nsecond line"), "Parsing users")
        == "Parsing users: ValueError: bad"
    )


def test_format_exception_short_without_message():
    assert format_exception_short(KeyError()) == "KeyError"
