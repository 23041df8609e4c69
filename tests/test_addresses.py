import pytest

from blog_backend.addresses import Address, parse_address


def test_bare_address():
    assert parse_address("bob@example.com") == Address("", "bob@example.com")


def test_named_address():
    assert parse_address("Alice <alice@example.com>") == Address("Alice", "alice@example.com")


def test_quoted_name():
    result = parse_address('"Bob Smith" <bob@example.com>')
    assert result.name == "Bob Smith"
    assert result.address == "bob@example.com"


def test_angle_only():
    assert parse_address("<carol@example.com>").name == ""


@pytest.mark.parametrize(
    "text",
    ["", "   ", "no-at-sign", "user@", "@example.com", "<a@example.com", "a..b@example.com",
     "a b@example.com"],
)
def test_invalid(text):
    with pytest.raises(ValueError):
        parse_address(text)