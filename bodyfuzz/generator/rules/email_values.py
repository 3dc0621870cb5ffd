"""Email fields — any key containing "mail" gets malformed addresses."""

from typing import Any, Optional

from bodyfuzz.generator.base import Mutation, prefixed

PREFIX = "Invalid Email"

INVALID_EMAILS = [
    # syntax
    ("No At Symbol", "invalidemail"),
    ("No Domain", "invalid@"),
    ("Special Chars", "test!@example.com"),
    ("Double At", "test@@example.com"),
    ("Long Local Part", "a" * 200 + "@example.com"),
    ("Empty", ""),
    ("Null", None),
    # whitespace and characters
    ("Space in Email", "test @example.com"),
    ("No Username (Local Part)", "@example.com"),
    ("Missing TLD", "test@example"),
    ("Dot Starts Domain", "test@.com"),
    ("Double Dot in Domain", "test@example..com"),
    ("Unicode Characters", "tést@example.com"),
    ("Backslash in Email", "test\\@example.com"),
    ("Email Starts with Dot", ".test@example.com"),
    ("Email Ends with Dot", "test.@example.com"),
    ("Trailing Space", "test@example.com "),
    ("Leading Space", " test@example.com"),
    ("Multiple Dots in Local Part", "first..last@example.com"),
    ("Quoted Local Part (invalid here)", '"test"@example.com'),
    ("Local Part is Dot", ".@example.com"),
    ("Only @ and Domain", "@example.com"),
    # numeric and literal domains
    ("Numeric Domain Only", "user@123"),
    ("Numeric Domain with TLD Missing", "user@345"),
    ("Numeric Domain with Dot", "user@123.456"),
    ("Domain is Just Numbers", "user@9999999999"),
    ("Domain Starts With Number", "user@1example.com"),
    ("Domain Ends With Number", "user@example1.com"),
    ("Domain Only Numbers with TLD", "user@123.com"),
    ("IP Address as Domain (Invalid)", "user@192.168.1.1"),
    ("IP Address in Brackets (Valid)", "user@[192.168.1.1]"),
    ("Domain Label with Underscore", "user@exa_mple.com"),
]


def applies(key: Optional[str], value: Any) -> bool:
    return key is not None and "mail" in key.lower()


def mutations(value: Any) -> list[Mutation]:
    return prefixed(PREFIX, INVALID_EMAILS)
