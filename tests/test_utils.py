"""Tests for utility functions."""

import pytest

from storefront.utils import (
    escape_html,
    format_price,
    is_valid_email,
    is_valid_phone,
    resolve_image_url,
)


class TestIsValidPhone:
    """Tests for is_valid_phone()."""

    @pytest.mark.parametrize(
        "phone",
        ["+7 912 345 67 89", "+79123456789", "+7 912-345-67-89", "+7912 345 67 89"],
    )
    def test_accepted(self, phone):
        assert is_valid_phone(phone) is True

    @pytest.mark.parametrize(
        "phone",
        [
            "89123456789",
            "+7 912 345",
            "",
            None,
            "+8 912 345 67 89",
            "+791234567890",
            "+7 912 345 67 89\n",
            "+7\t912\t345\t67\t89",
            "+7 912  345 67 89",
        ],
    )
    def test_rejected(self, phone):
        assert is_valid_phone(phone) is False


class TestIsValidEmail:
    """Tests for is_valid_email()."""

    @pytest.mark.parametrize("email", ["a@b.com", "user.name@mail.example.ru"])
    def test_accepted(self, email):
        assert is_valid_email(email) is True

    @pytest.mark.parametrize(
        "email", ["", None, "a@b", "a b@c.com", "a@@b.com", "@b.com", "a@b .com"]
    )
    def test_rejected(self, email):
        assert is_valid_email(email) is False


class TestFormatPrice:
    """Tests for format_price()."""

    def test_defined_price(self):
        assert format_price(750) == "750 синапсов"

    def test_thousands_grouped_with_space(self):
        assert format_price(12000, "₽") == "12 000 ₽"

    def test_unavailable(self):
        assert format_price(None) == "Бесценно"


class TestResolveImageUrl:
    """Tests for resolve_image_url()."""

    def test_relative_joined_to_cdn(self):
        assert resolve_image_url("/Shell.svg", "https://cdn.test/") == "https://cdn.test/Shell.svg"

    def test_absolute_passes_through(self):
        url = "https://other.test/x.png"
        assert resolve_image_url(url, "https://cdn.test") == url

    def test_empty(self):
        assert resolve_image_url("", "https://cdn.test") == ""


class TestEscapeHtml:
    """Tests for escape_html()."""

    def test_escapes_markup(self):
        assert escape_html("<b>a & b</b>") == "&lt;b&gt;a &amp; b&lt;/b&gt;"
