"""
Tests for the naming conventions.
"""

from unittest import TestCase

from prisma_casemap.domain.naming import (
    NamingConventions,
    has_separators,
    is_valid_schema_identifier,
    split_words,
    to_lower_camel_case,
    to_upper_camel_case,
)


class TestSplitWords(TestCase):
    """Test cases for split_words"""

    def test_snake_case(self):
        assert split_words("user_agent_issued_to") == ["user", "agent", "issued", "to"]

    def test_camel_case(self):
        assert split_words("userAgentIssuedTo") == ["user", "Agent", "Issued", "To"]

    def test_acronym_run(self):
        assert split_words("HTTPServer") == ["HTTP", "Server"]
        assert split_words("XMLHttpRequest2Go") == ["XML", "Http", "Request2", "Go"]

    def test_separators_collapse(self):
        assert split_words("__user--name__") == ["user", "name"]

    def test_digits_stay_with_preceding_word(self):
        assert split_words("address_line2") == ["address", "line2"]
        assert split_words("line2Text") == ["line2", "Text"]

    def test_empty_and_separator_only(self):
        assert split_words("") == []
        assert split_words("___") == []

    def test_rejects_non_string(self):
        with self.assertRaises(TypeError):
            split_words(None)

    def test_has_separators(self):
        assert has_separators("auth_otp")
        assert has_separators("auth-otp")
        assert not has_separators("authOtp")


class TestUpperCamelCase(TestCase):
    """Test cases for model name conversion"""

    def test_snake_case(self):
        assert to_upper_camel_case("auth_otp") == "AuthOtp"
        assert to_upper_camel_case("blog_post") == "BlogPost"

    def test_screaming_snake_case(self):
        assert to_upper_camel_case("USER_ACCOUNTS") == "UserAccounts"

    def test_single_word(self):
        assert to_upper_camel_case("user") == "User"
        assert to_upper_camel_case("User") == "User"

    def test_camel_case_keeps_acronyms(self):
        assert to_upper_camel_case("HTTPLog") == "HTTPLog"
        assert to_upper_camel_case("apiKey") == "ApiKey"

    def test_idempotent(self):
        for name in ["auth_otp", "USER_ACCOUNTS", "a_b", "HTTP_log", "x2_y", "already"]:
            once = to_upper_camel_case(name)
            assert to_upper_camel_case(once) == once, name

    def test_empty(self):
        assert to_upper_camel_case("") == ""
        assert to_upper_camel_case("__") == ""


class TestLowerCamelCase(TestCase):
    """Test cases for field and index name conversion"""

    def test_snake_case(self):
        assert to_lower_camel_case("ip_address_issued_to") == "ipAddressIssuedTo"
        assert to_lower_camel_case("user_id") == "userId"

    def test_single_word(self):
        assert to_lower_camel_case("id") == "id"
        assert to_lower_camel_case("Email") == "email"

    def test_already_camel(self):
        assert to_lower_camel_case("userId") == "userId"
        assert to_lower_camel_case("createdAt") == "createdAt"

    def test_leading_acronym_is_lowercased(self):
        assert to_lower_camel_case("URL") == "url"
        assert to_lower_camel_case("IPAddress") == "ipAddress"

    def test_screaming_snake_case(self):
        assert to_lower_camel_case("CREATED_AT") == "createdAt"

    def test_idempotent(self):
        for name in ["user_agent_redeemed", "CREATED_AT", "IPAddress", "a_b", "line2_text"]:
            once = to_lower_camel_case(name)
            assert to_lower_camel_case(once) == once, name

    def test_empty(self):
        assert to_lower_camel_case("") == ""


class TestNamingConventions(TestCase):
    """Test cases for the NamingConventions facade"""

    def test_model_field_and_index_names(self):
        assert NamingConventions.model_name("auth_otp") == "AuthOtp"
        assert NamingConventions.field_name("user_agent_issued_to") == "userAgentIssuedTo"
        assert NamingConventions.index_name("post_author_title_key") == "postAuthorTitleKey"

    def test_identifier_validation(self):
        assert is_valid_schema_identifier("AuthOtp")
        assert is_valid_schema_identifier("user_id")
        assert not is_valid_schema_identifier("")
        assert not is_valid_schema_identifier("2fa")
        assert not is_valid_schema_identifier("user-name")
        assert NamingConventions.is_valid_identifier("userId")
