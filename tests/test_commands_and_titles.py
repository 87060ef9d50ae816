"""Tests for chat commands and conversation titles."""
import pytest
from hypothesis import given
from hypothesis import strategies as st

from serviceai.errors import GatewayError
from serviceai.session import TitleGenerator, clean_title, parse_rename_command, strip_wrapping_quotes

from conftest import ScriptedGateway


class TestRenameCommand:
    """Tests for parse_rename_command."""

    @pytest.mark.parametrize("text,expected", [
        ('/rename "Foo Bar"', "Foo Bar"),
        ("/rename 'Foo Bar'", "Foo Bar"),
        ("/rename Foo Bar", "Foo Bar"),
        ("  /rename   Refund for order 3  ", "Refund for order 3"),
        ('/rename "  padded  "', "padded"),
    ])
    def test_valid_commands(self, text, expected):
        """Test the accepted forms."""
        assert parse_rename_command(text) == expected

    @pytest.mark.parametrize("text", [
        "/rename",
        "/rename   ",
        "/renameFoo",
        "please /rename Foo",
        "where is my order",
    ])
    def test_not_commands(self, text):
        """Test inputs that are not rename commands."""
        assert parse_rename_command(text) is None

    @given(st.text(
        alphabet=st.characters(blacklist_categories=("Cc", "Cs", "Zl", "Zp")),
        min_size=1,
    ).filter(lambda s: s.strip() and s.strip()[0] not in "\"'"))
    def test_unquoted_name_roundtrip(self, name):
        """Test that any unquoted name is returned trimmed."""
        assert parse_rename_command(f"/rename {name}") == name.strip()


class TestCleanTitle:
    """Tests for title normalization."""

    @pytest.mark.parametrize("raw,expected", [
        ('"Order Status Inquiry"', "Order Status Inquiry"),
        ("“Refund Request”", "Refund Request"),
        ("Gaming Mouse Delivery.", "Gaming Mouse Delivery"),
        ("Order Status\nExplanation: the user asked...", "Order Status"),
    ])
    def test_cleaned(self, raw, expected):
        """Test quote, punctuation and extra-line stripping."""
        assert clean_title(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "   ", "NO_TITLE", "no_title", '"New Chat"'])
    def test_unusable(self, raw):
        """Test replies that do not produce a title."""
        assert clean_title(raw) is None

    def test_length_capped(self):
        """Test that long titles are truncated."""
        assert len(clean_title("word " * 40)) <= 60

    def test_strip_wrapping_quotes(self):
        """Test stripping quotes around a name."""
        assert strip_wrapping_quotes("  'Foo'  ") == "Foo"


class TestTitleGenerator:
    """Tests for TitleGenerator."""

    @pytest.mark.asyncio
    async def test_greeting_yields_none_without_request(self):
        """Test that a greeting never reaches the model."""
        gateway = ScriptedGateway(titles=["Should Not Be Used"])

        title = await TitleGenerator(gateway).propose_title("hello")

        assert title is None
        assert gateway.title_prompts == []

    @pytest.mark.asyncio
    async def test_title_proposed(self):
        """Test a title for a real question."""
        gateway = ScriptedGateway(titles=['"Order Status Inquiry"'])

        title = await TitleGenerator(gateway).propose_title("where is order 2?")

        assert title == "Order Status Inquiry"
        assert "where is order 2?" in gateway.title_prompts[0]

    @pytest.mark.asyncio
    async def test_failure_yields_none(self):
        """Test that gateway failures are swallowed."""
        gateway = ScriptedGateway(titles=[GatewayError("boom")])

        assert await TitleGenerator(gateway).propose_title("refund please") is None

    @pytest.mark.asyncio
    async def test_no_title_marker(self):
        """Test that the NO_TITLE reply yields None."""
        gateway = ScriptedGateway(titles=["NO_TITLE"])

        assert await TitleGenerator(gateway).propose_title("thanks a lot") is None
