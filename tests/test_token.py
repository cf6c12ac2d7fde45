"""
Unit tests for the Token model, tokenizer and purpose dispatch.
"""

import pytest

from pasetocodec import Purpose, Token, get_footer, parse_token
from pasetocodec.errors import InvalidKeyLength, MalformedToken


class TestPurpose:
    """Tests for the closed Purpose enum."""

    def test_known_tags(self):
        """'local' and 'public' map to their members."""
        assert Purpose.parse("local") is Purpose.LOCAL
        assert Purpose.parse("public") is Purpose.PUBLIC

    @pytest.mark.parametrize("tag", ["", "Local", "secret", "pub"])
    def test_unknown_tags_rejected(self, tag):
        """Unknown purposes fail fast."""
        with pytest.raises(MalformedToken, match="purpose"):
            Purpose.parse(tag)


class TestParseToken:
    """Tests for parse_token()."""

    def test_three_segments(self):
        """A token without footer parses with an empty footer."""
        token = parse_token("v2.local.YWJj")
        assert token == Token("v2", Purpose.LOCAL, b"abc", b"")

    def test_four_segments(self):
        """A token with footer decodes the footer."""
        token = parse_token("v2.public.YWJj.Zm9v")
        assert token.purpose is Purpose.PUBLIC
        assert token.footer == b"foo"

    def test_bytes_input(self):
        """ASCII bytes tokens are accepted."""
        assert parse_token(b"v2.local.YWJj").payload == b"abc"

    @pytest.mark.parametrize("raw", ["v2.local", "v2.local.YWJj.Zm9v.x", "v2"])
    def test_segment_count(self, raw):
        """Tokens must have 3 or 4 segments."""
        with pytest.raises(MalformedToken, match="segments"):
            parse_token(raw)

    def test_empty_footer_segment_rejected(self):
        """An empty trailing segment is not a valid footer."""
        with pytest.raises(MalformedToken):
            parse_token("v2.local.YWJj.")

    def test_unknown_purpose(self):
        """Unknown purposes are rejected."""
        with pytest.raises(MalformedToken):
            parse_token("v2.secret.YWJj")

    def test_invalid_base64(self):
        """Padded payloads are rejected."""
        with pytest.raises(MalformedToken):
            parse_token("v2.local.YQ==")

    def test_missing_version(self):
        """An empty version tag is rejected."""
        with pytest.raises(MalformedToken):
            parse_token(".local.YWJj")


class TestTokenSerialization:
    """Tests for Token.to_string()."""

    def test_to_string_round_trip(self):
        """Parsing and serializing is byte exact."""
        raw = "v2.public.YWJj.Zm9v"
        assert Token.from_string(raw).to_string() == raw
        assert str(Token.from_string(raw)) == raw

    def test_empty_footer_omitted(self):
        """Empty footers produce three segments."""
        assert Token("v2", Purpose.LOCAL, b"abc").to_string() == "v2.local.YWJj"

    def test_header(self):
        """header is version.purpose. with a trailing dot."""
        assert Token("v2", Purpose.PUBLIC, b"").header == "v2.public."


class TestGetFooter:
    """Tests for get_footer()."""

    def test_footer_present(self, codec, local_key):
        """Footers are readable without a key."""
        token = codec.encrypt(b"m", local_key, footer=b'{"kid":"1"}')
        assert get_footer(token) == b'{"kid":"1"}'

    def test_footer_absent(self):
        """Tokens without footer return b''."""
        assert get_footer("v2.local.YWJj") == b""


class TestDecodeDispatch:
    """Tests for V2.decode()."""

    def test_dispatch_local(self, codec, local_key):
        """Local tokens are decrypted."""
        token = codec.encrypt(b"secret", local_key, b"f")
        assert codec.decode(token, local_key, Purpose.LOCAL) == (True, b"secret")

    def test_dispatch_public(self, codec, keypair):
        """Public tokens are verified."""
        token = codec.sign(b"claims", keypair.secret_key, b"f")
        assert codec.decode(token, keypair.public_key, Purpose.PUBLIC) == (True, b"claims")

    def test_wrong_version_rejected(self, codec, local_key):
        """Tokens of another version are rejected."""
        token = codec.encrypt(b"m", local_key).replace("v2.", "v4.", 1)
        with pytest.raises(MalformedToken, match="version"):
            codec.decode(token, local_key, Purpose.LOCAL)

    def test_accepts(self, codec):
        """accepts() passes v2 tokens through."""
        token = Token("v2", Purpose.LOCAL, b"x")
        assert codec.accepts(token) is token

    def test_secret_key_not_accepted_for_public(self, codec, keypair):
        """Public tokens need the 32-byte public key."""
        token = codec.sign(b"m", keypair.secret_key)
        with pytest.raises(InvalidKeyLength):
            codec.decode(token, keypair.secret_key, Purpose.PUBLIC)

    def test_purpose_mismatch_local_as_public(self, codec, local_key, keypair):
        """A local token is rejected where a public token is expected."""
        token = codec.encrypt(b"m", local_key)
        with pytest.raises(MalformedToken, match="purpose"):
            codec.decode(token, keypair.public_key, Purpose.PUBLIC)

    def test_purpose_mismatch_public_as_local(self, codec, local_key, keypair):
        """A public token is rejected where a local token is expected."""
        token = codec.sign(b"m", keypair.secret_key)
        with pytest.raises(MalformedToken, match="purpose"):
            codec.decode(token, local_key, Purpose.LOCAL)

    def test_purpose_accepts_wire_tag(self, codec, local_key):
        """The expected purpose may be given as its wire tag."""
        token = codec.encrypt(b"m", local_key)
        assert codec.decode(token, local_key, "local") == (True, b"m")

    def test_unknown_expected_purpose(self, codec, local_key):
        """An unknown expected purpose is rejected."""
        token = codec.encrypt(b"m", local_key)
        with pytest.raises(MalformedToken):
            codec.decode(token, local_key, "secret")
