"""Tests for body truncation and masking helpers."""

import hashlib

from fieldmask._internal.masking.body import compress_and_mask_body, compress_body
from fieldmask._internal.masking.masker import FieldMasker


class TestCompressBody:
    """Tests for compress_body."""

    def test_none(self):
        """None is passed through."""
        assert compress_body(None, 10) is None

    def test_unlimited(self):
        """-1 disables truncation."""
        body = "x" * 1000
        assert compress_body(body, -1) == body

    def test_within_limit(self):
        """Bodies that fit are unchanged."""
        assert compress_body("short", 5) == "short"

    def test_truncates_with_summary(self):
        """Long bodies are cut and summarized."""
        body = "abcdefghij"
        digest = hashlib.sha256(body.encode()).hexdigest()[:8]
        assert compress_body(body, 4) == f"abcd... [TRUNCATED: 10 chars, hash={digest}]"


class TestCompressAndMaskBody:
    """Tests for compress_and_mask_body."""

    def test_none(self):
        """None is passed through."""
        assert compress_and_mask_body(None, 10, FieldMasker()) is None

    def test_masks_without_truncation(self):
        """Masks the body when it fits."""
        body = '{"password":"secret"}'
        assert compress_and_mask_body(body, -1, FieldMasker()) == '{"password":"***"}'

    def test_masks_before_truncating(self):
        """A value cut by truncation is still masked."""
        body = '{"password":"supersecretvalue"}'
        result = compress_and_mask_body(body, 20, FieldMasker())
        assert result is not None
        assert "supersecret" not in result
        assert result.startswith('{"password":"***"}')

    def test_truncates_masked_body(self):
        """Truncation applies to the masked body."""
        body = '{"password":"secret","name":"' + "n" * 50 + '"}'
        result = compress_and_mask_body(body, 10, FieldMasker())
        assert result is not None
        assert result.startswith('{"password... [TRUNCATED: ')

    def test_without_masker(self):
        """No masker means truncation only."""
        assert compress_and_mask_body("password=x", -1, None) == "password=x"
