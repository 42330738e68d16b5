"""Tests for cache key derivation and key layout."""

import hashlib

from semcache.cache.keys import KEY_LENGTH, KeyLayout, derive_key


class TestDeriveKey:

    def test_deterministic(self):
        assert derive_key("ns", "What is Ruby?") == derive_key("ns", "What is Ruby?")

    def test_truncated_sha256_of_namespace_and_query(self):
        expected = hashlib.sha256(b"semantic_cache:hello").hexdigest()[:16]
        assert derive_key("semantic_cache", "hello") == expected

    def test_length(self):
        assert len(derive_key("ns", "q")) == KEY_LENGTH == 16

    def test_namespace_scopes_key(self):
        assert derive_key("a", "q") != derive_key("b", "q")

    def test_query_is_not_normalized(self):
        assert derive_key("ns", "Hello") != derive_key("ns", "hello")


class TestKeyLayout:

    def test_key_families(self):
        layout = KeyLayout("faq")

        assert layout.entry("abc") == "faq:entry:abc"
        assert layout.tag("pricing") == "faq:tag:pricing"
        assert layout.keys == "faq:keys"
        assert layout.tag_pattern == "faq:tag:*"
