"""Tests for CachedChatClient."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from semcache.wrapper import CachedChatClient, wrap
from tests.utils.keyword_embedder import RUBY_PARAPHRASE, RUBY_QUESTION, WEATHER_QUESTION


@pytest.fixture
def chat_client():
    client = MagicMock()
    client.chat.side_effect = lambda **kwargs: f"answer to {kwargs['messages'][-1]['content']}"
    return client


class TestCachedChatClient:

    def test_wrap_returns_cached_client(self, chat_client, cache):
        cached = wrap(chat_client, cache)

        assert isinstance(cached, CachedChatClient)
        assert cached.semantic_cache is cache

    def test_similar_question_served_from_cache(self, chat_client, cache):
        cached = wrap(chat_client, cache)

        first = cached.chat(model="gpt-4o", messages=[{"role": "user", "content": RUBY_QUESTION}])
        second = cached.chat(model="gpt-4o", messages=[{"role": "user", "content": RUBY_PARAPHRASE}])

        assert first == second == f"answer to {RUBY_QUESTION}"
        assert chat_client.chat.call_count == 1
        assert cache.stats.hits == 1
        assert cache.stats.total_savings > 0

    def test_arguments_forwarded_on_miss(self, chat_client, cache):
        cached = wrap(chat_client, cache)
        messages = [{"role": "user", "content": WEATHER_QUESTION}]

        cached.chat(model="gpt-4o-mini", messages=messages, temperature=0.2)

        chat_client.chat.assert_called_once_with(model="gpt-4o-mini", messages=messages, temperature=0.2)
        assert cache.store.entries()[0].model == "gpt-4o-mini"

    def test_last_user_message_is_the_query(self, chat_client, cache):
        cached = wrap(chat_client, cache)
        messages = [
            {"role": "system", "content": "You are terse."},
            {"role": "user", "content": WEATHER_QUESTION},
            {"role": "assistant", "content": "Sunny."},
            {"role": "user", "content": RUBY_QUESTION},
        ]

        cached.chat(messages=messages)

        assert cache.store.entries()[0].query == RUBY_QUESTION

    def test_message_objects_supported(self, cache):
        client = MagicMock()
        client.chat.return_value = "ok"
        cached = wrap(client, cache)

        cached.chat(messages=[SimpleNamespace(role="user", content=RUBY_QUESTION)])

        assert cache.store.entries()[0].query == RUBY_QUESTION

    def test_no_user_message_bypasses_cache(self, cache):
        client = MagicMock()
        client.chat.return_value = "hello"
        cached = wrap(client, cache)

        assert cached.chat(messages=[{"role": "system", "content": "hi"}]) == "hello"
        assert cached.chat(messages=[{"role": "system", "content": "hi"}]) == "hello"
        assert client.chat.call_count == 2
        assert cache.size() == 0
        assert cache.stats.total_queries == 0

    def test_other_attributes_delegate(self, chat_client, cache):
        chat_client.models.list.return_value = ["gpt-4o"]
        cached = wrap(chat_client, cache)

        assert cached.models.list() == ["gpt-4o"]
