"""In-memory token store behaviour."""

import threading

import pytest

from zendesk_bridge.utils.token_storage import InMemoryTokenStore, TokenStore


def test_starts_empty():
    store = InMemoryTokenStore()

    assert store.get() is None
    assert not store.has_token()


def test_set_overwrites_previous_token():
    store = InMemoryTokenStore()
    store.set("first")
    store.set("second")

    assert store.get() == "second"
    assert store.has_token()


def test_clear():
    store = InMemoryTokenStore("token")
    store.clear()

    assert store.get() is None


def test_rejects_empty_token():
    store = InMemoryTokenStore()

    with pytest.raises(ValueError):
        store.set("")


def test_is_a_token_store():
    assert isinstance(InMemoryTokenStore(), TokenStore)


def test_concurrent_writers_leave_one_complete_value():
    store = InMemoryTokenStore()
    values = [f"token-{i}" for i in range(50)]
    threads = [threading.Thread(target=store.set, args=(value,)) for value in values]

    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert store.get() in values
