import pytest

from wasmcontracts.ibc_reflect.state import Config, accounts, config, pending_channel
from wasmcontracts.std.storage import MemoryStorage, NotFoundError, Order, ParseError


@pytest.fixture
def storage():
    return MemoryStorage()


def test_config_round_trip(storage):
    config(storage).save(Config(reflect_code_id=101))
    assert config(storage).load() == Config(101)


def test_config_missing_raises(storage):
    with pytest.raises(NotFoundError):
        config(storage).load()


def test_accounts_missing_message(storage):
    with pytest.raises(NotFoundError) as excinfo:
        accounts(storage).load("channel-123")
    assert str(excinfo.value) == "cosmwasm_std::addresses::Addr not found"


def test_accounts_save_load_and_remove(storage):
    accounts(storage).save("channel-123", "acct-123")
    assert accounts(storage).load(b"channel-123") == "acct-123"
    accounts(storage).remove("channel-123")
    assert accounts(storage).may_load("channel-123") is None


def test_accounts_range_is_ordered_and_isolated(storage):
    accounts(storage).save("channel-2", "acct-2")
    accounts(storage).save("channel-1", "acct-1")
    pending_channel(storage).save("channel-9")
    config(storage).save(Config(17))
    listed = list(accounts(storage).range(None, None, Order.ASCENDING))
    assert listed == [(b"channel-1", "acct-1"), (b"channel-2", "acct-2")]


def test_accounts_update_refuses_existing(storage):
    def register(existing):
        if existing is not None:
            raise ValueError("Cannot register over an existing channel")
        return "acct-1"

    assert accounts(storage).update("channel-1", register) == "acct-1"
    with pytest.raises(ValueError):
        accounts(storage).update("channel-1", register)
    assert accounts(storage).load("channel-1") == "acct-1"


def test_accounts_bad_value_raises_parse_error(storage):
    accounts(storage).save("channel-1", 5)
    with pytest.raises(ParseError):
        accounts(storage).load("channel-1")


def test_pending_channel_lifecycle(storage):
    pending_channel(storage).save("channel-1234")
    assert pending_channel(storage).load() == "channel-1234"
    pending_channel(storage).remove()
    with pytest.raises(NotFoundError):
        pending_channel(storage).load()