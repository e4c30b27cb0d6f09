from wasmcontracts.reflect.errors import MessagesEmptyError, NotCurrentOwnerError, ReflectError
from wasmcontracts.std.storage import StdError


def test_not_current_owner_message():
    err = NotCurrentOwnerError("creator", "random")
    assert "Permission denied: the sender is not the current owner" in str(err)


def test_not_current_owner_keeps_fields():
    err = NotCurrentOwnerError("creator", "random")
    assert (err.expected, err.actual) == ("creator", "random")


def test_not_current_owner_equality():
    assert NotCurrentOwnerError("creator", "random") == NotCurrentOwnerError("creator", "random")
    assert not NotCurrentOwnerError("creator", "random") == NotCurrentOwnerError("creator", "other")


def test_messages_empty_message_and_equality():
    assert str(MessagesEmptyError()) == "Messages empty. Must reflect at least one message"
    assert MessagesEmptyError() == MessagesEmptyError()
    assert not MessagesEmptyError() == NotCurrentOwnerError("a", "b")


def test_errors_are_std_errors():
    empty = MessagesEmptyError()
    assert isinstance(empty, StdError)
    assert str(empty) == "Messages empty. Must reflect at least one message"

    owner = NotCurrentOwnerError("a", "b")
    assert isinstance(owner, ReflectError)
    assert isinstance(owner, StdError)
    assert (owner.expected, owner.actual) == ("a", "b")
    assert "Permission denied: the sender is not the current owner" in str(owner)