import pytest

from teacher_registry.security import PasswordCodec


def test_hash_is_salted_and_verifies(codec):
    h1 = codec.hash("pw1")
    h2 = codec.hash("pw1")
    assert h1 != h2
    assert "pw1" not in h1
    assert codec.verify("pw1", h1)
    assert codec.verify("pw1", h2)
    assert not codec.verify("pw2", h1)


def test_hash_rejects_empty_password(codec):
    with pytest.raises(ValueError):
        codec.hash("")


@pytest.mark.parametrize("bad_hash", ["", "not-a-hash", "$pbkdf2-sha256$broken", None])
def test_verify_returns_false_for_malformed_hash(codec, bad_hash):
    assert codec.verify("pw1", bad_hash) is False


def test_needs_rehash_after_rounds_increase(codec):
    weak = codec.hash("pw1")
    stronger = PasswordCodec(rounds=2000)
    assert stronger.verify("pw1", weak)
    assert stronger.needs_rehash(weak)
    assert not stronger.needs_rehash(stronger.hash("pw1"))
    assert not codec.needs_rehash("garbage")
