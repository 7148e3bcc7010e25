import hashlib
import hmac

import pytest

from account_activation.domain.services import (
    compute_check_code,
    generate_confirm_token,
    generate_salt,
    secure_compare,
    verify_check_code,
)


def test_sha1_matches_legacy_links():
    expected = hashlib.sha1(b"a@b.comPS").hexdigest()
    assert compute_check_code("a@b.com", "P", "S") == expected
    assert verify_check_code(expected, "a@b.com", "P", "S") is True


def test_hmac_sha256_keys_with_salt():
    expected = hmac.new(b"S", b"a@b.comP", hashlib.sha256).hexdigest()
    assert compute_check_code("a@b.com", "P", "S", "hmac-sha256") == expected


def test_check_depends_on_salt():
    assert compute_check_code("a@b.com", "P", "S1") != compute_check_code(
        "a@b.com", "P", "S2"
    )
    assert verify_check_code(
        compute_check_code("a@b.com", "P", "S1"), "a@b.com", "P", "S2"
    ) is False


def test_unknown_algorithm_raises():
    with pytest.raises(ValueError):
        compute_check_code("a@b.com", "P", "S", "md5")


def test_verify_tolerates_non_ascii_input():
    assert verify_check_code("é", "a@b.com", "P", "S") is False


def test_salts_and_tokens_are_random():
    assert len({generate_salt() for _ in range(20)}) == 20
    assert len({generate_confirm_token() for _ in range(20)}) == 20
    assert len(generate_salt()) == 32


def test_secure_compare_behavior():
    assert secure_compare("abcd", "abcd") is True
    assert secure_compare("abcd", "abce") is False
    assert secure_compare("", "") is True
    assert secure_compare("a", "") is False
