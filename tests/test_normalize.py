import pytest

from govdecode.constants import UINT256_MAX
from govdecode.core.errors import MalformedAddress, MalformedAmount, MalformedCalldata
from govdecode.normalize import (
    normalize_address,
    normalize_amount,
    normalize_calldata,
    normalize_call,
    normalize_signature,
    split_calldatas,
)


class TestNormalizeAddress:
    def test_lowercases_checksummed(self):
        assert normalize_address("0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913") == (
            "0x833589fcd6edb6e08f4c7c32d4f71b54bda02913"
        )

    def test_accepts_missing_prefix(self):
        assert normalize_address("aa" * 20) == "0x" + "aa" * 20

    @pytest.mark.parametrize("raw", ["0x1234", "0x" + "zz" * 20, "0x" + "aa" * 21, "", None, 123])
    def test_rejects(self, raw):
        result = normalize_address(raw)
        assert isinstance(result, MalformedAddress)
        assert result.raw == raw
        assert result.field == "target"


class TestNormalizeAmount:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("500000000000000000", 500_000_000_000_000_000),
            ("0x0de0b6b3a7640000", 10**18),
            (42, 42),
            (None, 0),
            ("0", 0),
            (str(UINT256_MAX), UINT256_MAX),
        ],
    )
    def test_accepts(self, raw, expected):
        assert normalize_amount(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        ["-1", -5, "1.5", 1.5, True, "0xzz", "abc", str(UINT256_MAX + 1), "1" * 5000, "0x" + "f" * 65, "-" + "9" * 5000],
    )
    def test_rejects(self, raw):
        result = normalize_amount(raw)
        assert isinstance(result, MalformedAmount)
        assert result.field == "value"

    def test_huge_amount_stays_exact(self):
        raw = "115792089237316195423570985008687907853269984665640564039457584007913129639935"
        assert normalize_amount(raw) == 2**256 - 1


class TestNormalizeCalldata:
    @pytest.mark.parametrize("raw", [None, "", "0x", "0X"])
    def test_empty_forms(self, raw):
        assert normalize_calldata(raw) == b""

    def test_decodes_hex(self):
        assert normalize_calldata("0xA9059CBB") == bytes.fromhex("a9059cbb")

    def test_odd_length_is_rejected_not_truncated(self):
        result = normalize_calldata("0xa9059cb")
        assert isinstance(result, MalformedCalldata)
        assert "odd" in result.reason

    def test_non_hex(self):
        assert isinstance(normalize_calldata("0xnothex!"), MalformedCalldata)
        assert isinstance(normalize_calldata(b"\xa9\x05"), MalformedCalldata)


def test_normalize_signature():
    assert normalize_signature("  transfer(address,uint256) ") == "transfer(address,uint256)"
    assert normalize_signature("") is None
    assert normalize_signature("   ") is None
    assert normalize_signature(None) is None


def test_split_calldatas():
    assert split_calldatas(["0x", "0x12"]) == ["0x", "0x12"]
    assert split_calldatas("0x:0xa9059cbb") == ["0x", "0xa9059cbb"]
    assert split_calldatas("") == []
    assert split_calldatas(None) == []


class TestNormalizeCall:
    def test_well_formed(self):
        call, warnings = normalize_call("0x" + "AA" * 20, "7", "0x12345678", "foo()")
        assert warnings == ()
        assert call.target == "0x" + "aa" * 20
        assert call.value == 7
        assert call.calldata == bytes.fromhex("12345678")
        assert call.signature == "foo()"
        assert call.selector == "0x12345678"

    def test_malformed_fields_fall_back(self):
        call, warnings = normalize_call("not-an-address", "-3", "0xabc")
        assert call.target is None
        assert call.value == 0
        assert call.calldata == b""
        assert call.selector is None
        assert [w.field for w in warnings] == ["target", "value", "calldata"]


def test_leading_zeros_do_not_count_against_uint256():
    assert normalize_amount("0" * 5000 + "42") == 42
    assert normalize_amount("0x" + "0" * 100 + "ff") == 255


def test_oversized_value_is_a_warning_not_an_exception():
    call, warnings = normalize_call("0x" + "aa" * 20, "9" * 5000, "0x")
    assert call.value == 0
    assert len(warnings) == 1
    assert warnings[0].field == "value"
    assert warnings[0].reason == "amount exceeds uint256"
