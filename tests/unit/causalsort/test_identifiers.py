"""Tests for the legacy identifier codec."""

from __future__ import annotations

import pytest

from causalsort.errors import IdentifierError
from causalsort.identifiers import DIGEST_SIZE, HashTarget, Multihash

ROOT = "%rootBOK7pZikWM6aupei3PuE5ghRtFM44nrsX0FuBWY=.sha256"
ROOT_BLOB = "&rootBOK7pZikWM6aupei3PuE5ghRtFM44nrsX0FuBWY=.sha256"


class TestFromLegacy:
    def test_message(self):
        mh = Multihash.from_legacy(ROOT)
        assert mh.target is HashTarget.MESSAGE
        assert len(mh.digest) == DIGEST_SIZE
        assert mh.is_message

    def test_blob(self):
        mh = Multihash.from_legacy(ROOT_BLOB)
        assert mh.target is HashTarget.BLOB
        assert not mh.is_message

    def test_bytes_input(self):
        assert Multihash.from_legacy(ROOT.encode()) == Multihash.from_legacy(ROOT)

    def test_renders_back(self):
        assert Multihash.from_legacy(ROOT).to_legacy() == ROOT
        assert str(Multihash.from_legacy(ROOT_BLOB)) == ROOT_BLOB

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "hello world",
            "@rootBOK7pZikWM6aupei3PuE5ghRtFM44nrsX0FuBWY=.ed25519",
            "@rootBOK7pZikWM6aupei3PuE5ghRtFM44nrsX0FuBWY=.sha256",
            "%rootBOK7pZikWM6aupei3PuE5ghRtFM44nrsX0FuBWY=",
            "%rootBOK7pZikWM6aupei3PuE5ghRtFM44nrsX0FuBWY=.sha512",
            "%rootBOK7pZikWM6aupei3PuE5ghRtFM44nrsX0FuBW.sha256",
            "%root*OK7pZikWM6aupei3PuE5ghRtFM44nrsX0FuBWY=.sha256",
            "%rootBOK7pZikWM6aupei3PuE5ghRtFM44nrsX0FuBWY=.sha256 ",
        ],
    )
    def test_rejects_malformed(self, text):
        with pytest.raises(IdentifierError):
            Multihash.from_legacy(text)

    def test_rejects_non_canonical_padding_bits(self):
        # 'Z' leaves non-zero bits in the padding position
        with pytest.raises(IdentifierError):
            Multihash.from_legacy("%rootBOK7pZikWM6aupei3PuE5ghRtFM44nrsX0FuBWZ=.sha256")

    def test_rejects_invalid_utf8(self):
        with pytest.raises(IdentifierError):
            Multihash.from_legacy(b"%\xff\xfe.sha256")

    def test_identifier_error_is_value_error(self):
        with pytest.raises(ValueError):
            Multihash.from_legacy("nope")


class TestParsePrefix:
    def test_no_tail(self):
        mh, rest = Multihash.parse_prefix(ROOT)
        assert mh == Multihash.from_legacy(ROOT)
        assert rest == ""

    @pytest.mark.parametrize("tail", ["?thread", " ", ".sha256", "\n%other"])
    def test_returns_tail(self, tail):
        mh, rest = Multihash.parse_prefix(ROOT + tail)
        assert mh == Multihash.from_legacy(ROOT)
        assert rest == tail

    def test_bytes_input(self):
        mh, rest = Multihash.parse_prefix(ROOT_BLOB.encode() + b"!")
        assert mh.target is HashTarget.BLOB
        assert rest == "!"

    @pytest.mark.parametrize(
        "text",
        [
            "see " + ROOT,
            ROOT[:-1],
            "%rootBOK7pZikWM6aupei3PuE5ghRtFM44nrsX0FuBWY=.sha512?x",
            "%rootBOK7pZikWM6aupei3PuE5ghRtFM44nrsX0FuBWZ=.sha256",
        ],
    )
    def test_rejects_bad_prefix(self, text):
        with pytest.raises(IdentifierError):
            Multihash.parse_prefix(text)


class TestTryParse:
    def test_valid(self):
        assert Multihash.try_parse(ROOT) == Multihash.from_legacy(ROOT)

    def test_invalid_returns_none(self):
        assert Multihash.try_parse("%not-a-hash.sha256") is None

    def test_trailing_text_rejected_by_default(self):
        assert Multihash.try_parse(ROOT + "?thread") is None

    def test_trailing_text_allowed(self):
        assert Multihash.try_parse(ROOT + "?thread", allow_trailing=True) == Multihash.from_legacy(ROOT)

    def test_allow_trailing_still_needs_identifier(self):
        assert Multihash.try_parse("x" + ROOT, allow_trailing=True) is None


class TestEquality:
    def test_equal_digests_are_equal(self):
        a = Multihash.from_legacy(ROOT)
        b = Multihash.from_legacy(ROOT)
        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_target_participates_in_equality(self):
        assert Multihash.from_legacy(ROOT) != Multihash.from_legacy(ROOT_BLOB)

    def test_immutable(self):
        mh = Multihash.from_legacy(ROOT)
        with pytest.raises(AttributeError):
            mh.digest = b"\x00" * DIGEST_SIZE

    def test_digest_size_enforced(self):
        with pytest.raises(IdentifierError):
            Multihash(target=HashTarget.MESSAGE, digest=b"short")
