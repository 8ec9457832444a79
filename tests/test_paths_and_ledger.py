"""Tests for path normalization and the claim ledger."""

from pathlib import Path

from fileset_scanner.core.paths import canonical_path, is_within, relativize
from fileset_scanner.ledger import ClaimLedger


class TestCanonicalPath:
    """Test absolute path normalization."""

    def test_collapses_redundant_segments(self) -> None:
        assert canonical_path("/data//imp/./set/../a.tif") == "/data/imp/a.tif"

    def test_makes_relative_paths_absolute(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)

        assert canonical_path("sub/a.tif") == str(tmp_path / "sub" / "a.tif")

    def test_accepts_path_objects(self) -> None:
        assert canonical_path(Path("/data/imp/a.tif")) == "/data/imp/a.tif"


class TestRelativize:
    """Test paths relative to the scan root."""

    def test_in_root_member(self) -> None:
        assert relativize("/data/imp/set/1.dat", "/data/imp") == "set/1.dat"

    def test_normalizes_member_path(self) -> None:
        assert relativize("/data/imp/set/./x/../1.dat", "/data/imp/") == "set/1.dat"

    def test_out_of_root_member_keeps_parent_segments(self) -> None:
        """Test members outside the root are preserved, not rejected."""
        assert relativize("/data/shared/flat.tif", "/data/imp") == "../shared/flat.tif"

    def test_uses_forward_slashes(self) -> None:
        assert "\\" not in relativize("/data/imp/a/b/c.tif", "/data/imp")

    def test_round_trip(self) -> None:
        root = "/data/imp"
        member = "/data/imp/deep/nested/file.ome.tif"

        assert canonical_path(f"{root}/{relativize(member, root)}") == member


class TestIsWithin:
    def test_inside(self) -> None:
        assert is_within("/data/imp/a.tif", "/data/imp")

    def test_outside(self) -> None:
        assert not is_within("/data/imp2/a.tif", "/data/imp")
        assert not is_within("/data/imp/../x.tif", "/data/imp")


class TestClaimLedger:
    """Test claim bookkeeping."""

    def test_claim_all_reports_new_claims(self) -> None:
        ledger = ClaimLedger()

        assert ledger.claim_all(["/r/a", "/r/b"]) == 2
        assert ledger.claim_all(["/r/b", "/r/c"]) == 1
        assert len(ledger) == 3

    def test_claims_are_idempotent(self) -> None:
        ledger = ClaimLedger()
        ledger.claim_all(["/r/a", "/r/a"])
        ledger.claim_all(["/r/a"])

        assert len(ledger) == 1
        assert list(ledger) == ["/r/a"]

    def test_lookup_is_canonical(self) -> None:
        """Test equivalent spellings of a path are the same claim."""
        ledger = ClaimLedger()
        ledger.claim_all(["/r/x/../a.tif"])

        assert ledger.contains("/r/a.tif")
        assert ledger.contains("/r/./a.tif")
        assert "/r/a.tif" in ledger
        assert Path("/r/a.tif") in ledger

    def test_unclaimed_paths(self) -> None:
        ledger = ClaimLedger()
        ledger.claim_all(["/r/a.tif"])

        assert not ledger.contains("/r/b.tif")
        assert 42 not in ledger

    def test_no_removal_operation(self) -> None:
        ledger = ClaimLedger()

        assert not hasattr(ledger, "remove")
        assert not hasattr(ledger, "discard")
