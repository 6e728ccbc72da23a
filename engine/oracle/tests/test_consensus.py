"""Tests for the Oracle consensus engine."""

import pytest

from oracle import OracleService, RoundBuffer, mean_price
from shared import ErrorCode, SystemParameters


def make_service(oracles=("A", "B", "C"), threshold=3):
    """Build a service with admitted, staked oracles."""
    service = OracleService(SystemParameters(admin="admin", consensus_threshold=threshold))
    for oracle in oracles:
        service.add_oracle("admin", oracle)
        service.stake(oracle, 1000)
    return service


class TestMeanPrice:
    """Test suite for the consensus calculation."""

    @pytest.mark.parametrize(
        "prices,expected",
        [
            ([100, 110, 90], 100),
            ([100, 101, 101], 100),
            ([1, 2], 1),
            ([7], 7),
            ([0, 0, 1], 0),
            ([10**18, 10**18 + 1, 10**18 + 2], 10**18 + 1),
        ],
    )
    def test_floor_mean(self, prices, expected):
        """Test consensus is floor(sum / count)."""
        assert mean_price(prices) == expected

    def test_empty(self):
        """Test no prices yields no consensus."""
        assert mean_price([]) is None


class TestFinalize:
    """Test suite for ConsensusEngine.finalize."""

    def test_finalize_at_threshold(self):
        """Test a round at threshold finalizes to the floor mean."""
        service = make_service()
        service.submit("A", "X", 100)
        service.submit("B", "X", 101)
        service.submit("C", "X", 101)

        result = service.finalize_consensus("X")
        assert result.success
        assert result.value == 100
        assert service.get_verified_price("X") == 100

    def test_buffer_cleared_after_finalize(self):
        """Test the round is removed and re-finalizing reports no data."""
        service = make_service()
        for oracle, price in (("A", 1), ("B", 2), ("C", 3)):
            service.submit(oracle, "X", price)

        service.finalize_consensus("X")
        assert service.get_pending_submissions("X") == []

        again = service.finalize_consensus("X")
        assert again.error == ErrorCode.NO_DATA

    def test_reporters_can_submit_next_round(self):
        """Test finalization opens a fresh round for the same reporters."""
        service = make_service()
        for oracle in ("A", "B", "C"):
            service.submit(oracle, "X", 100)
        service.finalize_consensus("X")

        assert service.submit("A", "X", 200).success

    def test_below_threshold(self):
        """Test a round short of quorum is rejected without side effects."""
        service = make_service()
        service.submit("A", "X", 100)
        service.submit("B", "X", 110)

        result = service.finalize_consensus("X")
        assert result.error == ErrorCode.CONSENSUS_NOT_REACHED
        assert service.get_verified_price("X") is None
        assert len(service.get_pending_submissions("X")) == 2
        assert service.get_oracle_reputation("A") == 100

    def test_no_data(self):
        """Test finalizing an asset with no round."""
        service = make_service()
        assert service.finalize_consensus("X").error == ErrorCode.NO_DATA

    def test_paused(self):
        """Test pause blocks finalization."""
        service = make_service()
        for oracle in ("A", "B", "C"):
            service.submit(oracle, "X", 100)
        service.set_paused("admin", True)

        assert service.finalize_consensus("X").error == ErrorCode.CONTRACT_PAUSED
        assert len(service.get_pending_submissions("X")) == 3

    def test_all_reporters_rewarded(self):
        """Test every reporter gains one reputation, outliers included."""
        service = make_service(oracles=("A", "B", "C", "D"))
        service.submit("A", "X", 100)
        service.submit("B", "X", 100)
        service.submit("C", "X", 100)
        service.submit("D", "X", 10_000)

        service.finalize_consensus("X")
        for oracle in ("A", "B", "C", "D"):
            assert service.get_oracle_reputation(oracle) == 101

    def test_non_reporters_not_rewarded(self):
        """Test oracles outside the round keep their reputation."""
        service = make_service(oracles=("A", "B", "C", "E"))
        for oracle in ("A", "B", "C"):
            service.submit(oracle, "X", 100)

        service.finalize_consensus("X")
        assert service.get_oracle_reputation("E") == 100

    def test_height_recorded(self):
        """Test the commit height is stored with the verified price."""
        service = make_service()
        for oracle in ("A", "B", "C"):
            service.submit(oracle, "X", 100)

        service.finalize_consensus("X")
        height = service.get_last_consensus_block("X")
        assert height == service.counter.current()
        assert service.audit.last("price-finalized").height == height

    def test_overwrites_previous_round(self):
        """Test a later round replaces the verified price and height."""
        service = make_service()
        for oracle in ("A", "B", "C"):
            service.submit(oracle, "X", 100)
        service.finalize_consensus("X")
        first_height = service.get_last_consensus_block("X")

        for oracle in ("A", "B", "C"):
            service.submit(oracle, "X", 130)
        service.finalize_consensus("X")

        assert service.get_verified_price("X") == 130
        assert service.get_last_consensus_block("X") > first_height

    def test_verified_price_persists_across_open_round(self):
        """Test the last good value stays readable while a new round fills."""
        service = make_service()
        for oracle in ("A", "B", "C"):
            service.submit(oracle, "X", 100)
        service.finalize_consensus("X")

        service.submit("A", "X", 500)
        assert service.get_verified_price("X") == 100

    def test_events(self):
        """Test round summary and finality events are emitted."""
        service = make_service()
        service.submit("A", "X", 100)
        service.submit("B", "X", 110)
        service.submit("C", "X", 90)
        service.finalize_consensus("X")

        summary = service.audit.last("consensus-round")
        assert summary.fields == {
            "asset": "X",
            "price": 100,
            "reporters": ["A", "B", "C"],
            "count": 3,
        }
        final = service.audit.last("price-finalized")
        assert final.fields == {"asset": "X", "price": 100}
        assert len(service.audit.events("oracle-rewarded")) == 3

    def test_no_events_on_failure(self):
        """Test failed finalization emits nothing."""
        service = make_service()
        service.submit("A", "X", 100)
        before = len(service.audit)

        service.finalize_consensus("X")
        assert len(service.audit) == before

    def test_empty_round_guard(self):
        """Test an empty round with zero threshold reports no data."""
        service = make_service()
        service.update_threshold("admin", 0)
        service.buffer.rounds["X"] = RoundBuffer(asset="X", capacity=10)

        result = service.finalize_consensus("X")
        assert result.error == ErrorCode.NO_DATA
        assert service.get_verified_price("X") is None

    def test_threshold_one(self):
        """Test a single report finalizes with threshold 1."""
        service = make_service(threshold=1)
        service.submit("A", "X", 42)
        assert service.finalize_consensus("X").value == 42


class TestPriceQueries:
    """Test suite for verified price reads."""

    def test_is_price_valid(self):
        """Test price checks against the verified value."""
        service = make_service()
        for oracle in ("A", "B", "C"):
            service.submit(oracle, "X", 100)
        service.finalize_consensus("X")

        assert service.is_price_valid("X", 105, 5)
        assert service.is_price_valid("X", 95, 5)
        assert not service.is_price_valid("X", 106, 5)

    def test_is_price_valid_without_consensus(self):
        """Test price checks fail when no verified price exists."""
        service = make_service()
        assert not service.is_price_valid("X", 100, 1000)

    def test_stats(self):
        """Test statistics tracking."""
        service = make_service()
        for oracle in ("A", "B", "C"):
            service.submit(oracle, "X", 100)
        service.finalize_consensus("X")
        service.finalize_consensus("X")

        stats = service.consensus.get_stats()
        assert stats["rounds_finalized"] == 1
        assert stats["rounds_failed"] == 1
        assert stats["verified_assets"] == 1
