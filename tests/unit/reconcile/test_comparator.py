"""Tests for per-victim and global-check comparison."""

from tracerecon.domain.enums import TransferOrigin
from tracerecon.domain.models.scenario import GlobalCheckSpec, VictimSpec
from tracerecon.domain.models.transfer import TransferEvent
from tracerecon.reconcile.comparator import burned_amount, compare_global_check, compare_victim

ACTUAL_DUSD = "0x788d96f655735f52c676a133f4dfc53cec614d4a"
LOCAL_DUSD = "0x" + "d0" * 20
COLLATERAL = 25_660_570_000


def _make_victim(collateral: int = COLLATERAL, dust: int = 1) -> VictimSpec:
    return VictimSpec(
        victim_id=1,
        label="Victim 1 (dUSD)",
        symbol="dUSD",
        decimals=6,
        expected_collateral=collateral,
        expected_dust=dust,
    )


def _actual(value: int, token: str = ACTUAL_DUSD) -> TransferEvent:
    return TransferEvent(token=token, from_address="0xv", to_address="0xa", value=value, origin=TransferOrigin.ACTUAL)


def _local(value: int, token: str = LOCAL_DUSD) -> TransferEvent:
    return TransferEvent(token=token, from_address="0xv", to_address="0xa", value=value, origin=TransferOrigin.LOCAL)


class TestBurnedAmount:
    def test_difference(self):
        assert burned_amount(100, 1) == 99

    def test_floored_at_zero(self):
        assert burned_amount(5, 10) == 0


class TestCompareVictim:
    def test_exact_reproduction_matches_everything(self):
        result = compare_victim(
            _make_victim(),
            LOCAL_DUSD,
            ACTUAL_DUSD,
            [_actual(COLLATERAL), _actual(1)],
            [_local(COLLATERAL), _local(1)],
        )
        assert result.matches.collateral_pulled
        assert result.matches.dust_returned
        assert result.matches.burned
        assert result.actual.collateral_pulled == COLLATERAL
        assert result.actual.dust_returned == 1
        assert result.actual.burned == COLLATERAL - 1
        assert result.reproduced.burned == COLLATERAL - 1

    def test_deviation_within_window_matches(self):
        result = compare_victim(_make_victim(), LOCAL_DUSD, ACTUAL_DUSD, [_actual(COLLATERAL + 50)], [])
        assert result.matches.collateral_pulled
        assert result.actual.collateral_pulled == COLLATERAL + 50

    def test_deviation_beyond_window_fails(self):
        result = compare_victim(
            _make_victim(), LOCAL_DUSD, ACTUAL_DUSD, [_actual(COLLATERAL + 128_302_851)], []
        )
        assert not result.matches.collateral_pulled
        assert not result.matches.burned
        assert result.actual.collateral_pulled == 0

    def test_small_amount_deviation_beyond_window_fails(self):
        victim = _make_victim(collateral=25_600, dust=0)
        ok = compare_victim(victim, LOCAL_DUSD, ACTUAL_DUSD, [_actual(25_650)], [])
        bad = compare_victim(victim, LOCAL_DUSD, ACTUAL_DUSD, [_actual(25_800)], [])
        assert ok.matches.collateral_pulled
        assert not bad.matches.collateral_pulled

    def test_actual_side_filtered_by_token(self):
        result = compare_victim(_make_victim(), LOCAL_DUSD, ACTUAL_DUSD, [_actual(COLLATERAL, token="0xelse")], [])
        assert not result.matches.collateral_pulled

    def test_zero_dust_requires_exact_zero_transfer(self):
        victim = _make_victim(dust=0)
        missing = compare_victim(victim, LOCAL_DUSD, ACTUAL_DUSD, [_actual(COLLATERAL), _actual(1)], [])
        present = compare_victim(victim, LOCAL_DUSD, ACTUAL_DUSD, [_actual(COLLATERAL), _actual(0)], [])
        assert not missing.matches.dust_returned
        assert present.matches.dust_returned

    def test_local_missing_falls_back_to_expected(self):
        result = compare_victim(_make_victim(), LOCAL_DUSD, ACTUAL_DUSD, [], [])
        assert result.reproduced.collateral_pulled == COLLATERAL
        assert result.reproduced.dust_returned == 1
        assert result.actual.collateral_pulled == 0
        assert result.matches.count() == 0

    def test_local_side_is_exact(self):
        result = compare_victim(_make_victim(), LOCAL_DUSD, ACTUAL_DUSD, [], [_local(COLLATERAL + 1)])
        assert result.reproduced.collateral_pulled == COLLATERAL

    def test_token_addresses_lowercased(self):
        result = compare_victim(_make_victim(), LOCAL_DUSD.upper().replace("0X", "0x"), ACTUAL_DUSD, [], [])
        assert result.local_token == LOCAL_DUSD
        assert result.symbol == "dUSD"
        assert result.decimals == 6


class TestCompareGlobalCheck:
    def test_within_tolerance_any_token(self):
        spec = GlobalCheckSpec(amount=40_000_000_000, decimals=6)
        result = compare_global_check(spec, [_actual(40_000_000_999, token="0xflash")], [])
        assert result.matches
        assert result.actual == 40_000_000_999
        assert result.reproduced == 40_000_000_000

    def test_outside_tolerance(self):
        spec = GlobalCheckSpec(amount=40_000_000_000, decimals=6)
        result = compare_global_check(spec, [_actual(40_000_001_000)], [])
        assert not result.matches
        assert result.actual == 0

    def test_reproduced_from_local_transfer(self):
        spec = GlobalCheckSpec(amount=40_000_000_000, decimals=6)
        result = compare_global_check(spec, [], [_local(40_000_000_000)])
        assert result.reproduced == 40_000_000_000
        assert result.label == "Flash mint"
