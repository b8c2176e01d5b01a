"""Тесты для DonationCore.

Coverage:
- Регистрация causes: порядок проверок, creation fee, индекс title
- Регистрация donations: id с единицы, collected, перевод organization
- Поправки donations: только донор, дельта collected, лог поправок
- Атомарность: отказ проверки или перевода не меняет состояние
- Сквозной сценарий и свойства инвариантов
"""

import random
import threading

import pytest

from src.core.domain import DonationUpdate, ErrorCode, LedgerConfig, LedgerState
from src.ledger import (
    DonationCore,
    DonationUpdateLog,
    InMemoryValueTransfer,
    ManualClock,
    TransferRecord,
)


DONOR = "ST1TEST"
AUTHORITY = "ST2TEST"
STRANGER = "ST3FAKE"


@pytest.fixture
def transfer():
    return InMemoryValueTransfer()


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def core(transfer, clock):
    return DonationCore(value_transfer=transfer, clock=clock)


@pytest.fixture
def bound_core(core):
    core.set_authority_contract(AUTHORITY)
    return core


@pytest.fixture
def funded_core(bound_core):
    """Authority привязан, cause 0 зарегистрирован DONOR."""
    bound_core.register_cause(DONOR, "Education Fund", "Support schools", 1000)
    return bound_core


def assert_collected_consistent(core: DonationCore) -> None:
    """collected каждого cause == сумма amount его donations."""
    sums = {}
    for donation_id in range(1, core.get_donation_count() + 1):
        donation = core.get_donation(donation_id)
        sums[donation.cause_id] = sums.get(donation.cause_id, 0) + donation.amount
    for cause_id in range(core.get_cause_count()):
        assert core.get_cause(cause_id).collected == sums.get(cause_id, 0)


# =============================================================================
# CAUSES
# =============================================================================


class TestRegisterCause:
    def test_registers_cause(self, bound_core, transfer):
        result = bound_core.register_cause(DONOR, "Education Fund", "Support schools", 1000)

        assert result.ok
        assert result.value == 0
        cause = bound_core.get_cause(0)
        assert cause.title == "Education Fund"
        assert cause.description == "Support schools"
        assert cause.target == 1000
        assert cause.collected == 0
        assert cause.organization == DONOR
        assert cause.status is True
        assert transfer.transfers == [TransferRecord(amount=1000, sender=DONOR, recipient=AUTHORITY)]

    def test_ids_are_sequential(self, bound_core):
        ids = [bound_core.register_cause(DONOR, f"Cause {i}", "desc", 10).value for i in range(3)]
        assert ids == [0, 1, 2]
        assert bound_core.get_cause_count() == 3

    def test_timestamp_from_clock(self, bound_core, clock):
        clock.set_height(42)
        bound_core.register_cause(DONOR, "Education Fund", "Support schools", 1000)
        assert bound_core.get_cause(0).timestamp == 42

    def test_duplicate_title(self, bound_core):
        first = bound_core.register_cause(DONOR, "Education Fund", "Support schools", 1000)
        snapshot = bound_core.snapshot()

        second = bound_core.register_cause(DONOR, "Education Fund", "Different description", 2000)

        assert first.value == 0
        assert not second.ok
        assert second.value == ErrorCode.CAUSE_ALREADY_EXISTS
        assert bound_core.snapshot() == snapshot

    def test_requires_authority(self, core, transfer):
        result = core.register_cause(DONOR, "Education Fund", "Support schools", 1000)
        assert result.value == ErrorCode.AUTHORITY_NOT_VERIFIED
        assert core.get_cause_count() == 0
        assert transfer.transfers == []

    def test_capacity(self, transfer, clock):
        core = DonationCore(transfer, clock, LedgerConfig(max_causes=2))
        core.set_authority_contract(AUTHORITY)
        core.register_cause(DONOR, "A", "desc", 1)
        core.register_cause(DONOR, "B", "desc", 1)

        result = core.register_cause(DONOR, "C", "desc", 1)

        assert result.value == ErrorCode.MAX_CAUSES_EXCEEDED
        assert core.get_cause_count() == 2

    def test_caller_checked_before_capacity(self, transfer, clock):
        core = DonationCore(transfer, clock, LedgerConfig(max_causes=0))
        core.set_authority_contract(AUTHORITY)

        result = core.register_cause("", "A", "desc", 1)

        assert result.value == ErrorCode.NOT_AUTHORIZED
        assert result.reason == "invalid_caller"
        assert transfer.transfers == []

    @pytest.mark.parametrize("title,description,target,code", [
        ("", "desc", 10, ErrorCode.INVALID_TITLE),
        ("x" * 101, "desc", 10, ErrorCode.INVALID_TITLE),
        ("Title", "", 10, ErrorCode.INVALID_DESCRIPTION),
        ("Title", "x" * 501, 10, ErrorCode.INVALID_DESCRIPTION),
        ("Title", "desc", 0, ErrorCode.INVALID_TARGET),
    ])
    def test_invalid_input(self, bound_core, title, description, target, code):
        result = bound_core.register_cause(DONOR, title, description, target)
        assert not result.ok
        assert result.value == code
        assert bound_core.get_cause_count() == 0

    def test_fee_transfer_failure_leaves_state(self, clock):
        transfer = InMemoryValueTransfer(balances={DONOR: 10})
        core = DonationCore(transfer, clock)
        core.set_authority_contract(AUTHORITY)
        before = core.snapshot()

        result = core.register_cause(DONOR, "Education Fund", "Support schools", 1000)

        assert not result.ok
        assert result.error_code == ErrorCode.TRANSFER_FAILED
        assert core.snapshot() == before
        assert core.get_cause_id_by_title("Education Fund") is None

    def test_custom_fee_charged(self, bound_core, transfer):
        bound_core.set_creation_fee(250)
        bound_core.register_cause(DONOR, "Education Fund", "Support schools", 1000)
        assert transfer.transfers[-1].amount == 250

    def test_title_index_round_trip(self, bound_core):
        titles = ["Education Fund", "Clean Water", "Shelter"]
        for title in titles:
            bound_core.register_cause(DONOR, title, "desc", 100)

        for title in titles:
            cause_id = bound_core.get_cause_id_by_title(title)
            assert bound_core.get_cause(cause_id).title == title
        for cause_id in range(bound_core.get_cause_count()):
            cause = bound_core.get_cause(cause_id)
            assert bound_core.get_cause_id_by_title(cause.title) == cause_id

    def test_invalid_caller(self, bound_core):
        result = bound_core.register_cause("", "Education Fund", "Support schools", 1000)
        assert result.value == ErrorCode.NOT_AUTHORIZED
        assert bound_core.get_cause_count() == 0


# =============================================================================
# DONATIONS
# =============================================================================


class TestRegisterDonation:
    def test_registers_donation(self, funded_core, transfer):
        result = funded_core.register_donation(DONOR, 0, 100)

        assert result.ok
        assert result.value == 1
        donation = funded_core.get_donation(1)
        assert donation.donor == DONOR
        assert donation.amount == 100
        assert donation.cause_id == 0
        assert funded_core.get_cause(0).collected == 100
        assert TransferRecord(amount=100, sender=DONOR, recipient=DONOR) in transfer.transfers

    def test_unknown_cause(self, bound_core):
        result = bound_core.register_donation(DONOR, 99, 100)
        assert not result.ok
        assert result.value == ErrorCode.CAUSE_NOT_FOUND

    @pytest.mark.parametrize("cause_id", [True, False, 1.0, "1"])
    def test_non_integer_cause_id(self, funded_core, transfer, cause_id):
        funded_core.register_cause(DONOR, "Clean Water", "Wells", 500)
        fees = list(transfer.transfers)

        result = funded_core.register_donation(DONOR, cause_id, 5)

        assert result.value == ErrorCode.CAUSE_NOT_FOUND
        assert funded_core.get_cause(0).collected == 0
        assert funded_core.get_cause(1).collected == 0
        assert funded_core.get_donation_count() == 0
        assert transfer.transfers == fees

    def test_lookup_with_bool_id(self, funded_core):
        funded_core.register_donation(DONOR, 0, 100)
        assert funded_core.get_cause(False) is None
        assert funded_core.get_donation(True) is None
        assert funded_core.get_cause_id_by_title(["Education Fund"]) is None

    @pytest.mark.parametrize("amount", [0, -5])
    def test_invalid_amount(self, funded_core, amount):
        result = funded_core.register_donation(DONOR, 0, amount)
        assert result.value == ErrorCode.INVALID_AMOUNT
        assert funded_core.get_donation_count() == 0

    def test_counts(self, funded_core):
        funded_core.register_donation(DONOR, 0, 100)
        funded_core.register_donation(DONOR, 0, 200)
        assert funded_core.get_donation_count() == 2
        assert funded_core.get_cause_count() == 1
        assert funded_core.get_cause(0).collected == 300

    def test_transfer_failure_leaves_state(self, funded_core, transfer):
        before = funded_core.snapshot()
        transfer.reject_all = True

        result = funded_core.register_donation(STRANGER, 0, 100)

        assert result.value == ErrorCode.TRANSFER_FAILED
        assert funded_core.snapshot() == before
        assert funded_core.get_donation_count() == 0

    def test_failed_calls_do_not_advance_counter(self, funded_core):
        funded_core.register_donation(DONOR, 0, 100)
        funded_core.register_donation(DONOR, 0, 0)
        funded_core.register_donation(DONOR, 7, 100)
        result = funded_core.register_donation(DONOR, 0, 50)
        assert result.value == 2
        assert funded_core.get_donation_count() == 2


# =============================================================================
# UPDATES
# =============================================================================


class TestUpdateDonation:
    def test_updates_donation(self, funded_core, clock):
        funded_core.register_donation(DONOR, 0, 100)
        clock.advance(3)

        result = funded_core.update_donation(DONOR, 1, 200)

        assert result.ok
        assert result.value is True
        donation = funded_core.get_donation(1)
        assert donation.amount == 200
        assert donation.timestamp == 3
        assert funded_core.get_cause(0).collected == 200

    def test_update_log_overwritten(self, funded_core, clock):
        funded_core.register_donation(DONOR, 0, 100)
        clock.advance()
        funded_core.update_donation(DONOR, 1, 200)
        clock.advance()
        funded_core.update_donation(DONOR, 1, 50)

        update = funded_core.get_donation_update(1)
        assert update.updated_amount == 50
        assert update.updated_timestamp == 2
        assert update.updater == DONOR
        assert len(funded_core.snapshot()["donation_updates"]) == 1
        assert funded_core.get_cause(0).collected == 50

    def test_update_does_not_transfer(self, funded_core, transfer):
        funded_core.register_donation(DONOR, 0, 100)
        transfers_before = list(transfer.transfers)
        funded_core.update_donation(DONOR, 1, 500)
        assert transfer.transfers == transfers_before

    def test_non_donor_rejected(self, funded_core):
        funded_core.register_donation(DONOR, 0, 100)
        before = funded_core.snapshot()

        result = funded_core.update_donation(STRANGER, 1, 200)

        assert not result.ok
        assert result.value is False
        assert result.error_code == ErrorCode.NOT_AUTHORIZED
        assert funded_core.snapshot() == before
        assert funded_core.get_donation_update(1) is None

    @pytest.mark.parametrize("donation_id,amount,code", [
        (1, 0, ErrorCode.INVALID_AMOUNT),
        (99, 100, ErrorCode.DONATION_NOT_FOUND),
        (True, 100, ErrorCode.DONATION_NOT_FOUND),
    ])
    def test_rejections(self, funded_core, donation_id, amount, code):
        funded_core.register_donation(DONOR, 0, 100)
        result = funded_core.update_donation(DONOR, donation_id, amount)
        assert result.value is False
        assert result.error_code == code

    def test_update_does_not_change_counter(self, funded_core):
        funded_core.register_donation(DONOR, 0, 100)
        funded_core.update_donation(DONOR, 1, 300)
        assert funded_core.get_donation_count() == 1

    def test_invalid_caller(self, funded_core):
        funded_core.register_donation(DONOR, 0, 100)
        result = funded_core.update_donation("", 1, 300)
        assert result.value is False
        assert result.error_code == ErrorCode.NOT_AUTHORIZED


# =============================================================================
# UPDATE LOG
# =============================================================================


class TestDonationUpdateLog:
    def test_record_overwrites(self):
        log = DonationUpdateLog(LedgerState.from_config(LedgerConfig()))
        assert len(log) == 0
        assert 1 not in log

        log.record(1, DonationUpdate(updated_amount=200, updated_timestamp=1, updater=DONOR))
        log.record(1, DonationUpdate(updated_amount=50, updated_timestamp=2, updater=DONOR))

        assert len(log) == 1
        assert 1 in log
        assert log.get(1).updated_amount == 50

    def test_bool_and_unhashable_keys(self):
        log = DonationUpdateLog(LedgerState.from_config(LedgerConfig()))
        log.record(1, DonationUpdate(updated_amount=200, updated_timestamp=1, updater=DONOR))
        assert True not in log
        assert [1] not in log
        assert log.get(True) is None


# =============================================================================
# AUTHORITY VIA FACADE
# =============================================================================


class TestAuthority:
    def test_set_twice(self, core):
        assert core.set_authority_contract(AUTHORITY).value is True
        second = core.set_authority_contract(STRANGER)
        assert second.value is False
        assert core.get_authority_contract() == AUTHORITY

    def test_fee(self, core):
        assert core.set_creation_fee(2000).value is False
        assert core.get_creation_fee() == 1000
        core.set_authority_contract(AUTHORITY)
        assert core.set_creation_fee(2000).value is True
        assert core.get_creation_fee() == 2000

    @pytest.mark.parametrize("fee", [1.5, None])
    def test_non_integer_fee_keeps_core_usable(self, bound_core, transfer, fee):
        result = bound_core.set_creation_fee(fee)

        assert result.value is False
        assert result.reason == "invalid_fee"
        assert bound_core.get_creation_fee() == 1000
        assert bound_core.register_cause(DONOR, "Education Fund", "Support schools", 1000).ok
        assert transfer.transfers[-1].amount == 1000
        assert bound_core.snapshot()["counters"]["creation_fee"] == 1000

    def test_components_not_public(self, core):
        for name in ("authority_gate", "cause_registry", "donation_ledger"):
            assert not hasattr(core, name)

    def test_reset(self, funded_core):
        funded_core.register_donation(DONOR, 0, 100)
        funded_core.reset()
        assert funded_core.get_cause_count() == 0
        assert funded_core.get_donation_count() == 0
        assert funded_core.get_authority_contract() is None
        assert funded_core.get_cause(0) is None
        assert funded_core.get_creation_fee() == 1000
        assert funded_core.get_max_causes() == 1000


# =============================================================================
# PROPERTIES / END-TO-END
# =============================================================================


class TestInvariants:
    def test_end_to_end(self, core, clock):
        assert core.set_authority_contract(AUTHORITY).ok
        assert core.register_cause(DONOR, "Education Fund", "Support schools", 1000).value == 0

        clock.advance()
        donation = core.register_donation(DONOR, 0, 100)
        assert donation.value == 1
        assert core.get_cause(0).collected == 100

        clock.advance()
        assert core.update_donation(DONOR, 1, 200).value is True
        assert core.get_cause(0).collected == 200
        update = core.get_donation_update(1)
        assert update.updater == DONOR
        assert update.updated_amount == 200
        assert update.updated_timestamp == 2

    def test_collected_matches_donations_under_random_sequence(self, bound_core, clock):
        rng = random.Random(1337)
        donors = [DONOR, STRANGER, "ST4DONOR"]
        for i in range(4):
            bound_core.register_cause(DONOR, f"Cause {i}", "desc", 1000)

        expected_count = 0
        for _ in range(300):
            clock.advance()
            caller = rng.choice(donors)
            if rng.random() < 0.6 or bound_core.get_donation_count() == 0:
                result = bound_core.register_donation(caller, rng.randrange(6), rng.randrange(-2, 50))
                if result.ok:
                    expected_count += 1
                    assert result.value == expected_count
            else:
                donation_id = rng.randrange(1, bound_core.get_donation_count() + 2)
                bound_core.update_donation(caller, donation_id, rng.randrange(-2, 80))
            assert bound_core.get_donation_count() == expected_count
            assert_collected_consistent(bound_core)

    def test_concurrent_donations(self, funded_core):
        def donate():
            for _ in range(50):
                funded_core.register_donation(DONOR, 0, 1)

        threads = [threading.Thread(target=donate) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert funded_core.get_donation_count() == 400
        assert funded_core.get_cause(0).collected == 400
        ids = sorted(funded_core.get_donation(i).id for i in range(1, 401))
        assert ids == list(range(1, 401))

    def test_snapshot_is_detached(self, funded_core):
        snapshot = funded_core.snapshot()
        funded_core.register_donation(DONOR, 0, 5)
        assert snapshot["causes"][0]["collected"] == 0
        assert funded_core.get_cause(0).collected == 5

        snapshot["causes"][0]["collected"] = 999
        assert funded_core.get_cause(0).collected == 5
