import dataclasses

import pytest

from sygma_relay.substrate.events import (
    DEPOSIT_EVENT,
    PARACHAIN_UPDATED_EVENT,
    RETRY_EVENT,
    DecodedField,
    Deposit,
    Event,
    Message,
    Proposal,
    TransferMessageData,
    TransferProposalData,
    TransferType,
)


@pytest.mark.parametrize(
    "event_name, expected",
    [
        (DEPOSIT_EVENT, "SygmaBridge.Deposit"),
        (RETRY_EVENT, "SygmaBridge.Retry"),
        (PARACHAIN_UPDATED_EVENT, "ParachainSystem.ValidationFunctionApplied"),
    ],
)
def test_events_carry_pallet_names(event_name, expected):
    event = Event(event_name)
    assert event.name == expected
    assert len(event.fields) == 0


def test_transfer_type_round_trips_through_its_value():
    value = TransferType.FUNGIBLE_TRANSFER.value
    assert TransferType(value) is TransferType.FUNGIBLE_TRANSFER
    assert str(TransferType.FUNGIBLE_TRANSFER) == value


def test_deposit_defaults_are_zeroed():
    deposit = Deposit()
    assert len(deposit.resource_id) == 32
    assert set(deposit.resource_id) == {0}
    assert len(deposit.handler) == 1
    assert deposit.call_data == b""


def test_event_fields_are_not_shared():
    first = Event("a")
    second = Event("b")
    first.fields.append(DecodedField("x", 1))
    assert len(second.fields) == 0
    assert len(first.fields) == 1


def test_decoded_field_is_immutable():
    field_ = DecodedField("dest_domain_id", 2)
    with pytest.raises(dataclasses.FrozenInstanceError):
        field_.value = 3  # type: ignore[misc]
    assert field_.value == 2
    assert field_.name == "dest_domain_id"


def test_message_equality_depends_on_data():
    assert Message(data=TransferMessageData(deposit_nonce=2)) == Message(
        data=TransferMessageData(deposit_nonce=2)
    )
    assert Message(data=TransferMessageData(deposit_nonce=2)) != Message(
        data=TransferMessageData(deposit_nonce=3)
    )


def test_proposal_holds_given_values():
    data = TransferProposalData(deposit_nonce=7, data=b"\x01\x02")
    proposal = Proposal(source=1, destination=2, data=data, message_id="m")
    assert proposal.data.deposit_nonce == 7
    assert proposal.data.data == b"\x01\x02"
    assert (proposal.source, proposal.destination, proposal.message_id) == (1, 2, "m")