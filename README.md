# sygma_relay

Building blocks for a cross-chain relayer. The package has the message
types exchanged between peers and a JSON encoding for them. It also keeps
track of per-session subscriptions and streams, and it frames messages on
byte streams with newlines. On the Substrate side it turns bridge deposit
and retry events into transfer messages, and transfer messages into
proposals.

It has no dependencies beyond the standard library.

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Contents

### `sygma_relay.chains_util`

- `calculate_starting_block(start_block, block_confirmations)` rounds
  `start_block` down to a multiple of `block_confirmations`. It raises
  `ValueError` if either argument is `None`.

### `sygma_relay.comm.messages`

- `MessageType` is an `IntEnum` that runs from `TSS_KEY_GEN_MSG` (0) to
  `UNKNOWN` (13). `str()` gives names such as `"CoordinatorPingMsg"`, and
  gives `"UnknownMsg"` for `UNKNOWN`.
- `WrappedMessage` is a dataclass with `message_type`, `session_id`,
  `payload` and `from_peer`.
- `marshal_wrapped_message(msg)` and `unmarshal_wrapped_message(data)`
  convert a message to and from compact JSON. The keys are `message_type`,
  `message_id` and `payload`, and the payload is base64 encoded.
  `from_peer` is never encoded. A message type that is not known decodes
  to `UNKNOWN`. A malformed document raises `ValueError`.
- `Communication` is an abstract interface with `close_session`,
  `broadcast`, `subscribe` and `unsubscribe`.
- `CommunicationError(peer, err)` is raised when a message cannot be
  delivered to a peer.

### `sygma_relay.comm.subscription_id`

- `new_subscription_id(session_id, msg_type)` returns a unique
  `SubscriptionID` of the form `session-msgtype-identifier`.
- `SubscriptionID.unwrap()` returns `(session_id, message_type, identifier)`.
  It raises `ValueError` when the id is malformed or the message type is out
  of range. `session_id()`, `message_type()` and `subscription_identifier()`
  return `""` or `MessageType.UNKNOWN` instead of raising.

### `sygma_relay.comm.health`

- `execute_comm_health_check(communication, peers)` broadcasts an empty
  `UNKNOWN` message to each peer, one peer at a time, in the session
  `"health-session"`. It closes that session at the end and returns the
  list of `CommunicationError`s it caught.

### `sygma_relay.comm.p2p`

- `subscription.SessionSubscriptionManager` has the methods
  `subscribe_to`, `get_subscribers` and `unsubscribe_from`. Subscriptions
  are keyed by session and message type, and the manager is thread-safe.
- `manager.StreamManager` has `add_stream`, which keeps the first stream
  for a session and peer. `stream` raises `LookupError` when there is no
  stream. `release_streams` closes and forgets every stream of a session.
- `stream.read_stream(reader)` reads one newline-terminated message and
  raises `EOFError` at the end of the stream. `stream.write_stream(msg, writer)`
  writes the message with a newline and then flushes.

### `sygma_relay.substrate`

- `events` holds the event-name constants (`DEPOSIT_EVENT`, `RETRY_EVENT`,
  `PARACHAIN_UPDATED_EVENT`, …). It also defines the dataclasses
  `DecodedField`, `Event`, `Deposit`, `Retry`, `TransferMessageData`,
  `Message`, `TransferProposalData` and `Proposal`, and the enum
  `TransferType`.
- `listener.decode.decode_deposit_event(fields)` and
  `decode_retry_event(fields)` check each field's integer range or byte
  length. They raise `DecodeError` when a value has the wrong shape.
- `listener.deposit_handler.SubstrateDepositHandler` sends a deposit to the
  handler registered with `register_deposit_handler`.
  `fungible_transfer_handler` parses calldata into a message whose payload is
  `[amount, recipient]`. It needs at least 84 bytes of calldata.
- `listener.event_handlers` holds the abstract `Connection` and three
  handlers:
  - `SystemUpdateEventHandler` reloads metadata when the runtime is upgraded.
  - `FungibleTransferEventHandler` puts deposit messages on a `queue.Queue`,
    batched by destination domain.
  - `RetryEventHandler` re-reads the deposits of a finalized block that a
    retry event names, and queues them the same way.
- `executor.message_handler.SubstrateMessageHandler.handle_message` builds a
  `Proposal` from a fungible transfer message. The proposal data is the
  amount left-padded to 32 bytes, then the recipient length as 32 bytes,
  then the recipient.

## Example

```python
import queue

from sygma_relay.chains_util import calculate_starting_block
from sygma_relay.comm.messages import MessageType
from sygma_relay.comm.subscription_id import new_subscription_id
from sygma_relay.substrate.events import TransferType
from sygma_relay.substrate.executor.message_handler import SubstrateMessageHandler
from sygma_relay.substrate.listener.deposit_handler import (
    SubstrateDepositHandler,
    fungible_transfer_handler,
)

calculate_starting_block(104, 5)  # 100

sub_id = new_subscription_id("1", MessageType.COORDINATOR_PING_MSG)
session, msg_type, identifier = sub_id.unwrap()

recipient = bytes(36)
calldata = (2).to_bytes(32, "big") + len(recipient).to_bytes(32, "big") + recipient

handler = SubstrateDepositHandler()
handler.register_deposit_handler(TransferType.FUNGIBLE_TRANSFER, fungible_transfer_handler)
message = handler.handle_deposit(1, 2, 1, bytes(32), calldata, 0, "1-2-0-1")

proposal = SubstrateMessageHandler().handle_message(message)
```

## What this package does not do

- It has no network transport. `Communication` and `Connection` are
  abstract, so you must supply a peer-to-peer implementation and a Substrate
  node client yourself.
- It does not elect a coordinator, sign anything, or submit proposals to a
  chain.
- It provides no command-line program and no persistent storage.