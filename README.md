# wasmcontracts

Three example smart contracts and a small in-memory runtime to drive them.
Everything is plain Python, with no third-party dependencies.

Each contract is a module of functions such as `instantiate`, `execute`,
`query` and `reply`. Every one of them takes a `Deps` (storage, api and
querier), an `Env` and, where it applies, a `MessageInfo` and a message
object. They return a `Response` (or an IBC response), and `query`
returns JSON bytes. Errors are raised as exceptions.

## Contracts

### `wasmcontracts.queue`

A FIFO queue of integers. Each item is stored under a 4-byte big-endian key.

- Execute messages (`queue.msg`): `Enqueue(value)` and `Dequeue()`. The
  response to `Dequeue` carries the removed item's JSON in `data`.
- Query messages: `Count()`, `Sum()`, `Reducer()`, `List()` and
  `OpenIterators(count)`.
- Functions: `query_count`, `query_sum`, `query_reducer`, `query_list` and
  `query_open_iterators` return the response objects directly.
- `migrate` clears the queue and enqueues 100, 101 and 102.

### `wasmcontracts.reflect`

Re-emits messages sent by its owner.

- `ReflectMsg(msgs)` and `ReflectSubMsg(msgs)` send the given messages.
- `ChangeOwner(owner)` transfers ownership. The new address goes through
  `MockApi.addr_validate`.
- A sender other than the owner gets `NotCurrentOwnerError`. An empty
  message list gets `MessagesEmptyError`. Both are in `reflect.errors`.
- `reply` stores a `Reply` by id, and `SubMsgResultQuery(id)` reads it back.
- `Owner()` returns the current owner.
- `Capitalized(text)` asks the custom querier to upper-case `text`.
- `Chain(request)` forwards a query request and returns the raw answer.
- `Raw(contract, key)` reads another contract's storage.
- `reflect.testing.mock_dependencies_with_custom_querier` builds
  dependencies whose querier answers `PingQuery` and `CapitalizedQuery`.
  The answering function is `custom_query_execute`.

### `wasmcontracts.ibc_reflect`

An IBC application with one reflect account per channel.

- `ibc_channel_open` accepts only ordered channels. If a counterparty
  version is given, it must be `ibc-reflect-v1`.
- `ibc_channel_connect` emits a `WasmInstantiate` sub-message and waits
  for the reply. `reply` then registers the new contract address, which it
  reads from the `instantiate` event's `_contract_address` attribute.
- `ibc_packet_receive` handles `Dispatch`, `WhoAmI` and `Balances`
  packets. Any error becomes an error acknowledgement and is never raised.
  `ibc_reflect.msg.decode_ack` reads acknowledgements back.
- `ibc_channel_close` forgets the channel's account. If that account holds
  funds, it also sends a message that moves them to this contract.
- Queries: `AccountQuery(channel_id)` and `ListAccounts()`.

## Runtime: `wasmcontracts.std`

- `storage`:
  - `MemoryStorage` is a byte-ordered key-value store with `range`.
  - `Singleton` and `Bucket` are typed views with `save`, `load`,
    `may_load`, `remove` and `update`. `Bucket` also has `range`.
  - Also here: `Codec`, `Order`, and `to_binary` / `from_binary` for
    compact JSON.
  - Exceptions: `StdError`, `NotFoundError` and `ParseError`.
- `types`:
  - Messages: `BankSend`, `StakingDelegate`, `WasmInstantiate`,
    `WasmExecute` and `CustomMsg`, with `msg_to_json` / `msg_from_json`.
  - Sub-messages and replies: `SubMsg` (with `ReplyOn`), `Reply`,
    `SubMsgResponse` and `SubMsgError`.
  - Responses: `Response`, `IbcBasicResponse` and `IbcReceiveResponse`.
  - Other types: `Event`, `Attribute`, `Coin`, `Env` and `MessageInfo`.
  - Helpers: `coin`, `coins`, `attr` and `wasm_execute`.
- `mock`:
  - `MockApi`, `MockQuerier` and `Deps`.
  - Builders: `mock_dependencies`, `mock_env` and `mock_info`.
  - Query errors: `SystemQueryError` and `ContractQueryError`.
- `ibc`:
  - Channel and packet messages, and `IbcOrder`.
  - Test builders: `mock_ibc_channel_open_init`,
    `mock_ibc_channel_open_try`, `mock_ibc_channel_connect_ack`,
    `mock_ibc_channel_close_init`, `mock_ibc_packet_recv` and
    `mock_wasmd_attr`.

## Example

```python
from wasmcontracts.queue import contract
from wasmcontracts.queue.msg import Enqueue, InstantiateMsg
from wasmcontracts.std.mock import mock_dependencies, mock_env, mock_info

deps = mock_dependencies([])
info = mock_info("creator", [])
contract.instantiate(deps, mock_env(), info, InstantiateMsg())
contract.execute(deps, mock_env(), info, Enqueue(value=25))
contract.execute(deps, mock_env(), info, Enqueue(value=17))

print(contract.query_count(deps))   # CountResponse(count=2)
print(contract.query_sum(deps))     # SumResponse(sum=42)
```

```python
from wasmcontracts.reflect import contract
from wasmcontracts.reflect.msg import Capitalized, InstantiateMsg
from wasmcontracts.reflect.testing import mock_dependencies_with_custom_querier
from wasmcontracts.std.mock import mock_env, mock_info
from wasmcontracts.std.storage import from_binary

deps = mock_dependencies_with_custom_querier([])
contract.instantiate(deps, mock_env(), mock_info("creator", []), InstantiateMsg())
answer = contract.query(deps, mock_env(), Capitalized(text="demo one"))
print(from_binary(answer))          # {'text': 'DEMO ONE'}
```

## What it does not do

- Contracts run as ordinary Python function calls against the in-memory
  mocks. Nothing is compiled, and nothing talks to a real chain or network.
- Sub-messages that a contract emits are returned, not executed.
  Replies have to be built and passed to `reply` by hand.
- Storage lives only in memory.
- `MockQuerier` answers bank queries (`all_balances`, `balance`, `supply`)
  and custom queries. It knows no other contracts, so every wasm query,
  including the reflect contract's `Raw`, raises `SystemQueryError`.
- There is no command-line tool.

## Running the tests

```
pip install -e ".[test]"
pytest
```