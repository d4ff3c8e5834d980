"""
Commands for the nodecall CLI.

- call:    raw JSON-RPC call
- query:   block-number, chain-id, gas-price, balance, nonce
- receipt: transaction receipt lookup and polling
"""
