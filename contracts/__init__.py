"""
contracts — Python contracts for the ledger VM.

- ``contracts.templates.ledger``  fungible-token ledger cloned by the factory
- ``contracts.templates.factory`` clone factory with fee collection
- ``contracts.examples.token``    standalone fee token
- ``contracts.stdlib``            shared contract building blocks
- ``contracts.interfaces``        named interface surfaces
"""
