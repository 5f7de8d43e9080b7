"""Core interfaces/abstractions.

Why:
- Defines contracts (Protocol) that concrete adapters implement.
- The aggregator depends on the contract, never on httpx.
"""
