"""Helper utilities shared across the relay.

- env: typed environment variable parsing for config modules
- network: client address resolution behind trusted proxies
- prompt: system prompt loading
- tasks: asyncio task cancellation
"""
