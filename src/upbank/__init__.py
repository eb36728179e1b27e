"""
Up Bank API client.

A typed, synchronous client for the Up banking REST API: accounts,
transactions, categories, tags and webhooks, with JSON:API envelopes decoded
into dataclasses and API errors returned as values rather than raised.
"""

__version__ = "0.1.0"
