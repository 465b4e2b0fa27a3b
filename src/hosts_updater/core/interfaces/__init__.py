"""Core abstractions.

Contracts (Protocol) implemented by concrete adapters, so the update
pipeline depends on abstractions and can be driven by fakes in tests.
"""
