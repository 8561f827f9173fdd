"""
Infrastructure Layer

Adapters for Discord, Google Docs, the local file store and the uptime server.
"""
