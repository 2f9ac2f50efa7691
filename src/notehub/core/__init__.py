"""Core services and cross-cutting concerns.

Subpackages are imported directly (`notehub.core.errors`,
`notehub.core.auth`, ...); configuration depends on them.
"""
