"""Command interpreter components.

Provides:
- the pure `/run-tests` grammar and event policy
- a service that reports rejections via an injected comment poster
- step output sinks and a small CLI surface
"""
