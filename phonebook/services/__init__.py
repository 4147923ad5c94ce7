"""Services Layer - message handlers and the Mediator that routes to them.

Invariants:
    - One handler class per message type, split into commands and queries
    - Mediator uses an explicit dict mapping (no auto-discovery)
"""
