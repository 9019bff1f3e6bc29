"""
Service layer.

Each service encapsulates business logic for a domain and is called
by the API handlers.  The pure rules (invite codes, membership
transitions, the access gate) live in their own modules so that they
can be tested without a database; ``event_store`` and ``mutations``
own persistence and optimistic concurrency.
"""
