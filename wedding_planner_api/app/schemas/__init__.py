"""
Pydantic schema definitions for API payloads.

Each domain (users, events, guests, expenses, vendors, seating)
defines its own Pydantic models for request bodies and for the parts
of the event document.  ``common`` holds the response envelope.
"""
