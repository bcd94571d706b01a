"""
Pydantic schema definitions for stored data and API payloads.
"""
