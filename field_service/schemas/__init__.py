"""
Pydantic schema definitions for the core's records and results.

Each domain (clients, service orders) defines its own models for form
payloads and stored records.  Records serialize to the camelCase
shapes the presentation layer works with (``model_dump(by_alias=True)``)
while Python code uses snake_case attribute names.
"""
