"""
Service layer.

Each service groups the business rules of one concern as classmethods
over plain records and collections.  None of them keeps state except
``IdentifierGenerator``, which owns the registries of issued ids.
"""
