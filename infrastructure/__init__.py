"""
Infrastructure Package
======================

Wiring between the API layer and the domain services.

Modules:
    - container: lazily built, cached service instances shared by the views
"""
