"""Infrastructure Layer — database, logging and external-collaborator adapters.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Each adapter implements a Protocol from core/repository_protocols.py
"""
