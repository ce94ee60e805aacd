"""
Flashdeck Backend — Application Package
=========================================

What: REST backend for a flashcard application (users, card sets, cards).
How:  Layered the same way throughout:

    ┌─────────────────────────────────────┐
    │     Routes (resource controllers)   │  ← verb + path → operation
    ├─────────────────────────────────────┤
    │   Services (storage, update-diff)   │  ← persistence contract, merges
    ├─────────────────────────────────────┤
    │   Models & Schemas (entities, JSON) │  ← SQLAlchemy ORM + Pydantic codecs
    ├─────────────────────────────────────┤
    │        Database (sessions)          │  ← Async SQLAlchemy
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
