"""
Flashdeck Backend — Services Layer
====================================

Service Inventory:
    - StorageBackend (abstract): persistence contract keyed by model and id
    - SQLAlchemyStorage: implementation over the request's AsyncSession
    - apply_updates / UpdatableKey: partial-update (merge) engine
"""
