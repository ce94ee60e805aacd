"""
Flashdeck Backend — JSON Codecs & API Schemas
===============================================

What:  Pydantic models describing the JSON contract, and the per-entity
       decode/encode functions built on them.
How:   decode_* validates a raw request body and builds a transient entity;
       encode_* dumps an entity (and, for card sets, its cards) to a
       JSON-ready dict. Field names always match the model's `Keys`.
"""
