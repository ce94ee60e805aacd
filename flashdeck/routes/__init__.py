"""
Flashdeck Backend — API Routes Package
========================================

Route Inventory:
    - resource.py:   generic seven-operation contract and mount_resource()
    - cards.py:      /cards      (full CRUD)
    - card_sets.py:  /cardsets   (full CRUD, cards embedded)
    - users.py:      /users      (index + show)
    - health.py:     /health
"""
