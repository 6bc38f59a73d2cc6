# Routes package init
"""
Contactbook API — API Routes Package
======================================

Route Inventory:
    - greeting.py:  ANY  /                 (plain-text greeting)
    - contacts.py:  GET  /contacts         (list every contact)
                    POST /contacts         (append a contact)
                    GET  /contacts/{id}    (first contact with that id)

Routes stay thin: read the request, call ContactService, encode the result.
"""
