# Services package init
"""
Contactbook API — Services Layer
==================================

Service Inventory:
    - ContactService: body decoding, id parsing, and the list / create /
      get-by-id operations over an injected ContactStore
"""
