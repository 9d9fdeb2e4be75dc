"""
MedMall Back Office - API Routes Package
=========================================

One module per resource, each exposing a `router`:

    order_items.py          /api/orderitems
    payments.py             /api/payments
    permission_types.py     /api/permissiontypedictionaries
    product_categories.py   /api/productcategories
    product_specs.py        /api/productspecs
    refunds.py              /api/refunds
    shipments.py            /api/shipments
    shipment_tracks.py      /api/shipmenttracks
    ship_companies.py       /api/shipcompanies
    user_addresses.py       /api/useraddresses
    health.py               /health

Handlers stay thin: parse the request, call the matching service, return the
entity. Authorization is declared per route as a dependency.
"""
