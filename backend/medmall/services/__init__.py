"""
MedMall Back Office - Services Layer
=====================================

Each resource has a `ResourceService` subclass (see base.py) and a module
level singleton used by the routes:

    catalog_service          product categories, product specs
    order_service            order items, payments, refunds
    shipping_service         carriers, shipments, tracking events
    address_service          user delivery addresses
    permission_type_service  permission type dictionary and its seed data

Services flush but never commit; the request's session dependency owns the
transaction.
"""
