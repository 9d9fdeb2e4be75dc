"""
MedMall Back Office API
=======================

Administrative REST backend for the MedMall store: catalog, order items,
payments, refunds, shipments with tracking, carriers, user delivery
addresses and the permission type dictionary.

Layers:
    routes/     HTTP only: parse, authorize, delegate, respond
    services/   queries and write rules per resource
    models/     SQLAlchemy tables
    schemas/    pydantic request/response contracts (camelCase JSON)
    security/   bearer token principal and permission gate
"""

__version__ = "1.0.0"
