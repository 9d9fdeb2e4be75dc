"""
MedMall Back Office - Middleware Package
=========================================

Execution order for an incoming request:
    RateLimit -> RequestID -> Logging -> GZip -> CORS -> route

Responses travel the chain in reverse, so the access log sees the final
status and the request id header is set on every response that passes
RequestID.
"""
