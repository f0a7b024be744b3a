"""Request-scoped plumbing shared by every route.

Request IDs and access logs via structlog contextvars, the correlation id gate
for the user routes, and the crash isolation boundary around the router.
"""
