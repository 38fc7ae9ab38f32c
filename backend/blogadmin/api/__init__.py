"""HTTP API: routers, request/response schemas and error handlers."""
