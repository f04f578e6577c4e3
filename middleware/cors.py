"""
Open CORS middleware.

The service is called directly from browsers on arbitrary origins, so every
response, including errors and preflight answers, carries
``Access-Control-Allow-Origin: *``.
"""

from fastapi import Request

ALLOW_ORIGIN = "*"
CORS_HEADERS = {"Access-Control-Allow-Origin": ALLOW_ORIGIN}


async def allow_all_origins(request: Request, call_next):
    """Stamp the wildcard Access-Control-Allow-Origin header on the response."""
    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response
