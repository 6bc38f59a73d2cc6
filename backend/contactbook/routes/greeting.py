"""
Contactbook API — Root Greeting Route
=======================================

What:  "/" answers the plain-text body "hello!".

A plain Starlette Route registered without a method list: every method on
"/" (HEAD, TRACE and non-standard ones included) gets the greeting, so "/"
never produces a method-not-allowed response.
"""

from starlette.requests import Request
from starlette.responses import PlainTextResponse
from starlette.routing import Route

GREETING = "hello!"


async def greeting(request: Request) -> PlainTextResponse:
    return PlainTextResponse(GREETING)


route = Route("/", endpoint=greeting, methods=None, name="greeting", include_in_schema=False)
