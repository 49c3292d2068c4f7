"""HTTP dashboard for the Fleet Complete Hub API.

- ``app``: FastAPI application factory and uvicorn entry point
- ``routes``: authentication, data, debug, and health routes
- ``deps``: request dependencies resolving the shared session
"""
