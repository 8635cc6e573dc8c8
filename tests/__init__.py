"""Test suite for Beacon.

Test structure follows the test pyramid:
- unit/: Unit tests - domain logic and handlers in isolation
- integration/: Store tests - fakeredis (with Lua) and PostgreSQL
- api/: API endpoint tests - HTTP layer through the FastAPI app
"""
