"""Authentication and authorization.

Learn: Users log in with email/password and receive a JWT bearer
token. Every journal route runs the access guard in dependencies.py,
which verifies that token and exposes the caller's Claims for
owner-scoped queries. There are no roles: a user can touch exactly
their own entries.
"""
