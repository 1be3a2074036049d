"""Authentication and authorization.

Learn: Users log in with email/password and receive a signed JWT in an
HTTP-only `token` cookie. Every request that needs an identity goes
through the single Auth Guard in dependencies.py; post mutations then
pass through the Ownership Policy in ownership.py.
"""
