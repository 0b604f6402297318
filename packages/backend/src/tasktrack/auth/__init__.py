"""Authentication and authorization.

Users log in with email/password; the server creates a session row and
hands the client an opaque cookie. Every protected request resolves that
cookie back to a CurrentUser, which services use for ownership scoping.
"""
