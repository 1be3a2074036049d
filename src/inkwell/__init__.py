"""Inkwell: blogging platform backend.

Registration and login with cookie-carried session tokens, public post
reads, author-only post editing, and profile management.
"""

__version__ = "0.1.0"
