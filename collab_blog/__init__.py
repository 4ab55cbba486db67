"""
django-collab-blog - A collaborative Django blog app.

Features:
- Posts with invited members who can edit alongside the owner
- Tiered bitmask permissions with admin-only delegation
- Append-only activity feed for posts and comments
- Categories and threaded comments
"""

__version__ = "0.1.0"
__author__ = "Nestor Wheelock"
