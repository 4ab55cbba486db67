"""
Configuration settings for django-collab-blog.

Override these in your Django settings.py:

    COLLAB_BLOG = {
        'POSTS_PER_PAGE': 20,
        'RECORD_UNCHANGED_UPDATES': True,
        ...
    }
"""
from django.conf import settings

DEFAULTS = {
    # Posts
    "POSTS_PER_PAGE": 10,
    "MINI_BODY_LENGTH": 250,
    "IMAGE_UPLOAD_PATH": "blog/images/%Y/%m/",

    # Only users holding ADD_POSTS may create posts when enabled
    "REQUIRE_ADD_POSTS_PERMISSION": False,

    # Comments
    "COMMENT_MAX_LENGTH": 5000,

    # Activity
    "ACTIVITY_FEED_LENGTH": 20,
    # Record "update_post" even when an edit leaves every field as it was
    "RECORD_UNCHANGED_UPDATES": False,

    # SEO
    "SLUG_MAX_LENGTH": 100,
}


class CollabBlogSettings:
    """
    Lazy settings object that reads from Django settings.

    Access via: from collab_blog.conf import collab_settings
    """

    def __getattr__(self, name):
        if name not in DEFAULTS:
            raise AttributeError(f"Invalid collab_blog setting: {name}")

        user_settings = getattr(settings, "COLLAB_BLOG", {})
        return user_settings.get(name, DEFAULTS[name])


collab_settings = CollabBlogSettings()
