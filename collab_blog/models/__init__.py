"""
Models for django-collab-blog.

All models are importable from collab_blog.models:

    from collab_blog.models import Post, Category, Comment, Task, Activity, UserAccess
"""
from .access import UserAccess
from .activity import Activity, activity_of, latest_activity, record, recorded
from .posts import Category, Post, PostMember
from .comments import Comment
from .tasks import Task

__all__ = [
    # Access
    "UserAccess",
    # Activity
    "Activity",
    "activity_of",
    "latest_activity",
    "record",
    "recorded",
    # Posts
    "Category",
    "Post",
    "PostMember",
    # Comments
    "Comment",
    # Tasks
    "Task",
]
