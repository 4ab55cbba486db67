"""
Shared fixtures for django-collab-blog tests.
"""
import pytest
from django.contrib.auth import get_user_model

from collab_blog.models import Post, UserAccess
from collab_blog.permissions import FULL_MASK

User = get_user_model()


@pytest.fixture
def set_mask(db):
    """Return a helper that stores a raw mask for a user."""

    def _set_mask(user, mask):
        access, _ = UserAccess.objects.update_or_create(user=user, defaults={"mask": mask})
        user.collab_access = access
        return user

    return _set_mask


@pytest.fixture
def make_user(db):
    """Return a factory for registered users."""

    def _make_user(username, **kwargs):
        kwargs.setdefault("email", f"{username}@example.com")
        kwargs.setdefault("password", "testpass123")
        return User.objects.create_user(username=username, **kwargs)

    return _make_user


@pytest.fixture
def user(make_user):
    """Create the post owner."""
    return make_user("testuser")


@pytest.fixture
def other_user(make_user):
    """Create a user with no permissions."""
    return make_user("other")


@pytest.fixture
def site_admin(make_user, set_mask):
    """Create a user holding every capability."""
    return set_mask(make_user("siteadmin"), FULL_MASK)


@pytest.fixture
def moderator(make_user, set_mask):
    """Create a user holding ADD_POSTS and DELETE_POSTS."""
    return set_mask(make_user("moderator"), 3)


@pytest.fixture
def post(user):
    """Create a post through the recording path."""
    return Post.create_for(user, title="Test Post", body="This is a test post body.")
