"""
Tiered bitmask permissions for django-collab-blog.

Every user holds a single integer mask built from the capability flags below.
Capabilities form a strict ladder: delegating a tier grants every tier under it
and strips every tier above it.

    from collab_blog.permissions import Capability, can_do, delegate

    if can_do(request.user, Capability.DELETE_POSTS):
        ...
"""
import enum
import logging

from django.core.exceptions import ObjectDoesNotExist, PermissionDenied
from django.db import models, transaction

from .conf import collab_settings

logger = logging.getLogger(__name__)


class Capability(enum.IntFlag):
    """Capability bits that compose into a permission mask."""

    ADD_POSTS = 1
    DELETE_POSTS = 2
    ADD_CATEGORIES = 4
    EDIT_CATEGORIES = 8
    EDIT_USER_ACCESS = 16


# Lowest tier first
TIERS = (
    Capability.ADD_POSTS,
    Capability.DELETE_POSTS,
    Capability.ADD_CATEGORIES,
    Capability.EDIT_CATEGORIES,
    Capability.EDIT_USER_ACCESS,
)

FULL_MASK = sum(TIERS)


class Role(models.TextChoices):
    """Display label derived from a mask, highest capability wins."""

    ADMIN = "admin", "Admin"
    SUPER = "super", "Super"
    VISOR = "visor", "Visor"
    NORMAL = "normal", "Normal"


# Checked top-down by classify()
ROLE_LADDER = (
    (Capability.EDIT_USER_ACCESS, Role.ADMIN),
    (Capability.EDIT_CATEGORIES, Role.SUPER),
    (Capability.ADD_CATEGORIES, Role.VISOR),
)


def get_mask(user):
    """Return the permission mask of a user, 0 when none was ever granted."""
    if user is None or not user.is_authenticated:
        return 0
    try:
        return user.collab_access.mask
    except ObjectDoesNotExist:
        return 0


def can_do(user, capability):
    """Check whether the user's mask carries the given capability bit."""
    return bool(get_mask(user) & capability)


def classify(user):
    """Return the Role label for a user. Derived on every call, never stored."""
    for capability, role in ROLE_LADDER:
        if can_do(user, capability):
            return role
    return Role.NORMAL


def tier_mask(requested_mask):
    """
    Return the sum of every tier whose value is at most requested_mask.

    A requested mask of DELETE_POSTS (2) yields ADD_POSTS | DELETE_POSTS (3);
    higher bits set in the request are ignored.
    """
    return sum(tier for tier in TIERS if tier <= requested_mask)


def delegate(acting_user, target_user, requested_mask):
    """
    Replace target_user's mask with every tier up to requested_mask.

    Returns False without touching anything unless acting_user holds
    EDIT_USER_ACCESS. Database errors propagate to the caller.
    """
    from .models import UserAccess

    if not can_do(acting_user, Capability.EDIT_USER_ACCESS):
        logger.warning(
            "User %s may not change access of user %s",
            acting_user.pk,
            target_user.pk,
        )
        return False

    new_mask = tier_mask(requested_mask)

    with transaction.atomic():
        access, _ = UserAccess.objects.select_for_update().get_or_create(
            user=target_user
        )
        access.mask = new_mask
        access.save(update_fields=["mask", "updated_at"])

    # Refresh the cached reverse relation on the instance we were handed
    target_user.collab_access = access

    logger.info(
        "User %s set access of user %s to %d (requested %d)",
        acting_user.pk,
        target_user.pk,
        new_mask,
        requested_mask,
    )
    return True


# Authorization gates used by models and views


def authorize(allowed, message="You do not have permission to perform this action."):
    """Raise PermissionDenied unless allowed is true."""
    if not allowed:
        logger.warning("Permission denied: %s", message)
        raise PermissionDenied(message)


def can_create_post(user):
    if not user.is_authenticated:
        return False
    if collab_settings.REQUIRE_ADD_POSTS_PERMISSION:
        return can_do(user, Capability.ADD_POSTS)
    return True


def can_update_post(user, post):
    """Owner, invited members and post moderators may edit a post."""
    if not user.is_authenticated:
        return False
    if user.pk == post.owner_id or post.is_member(user):
        return True
    return can_do(user, Capability.DELETE_POSTS)


def can_delete_post(user, post):
    if not user.is_authenticated:
        return False
    return user.pk == post.owner_id or can_do(user, Capability.DELETE_POSTS)


def can_add_category(user, post):
    return can_do(user, Capability.ADD_CATEGORIES)


def can_invite(user, post):
    return user.is_authenticated and user.pk == post.owner_id


def can_delete_comment(user, comment):
    if not user.is_authenticated:
        return False
    return user.pk == comment.owner_id or classify(user) == Role.ADMIN


def can_create_category(user):
    return can_do(user, Capability.ADD_CATEGORIES)


def can_manage_categories(user):
    return can_do(user, Capability.EDIT_CATEGORIES)
