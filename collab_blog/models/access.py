"""
Per-user permission mask for django-collab-blog.
"""
from django.conf import settings
from django.db import models

from ..permissions import Capability, classify


class UserAccess(models.Model):
    """
    Permission mask attached to a user.

    Users without a row hold mask 0. Rows are only written through
    collab_blog.permissions.delegate().
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="collab_access",
    )
    mask = models.PositiveSmallIntegerField(
        default=0,
        help_text="Sum of granted capability bits",
    )
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "User Access"
        verbose_name_plural = "User Access"

    def __str__(self):
        return f"{self.user} ({self.role})"

    @property
    def role(self):
        return classify(self.user)

    @property
    def capabilities(self):
        """Return the granted capabilities, lowest tier first."""
        return [cap for cap in Capability if self.mask & cap]
