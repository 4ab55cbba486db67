"""
Activity feed for django-collab-blog.

Activities are append-only entries attributing an action to a user on a
post or comment. Model methods call record() explicitly at each mutation
site; nothing is wired through signals.
"""
import logging
from contextlib import contextmanager

from django.conf import settings
from django.contrib.contenttypes.fields import GenericForeignKey
from django.contrib.contenttypes.models import ContentType
from django.db import models, transaction
from django.utils import timezone

logger = logging.getLogger(__name__)

CREATE_POST = "create_post"
UPDATE_POST = "update_post"
ADD_MEMBER = "add_member"
CREATE_COMMENT = "create_comment"
CREATE_TASK = "create_task"
COMPLETE_TASK = "complete_task"
INCOMPLETE_TASK = "incomplete_task"


class Activity(models.Model):
    """
    Immutable log entry for an action on a tracked entity.

    Ordered by insertion; the last entry of an entity's feed is its
    latest activity.
    """

    info = models.CharField(max_length=50, help_text="Symbolic action tag")
    # NULL once the user is deleted; the entry stays in the feed
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="collab_activities",
    )

    # Tracked entity
    content_type = models.ForeignKey(ContentType, on_delete=models.CASCADE)
    object_id = models.PositiveBigIntegerField()
    subject = GenericForeignKey("content_type", "object_id")

    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        ordering = ["created_at", "pk"]
        verbose_name_plural = "Activities"
        indexes = [
            models.Index(
                fields=["content_type", "object_id", "created_at"],
                name="collab_activity_subject_idx",
            ),
        ]

    def __str__(self):
        return f"{self.owner or 'deleted user'} {self.info} at {self.created_at:%Y-%m-%d %H:%M}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError("Activity entries are append-only.")
        super().save(*args, **kwargs)


def record(entity, acting_user, tag):
    """
    Append an Activity for entity attributed to acting_user.

    The entity itself is left untouched. Database errors propagate.
    """
    if entity.pk is None:
        raise ValueError("Cannot record activity for an unsaved object.")

    activity = Activity.objects.create(
        subject=entity,
        owner=acting_user,
        info=tag,
    )
    logger.debug(
        "Recorded %s on %s %s by user %s",
        tag,
        entity._meta.model_name,
        entity.pk,
        acting_user.pk,
    )
    return activity


@contextmanager
def recorded(entity, acting_user, tag):
    """
    Run a mutation and record its activity in one transaction.

        with recorded(post, user, UPDATE_POST):
            post.save()

    The activity is written only when the block finishes without raising.
    The entity must be saved by the time the block exits.
    """
    with transaction.atomic():
        yield
        record(entity, acting_user, tag)


def activity_of(entity):
    """Return the activity feed of entity, oldest first."""
    return Activity.objects.filter(
        content_type=ContentType.objects.get_for_model(entity),
        object_id=entity.pk,
    ).select_related("owner")


def latest_activity(entity):
    """Return the most recent Activity of entity, or None."""
    return activity_of(entity).last()
