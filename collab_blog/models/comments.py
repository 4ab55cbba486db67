"""
Comment model for django-collab-blog.
"""
from django.conf import settings
from django.contrib.contenttypes.fields import GenericRelation
from django.db import models

from .. import permissions
from ..conf import collab_settings


class Comment(models.Model):
    """
    Comment on a post.

    Replies are comments with a parent on the same post. Deleting a
    comment removes its replies and activity.
    """

    post = models.ForeignKey(
        "collab_blog.Post",
        on_delete=models.CASCADE,
        related_name="comments",
    )
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="collab_comments",
    )
    parent = models.ForeignKey(
        "self",
        null=True,
        blank=True,
        on_delete=models.CASCADE,
        related_name="replies",
    )
    body = models.TextField(max_length=collab_settings.COMMENT_MAX_LENGTH)
    activity = GenericRelation("collab_blog.Activity", related_query_name="comment")
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ["created_at", "pk"]
        indexes = [
            models.Index(fields=["post", "created_at"], name="collab_comment_post_idx"),
        ]

    def __str__(self):
        return f"Comment by {self.owner} on {self.post}"

    @property
    def is_reply(self):
        return self.parent_id is not None

    def reply(self, actor, body):
        """Reply to this comment. Replies to replies attach to the same thread root."""
        root = self.parent if self.is_reply else self
        return self.post.comment(actor, body, parent=root)

    def remove(self, actor):
        """Hard delete the comment. Allowed for its owner and admins."""
        permissions.authorize(
            permissions.can_delete_comment(actor, self),
            "You may not delete this comment.",
        )
        self.delete()
