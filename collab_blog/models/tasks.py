"""
Task checklist items attached to posts.
"""
from django.conf import settings
from django.db import models

from .. import permissions
from .activity import COMPLETE_TASK, INCOMPLETE_TASK, recorded


class Task(models.Model):
    """
    Checklist item on a post.

    Tasks are added through Post.add_task() and ticked off with
    set_done(). Both record on the post's feed, so the post shows who
    did what to its checklist.
    """

    post = models.ForeignKey(
        "collab_blog.Post",
        on_delete=models.CASCADE,
        related_name="tasks",
    )
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="collab_tasks",
    )
    body = models.CharField(max_length=255)
    done = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at", "pk"]

    def __str__(self):
        return self.body

    def set_done(self, actor, done=True):
        """
        Mark the task done or not done on behalf of actor.

        Anyone who may edit the post may tick its tasks. Returns True if
        the state changed; setting the current state records nothing.
        """
        permissions.authorize(
            permissions.can_update_post(actor, self.post),
            "You may not edit this post's tasks.",
        )
        done = bool(done)
        if self.done == done:
            return False

        with recorded(self.post, actor, COMPLETE_TASK if done else INCOMPLETE_TASK):
            self.done = done
            self.save(update_fields=["done", "updated_at"])
        return True

    def complete(self, actor):
        return self.set_done(actor, True)

    def incomplete(self, actor):
        return self.set_done(actor, False)
