"""
Post, Category, and membership models for django-collab-blog.
"""
from django.conf import settings
from django.contrib.auth import get_user_model
from django.contrib.contenttypes.fields import GenericRelation
from django.core.exceptions import ValidationError
from django.db import models, transaction
from django.urls import reverse
from django.utils.text import slugify

from .. import permissions
from ..conf import collab_settings
from .activity import (
    ADD_MEMBER,
    CREATE_COMMENT,
    CREATE_POST,
    CREATE_TASK,
    UPDATE_POST,
    record,
    recorded,
)


def get_image_upload_path(instance, filename):
    """Generate upload path for post images."""
    return collab_settings.IMAGE_UPLOAD_PATH + filename


class Category(models.Model):
    """Flat category for organizing posts."""

    title = models.CharField(max_length=100)
    slug = models.SlugField(max_length=100, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["title"]
        verbose_name_plural = "Categories"

    def __str__(self):
        return self.title

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(self.title)[:collab_settings.SLUG_MAX_LENGTH]
        super().save(*args, **kwargs)

    def get_absolute_url(self):
        return reverse("collab_blog:category_detail", kwargs={"slug": self.slug})

    @classmethod
    def create_by(cls, actor, title):
        """Create a category on behalf of a user holding ADD_CATEGORIES."""
        permissions.authorize(
            permissions.can_create_category(actor),
            "You may not add categories.",
        )
        return cls.objects.create(title=title)

    def rename(self, actor, title):
        permissions.authorize(
            permissions.can_manage_categories(actor),
            "You may not edit categories.",
        )
        self.title = title
        self.slug = slugify(title)[:collab_settings.SLUG_MAX_LENGTH]
        self.save(update_fields=["title", "slug"])

    def remove(self, actor):
        permissions.authorize(
            permissions.can_manage_categories(actor),
            "You may not delete categories.",
        )
        self.delete()


class Post(models.Model):
    """
    Blog post owned by one user and editable by its invited members.

    Mutations go through create_for(), edit() and invite(), which check
    permissions and append to the post's activity feed in the same
    transaction.
    """

    # Fields compared by edit() to decide whether anything changed
    EDITABLE_FIELDS = ("title", "body", "image")

    # Slugs taken by fixed routes under posts/
    RESERVED_SLUGS = ("new",)

    title = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True)
    body = models.TextField()
    image = models.ImageField(upload_to=get_image_upload_path, blank=True)

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="collab_posts",
    )
    members = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        through="PostMember",
        blank=True,
        related_name="member_posts",
    )
    categories = models.ManyToManyField(Category, related_name="posts", blank=True)
    activity = GenericRelation("collab_blog.Activity", related_query_name="post")

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    _loaded_title = None

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["owner", "-created_at"], name="collab_post_owner_idx"),
        ]

    def __str__(self):
        return self.title

    @classmethod
    def from_db(cls, db, field_names, values):
        instance = super().from_db(db, field_names, values)
        instance._loaded_title = instance.__dict__.get("title")
        return instance

    def save(self, *args, **kwargs):
        # Slug follows the title
        if not self.slug or self.title != self._loaded_title:
            self.slug = self._unique_slug()
            update_fields = kwargs.get("update_fields")
            if update_fields is not None and "slug" not in update_fields:
                kwargs["update_fields"] = list(update_fields) + ["slug"]

        super().save(*args, **kwargs)
        self._loaded_title = self.title

    def _unique_slug(self):
        base_slug = slugify(self.title)[:collab_settings.SLUG_MAX_LENGTH] or "post"
        slug = base_slug
        counter = 1
        while slug in self.RESERVED_SLUGS or (
            Post.objects.filter(slug=slug).exclude(pk=self.pk).exists()
        ):
            slug = f"{base_slug}-{counter}"
            counter += 1
        return slug

    def get_absolute_url(self):
        return reverse("collab_blog:post_detail", kwargs={"slug": self.slug})

    @property
    def mini_body(self):
        """Return truncated body for list display."""
        limit = collab_settings.MINI_BODY_LENGTH
        if len(self.body) > limit:
            return self.body[:limit - 3] + "..."
        return self.body

    @property
    def member_list(self):
        """Return members in the order they joined."""
        return [m.user for m in self.memberships.select_related("user")]

    def is_member(self, user):
        if not user.is_authenticated:
            return False
        return self.memberships.filter(user=user).exists()

    @classmethod
    def create_for(cls, owner, tasks=(), **fields):
        """
        Create a post owned by owner and record "create_post".

        Each body in tasks is added to the checklist in the same
        transaction. Returns the saved Post.
        """
        permissions.authorize(
            permissions.can_create_post(owner),
            "You may not add posts.",
        )
        with transaction.atomic():
            post = cls.objects.create(owner=owner, **fields)
            record(post, owner, CREATE_POST)
            for body in tasks:
                post.add_task(owner, body)
        return post

    def edit(self, actor, **changes):
        """
        Apply field changes on behalf of actor and record "update_post".

        One activity is recorded per call, however many fields change.
        Returns True if anything was saved.
        """
        permissions.authorize(
            permissions.can_update_post(actor, self),
            "You may not edit this post.",
        )
        unknown = set(changes) - set(self.EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot edit post fields: {', '.join(sorted(unknown))}")

        changed = [name for name, value in changes.items() if self._differs(name, value)]
        if not changed and not collab_settings.RECORD_UNCHANGED_UPDATES:
            return False

        with recorded(self, actor, UPDATE_POST):
            for name in changed:
                value = changes[name]
                setattr(self, name, "" if value is None else value)
            if changed:
                self.save(update_fields=changed + ["updated_at"])
        return bool(changed)

    def _differs(self, name, value):
        current = getattr(self, name)
        if name == "image":
            # FieldFile vs upload, name string or None
            return (current.name or "") != (getattr(value, "name", value) or "")
        return current != value

    def invite(self, actor, user):
        """
        Add user as a member of this post and record "add_member".

        Only the owner may invite. Inviting an existing member does nothing.
        Returns the PostMember row.
        """
        permissions.authorize(
            permissions.can_invite(actor, self),
            "Only the post owner may invite members.",
        )
        existing = self.memberships.filter(user=user).first()
        if existing:
            return existing

        with recorded(self, actor, ADD_MEMBER):
            membership = PostMember.objects.create(post=self, user=user)
        return membership

    def invite_by_email(self, actor, email):
        """
        Invite the registered user with the given email.

        Raises ValidationError on the "email" field when nobody is
        registered under it.
        """
        permissions.authorize(
            permissions.can_invite(actor, self),
            "Only the post owner may invite members.",
        )
        User = get_user_model()
        user = User.objects.filter(email__iexact=email.strip()).first() if email else None
        if user is None:
            raise ValidationError({"email": "No registered user has this email address."})
        return self.invite(actor, user)

    def add_category(self, actor, category):
        permissions.authorize(
            permissions.can_add_category(actor, self),
            "You may not add categories to posts.",
        )
        self.categories.add(category)

    def remove(self, actor):
        """Delete the post with its comments, members, tasks and activity."""
        permissions.authorize(
            permissions.can_delete_post(actor, self),
            "You may not delete this post.",
        )
        self.delete()

    def add_task(self, actor, body):
        """Append a checklist task by actor and record "create_task" on the post."""
        from .tasks import Task

        permissions.authorize(
            permissions.can_update_post(actor, self),
            "You may not edit this post's tasks.",
        )
        body = (body or "").strip()
        if not body:
            raise ValidationError({"body": "Task body is required."})
        if len(body) > Task._meta.get_field("body").max_length:
            raise ValidationError({"body": "Task is too long."})

        with recorded(self, actor, CREATE_TASK):
            task = Task.objects.create(post=self, owner=actor, body=body)
        return task

    def comment(self, actor, body, parent=None):
        """Add a comment by actor and record "create_comment" on it."""
        from .comments import Comment

        body = (body or "").strip()
        if not body:
            raise ValidationError({"body": "Comment body is required."})
        if len(body) > collab_settings.COMMENT_MAX_LENGTH:
            raise ValidationError({"body": "Comment is too long."})

        with transaction.atomic():
            comment = Comment.objects.create(
                post=self,
                owner=actor,
                parent=parent,
                body=body,
            )
            record(comment, actor, CREATE_COMMENT)
        return comment


class PostMember(models.Model):
    """Junction table for users invited to collaborate on a post."""

    post = models.ForeignKey(
        Post,
        on_delete=models.CASCADE,
        related_name="memberships",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="post_memberships",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at", "pk"]
        unique_together = ["post", "user"]
        verbose_name = "Post Member"

    def __str__(self):
        return f"{self.user} on {self.post}"
