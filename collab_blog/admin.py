"""
Django admin configuration for collab_blog.
"""
from django.contrib import admin
from django.db import transaction

from .models import (
    Activity,
    Category,
    Comment,
    Post,
    PostMember,
    Task,
    UserAccess,
    record,
)
from .models.activity import (
    ADD_MEMBER,
    COMPLETE_TASK,
    CREATE_COMMENT,
    CREATE_POST,
    CREATE_TASK,
    INCOMPLETE_TASK,
    UPDATE_POST,
)


class PostMemberInline(admin.TabularInline):
    """Inline for managing members of a post."""

    model = PostMember
    extra = 1
    raw_id_fields = ["user"]
    fields = ["user", "created_at"]
    readonly_fields = ["created_at"]


class TaskInline(admin.TabularInline):
    model = Task
    extra = 0
    raw_id_fields = ["owner"]
    fields = ["body", "owner", "done", "created_at"]
    readonly_fields = ["created_at"]


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ["title", "slug", "created_at"]
    search_fields = ["title", "slug"]
    prepopulated_fields = {"slug": ("title",)}


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    list_display = ["title_preview", "owner", "member_count", "created_at", "updated_at"]
    list_filter = ["categories", "created_at"]
    search_fields = ["title", "body", "owner__username"]
    raw_id_fields = ["owner"]
    filter_horizontal = ["categories"]
    date_hierarchy = "created_at"
    inlines = [PostMemberInline, TaskInline]
    readonly_fields = ["slug", "created_at", "updated_at"]

    fieldsets = (
        (None, {
            "fields": ("title", "slug", "body", "image", "owner")
        }),
        ("Taxonomy", {
            "fields": ("categories",)
        }),
        ("Metadata", {
            "fields": ("created_at", "updated_at"),
            "classes": ("collapse",),
        }),
    )

    @admin.display(description="Title")
    def title_preview(self, obj):
        """Truncated title for list display."""
        return obj.title[:60] + "..." if len(obj.title) > 60 else obj.title

    @admin.display(description="Members")
    def member_count(self, obj):
        return obj.memberships.count()

    def save_model(self, request, obj, form, change):
        """Save the post and record its activity as the admin user."""
        with transaction.atomic():
            super().save_model(request, obj, form, change)
            if not change:
                record(obj, request.user, CREATE_POST)
            elif set(form.changed_data) & set(Post.EDITABLE_FIELDS):
                record(obj, request.user, UPDATE_POST)

    def save_formset(self, request, form, formset, change):
        """Save inline members and tasks, recording each change on the post."""
        post = form.instance
        with transaction.atomic():
            formset.save()
            if formset.model is PostMember:
                # Swapping the user on a row adds a member too
                swapped = [obj for obj, fields in formset.changed_objects if "user" in fields]
                for _ in formset.new_objects + swapped:
                    record(post, request.user, ADD_MEMBER)
            elif formset.model is Task:
                for _ in formset.new_objects:
                    record(post, request.user, CREATE_TASK)
                for task, fields in formset.changed_objects:
                    if "done" in fields:
                        tag = COMPLETE_TASK if task.done else INCOMPLETE_TASK
                        record(post, request.user, tag)


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    list_display = ["body_preview", "owner", "post", "is_reply", "created_at"]
    list_filter = ["created_at"]
    search_fields = ["body", "owner__username", "post__title"]
    raw_id_fields = ["post", "owner", "parent"]
    readonly_fields = ["created_at"]

    @admin.display(description="Comment")
    def body_preview(self, obj):
        return obj.body[:50] + "..." if len(obj.body) > 50 else obj.body

    def save_model(self, request, obj, form, change):
        with transaction.atomic():
            super().save_model(request, obj, form, change)
            if not change:
                record(obj, request.user, CREATE_COMMENT)


@admin.register(Activity)
class ActivityAdmin(admin.ModelAdmin):
    """Read-only view of the activity feed."""

    list_display = ["info", "owner", "content_type", "object_id", "created_at"]
    list_filter = ["info", "content_type", "created_at"]
    search_fields = ["info", "owner__username"]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(UserAccess)
class UserAccessAdmin(admin.ModelAdmin):
    """
    Masks are listed here but changed through the delegation view, which
    enforces the tier ladder.
    """

    list_display = ["user", "mask", "role", "updated_at"]
    search_fields = ["user__username", "user__email"]
    readonly_fields = ["user", "mask", "updated_at"]

    def has_add_permission(self, request):
        return False
