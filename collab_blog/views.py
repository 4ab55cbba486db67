"""
Views for django-collab-blog.

Views are thin: permission checks and activity recording live on the
models, which raise PermissionDenied (rendered as 403) or ValidationError.
"""
from django.contrib.auth import get_user_model
from django.contrib.auth.mixins import LoginRequiredMixin
from django.core.exceptions import PermissionDenied, ValidationError
from django.http import JsonResponse
from django.shortcuts import get_object_or_404, redirect
from django.urls import reverse_lazy
from django.views import View
from django.views.generic import (
    ListView,
    DetailView,
    CreateView,
    UpdateView,
    DeleteView,
)

from . import permissions
from .conf import collab_settings
from .forms import (
    AccessForm,
    AddCategoryForm,
    CommentForm,
    InviteMemberForm,
    PostForm,
    TaskForm,
    TaskStatusForm,
)
from .models import Category, Comment, Post, Task, activity_of


def _wants_json(request):
    return request.headers.get("Accept") == "application/json"


class PostListView(ListView):
    """List posts with pagination."""

    model = Post
    template_name = "collab_blog/post_list.html"
    context_object_name = "posts"

    def get_paginate_by(self, queryset):
        return collab_settings.POSTS_PER_PAGE

    def get_queryset(self):
        return Post.objects.select_related("owner").prefetch_related("categories")


class CategoryPostListView(PostListView):
    """List posts in a specific category."""

    template_name = "collab_blog/category_detail.html"

    def get_queryset(self):
        self.category = get_object_or_404(Category, slug=self.kwargs["slug"])
        return super().get_queryset().filter(categories=self.category)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["category"] = self.category
        return context


class PostDetailView(DetailView):
    """Display a post with its members, comments and activity feed."""

    model = Post
    template_name = "collab_blog/post_detail.html"
    context_object_name = "post"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        post = self.object
        context["members"] = post.member_list
        context["categories"] = post.categories.all()
        context["tasks"] = post.tasks.all()
        context["comments"] = post.comments.filter(
            parent=None,
        ).select_related("owner").prefetch_related("replies__owner")

        feed = list(activity_of(post))
        context["activities"] = feed[-collab_settings.ACTIVITY_FEED_LENGTH:]
        context["latest_activity"] = feed[-1] if feed else None

        user = self.request.user
        context["can_edit"] = permissions.can_update_post(user, post)
        context["can_delete"] = permissions.can_delete_post(user, post)
        context["can_invite"] = permissions.can_invite(user, post)
        return context


class PostCreateView(LoginRequiredMixin, CreateView):
    """Create a new post owned by the current user."""

    model = Post
    form_class = PostForm
    template_name = "collab_blog/post_form.html"

    def dispatch(self, request, *args, **kwargs):
        if request.user.is_authenticated:
            permissions.authorize(
                permissions.can_create_post(request.user),
                "You may not add posts.",
            )
        return super().dispatch(request, *args, **kwargs)

    def form_valid(self, form):
        self.object = Post.create_for(self.request.user, **form.cleaned_data)
        return redirect(self.object.get_absolute_url())


class PostUpdateView(LoginRequiredMixin, UpdateView):
    """Edit a post as its owner, a member, or a moderator."""

    model = Post
    form_class = PostForm
    template_name = "collab_blog/post_form.html"

    def get_object(self, queryset=None):
        post = super().get_object(queryset)
        permissions.authorize(
            permissions.can_update_post(self.request.user, post),
            "You may not edit this post.",
        )
        return post

    def form_valid(self, form):
        # Form validation already copied the new values onto self.object
        post = Post.objects.get(pk=self.object.pk)
        post.edit(self.request.user, **form.cleaned_data)
        return redirect(post.get_absolute_url())


class PostDeleteView(LoginRequiredMixin, DeleteView):
    """Delete a post as its owner or a moderator."""

    model = Post
    template_name = "collab_blog/post_confirm_delete.html"
    success_url = reverse_lazy("collab_blog:post_list")

    def get_object(self, queryset=None):
        post = super().get_object(queryset)
        permissions.authorize(
            permissions.can_delete_post(self.request.user, post),
            "You may not delete this post.",
        )
        return post

    def form_valid(self, form):
        self.object.remove(self.request.user)
        return redirect(self.get_success_url())


class PostInviteView(LoginRequiredMixin, View):
    """Invite a registered user, by email, to collaborate on a post."""

    def post(self, request, slug):
        post = get_object_or_404(Post, slug=slug)
        permissions.authorize(
            permissions.can_invite(request.user, post),
            "Only the post owner may invite members.",
        )

        form = InviteMemberForm(request.POST)
        if form.is_valid():
            try:
                post.invite_by_email(request.user, form.cleaned_data["email"])
            except ValidationError as e:
                form.add_error(None, e)

        if form.errors:
            return JsonResponse({"errors": form.errors}, status=400)

        return redirect(post.get_absolute_url())


class PostCategoryAddView(LoginRequiredMixin, View):
    """Attach an existing category to a post."""

    def post(self, request, slug):
        post = get_object_or_404(Post, slug=slug)
        permissions.authorize(
            permissions.can_add_category(request.user, post),
            "You may not add categories to posts.",
        )

        form = AddCategoryForm(request.POST)
        if not form.is_valid():
            return JsonResponse({"errors": form.errors}, status=400)

        post.add_category(request.user, form.cleaned_data["category"])
        return redirect(post.get_absolute_url())


class CommentCreateView(LoginRequiredMixin, View):
    """Add a comment or reply to a post."""

    def post(self, request, slug):
        post = get_object_or_404(Post, slug=slug)

        form = CommentForm(request.POST, post=post)
        if not form.is_valid():
            return JsonResponse({"errors": form.errors}, status=400)

        parent = form.cleaned_data["parent_id"]
        body = form.cleaned_data["body"]
        try:
            if parent:
                comment = parent.reply(request.user, body)
            else:
                comment = post.comment(request.user, body)
        except ValidationError as e:
            return JsonResponse({"errors": e.message_dict}, status=400)

        if _wants_json(request):
            return JsonResponse({
                "id": comment.pk,
                "body": comment.body,
                "owner": comment.owner.get_username(),
                "parent_id": comment.parent_id,
                "created_at": comment.created_at.isoformat(),
            })

        return redirect(post.get_absolute_url())


class CommentDeleteView(LoginRequiredMixin, View):
    """Delete a comment as its owner or an admin."""

    def post(self, request, pk):
        comment = get_object_or_404(Comment.objects.select_related("post"), pk=pk)
        post = comment.post
        comment.remove(request.user)
        return redirect(post.get_absolute_url())


class TaskCreateView(LoginRequiredMixin, View):
    """Add a checklist task to a post."""

    def post(self, request, slug):
        post = get_object_or_404(Post, slug=slug)
        permissions.authorize(
            permissions.can_update_post(request.user, post),
            "You may not edit this post's tasks.",
        )

        form = TaskForm(request.POST)
        if form.is_valid():
            try:
                task = post.add_task(request.user, form.cleaned_data["body"])
            except ValidationError as e:
                form.add_error(None, e)

        if form.errors:
            return JsonResponse({"errors": form.errors}, status=400)

        if _wants_json(request):
            return JsonResponse({"id": task.pk, "body": task.body, "done": task.done})

        return redirect(post.get_absolute_url())


class TaskUpdateView(LoginRequiredMixin, View):
    """Mark a task done or not done."""

    def post(self, request, pk):
        task = get_object_or_404(Task.objects.select_related("post"), pk=pk)

        form = TaskStatusForm(request.POST)
        if not form.is_valid():
            return JsonResponse({"errors": form.errors}, status=400)

        task.set_done(request.user, form.cleaned_data["done"])

        if _wants_json(request):
            return JsonResponse({"id": task.pk, "body": task.body, "done": task.done})

        return redirect(task.post.get_absolute_url())


class UserAccessUpdateView(LoginRequiredMixin, View):
    """Delegate a permission tier to another user."""

    def post(self, request, pk):
        target = get_object_or_404(get_user_model(), pk=pk)

        form = AccessForm(request.POST)
        if not form.is_valid():
            return JsonResponse({"errors": form.errors}, status=400)

        if not permissions.delegate(request.user, target, form.cleaned_data["mask"]):
            raise PermissionDenied("You may not change user access.")

        return JsonResponse({
            "user": target.pk,
            "mask": permissions.get_mask(target),
            "role": permissions.classify(target),
        })
