"""
URL configuration for django-collab-blog.

Include in your project urls.py:

    path('', include('collab_blog.urls')),
"""
from django.urls import path

from . import views

app_name = "collab_blog"

urlpatterns = [
    # Post list and CRUD
    path("posts/", views.PostListView.as_view(), name="post_list"),
    path("posts/new/", views.PostCreateView.as_view(), name="post_create"),
    path("posts/<slug:slug>/", views.PostDetailView.as_view(), name="post_detail"),
    path("posts/<slug:slug>/edit/", views.PostUpdateView.as_view(), name="post_update"),
    path("posts/<slug:slug>/delete/", views.PostDeleteView.as_view(), name="post_delete"),

    # Categories
    path("category/<slug:slug>/", views.CategoryPostListView.as_view(), name="category_detail"),

    # Collaboration
    path("posts/<slug:slug>/invite/", views.PostInviteView.as_view(), name="post_invite"),
    path(
        "posts/<slug:slug>/categories/",
        views.PostCategoryAddView.as_view(),
        name="post_add_category",
    ),

    # Comments
    path("posts/<slug:slug>/comments/", views.CommentCreateView.as_view(), name="comment_create"),
    path("comments/<int:pk>/delete/", views.CommentDeleteView.as_view(), name="comment_delete"),

    # Tasks
    path("posts/<slug:slug>/tasks/", views.TaskCreateView.as_view(), name="task_create"),
    path("tasks/<int:pk>/", views.TaskUpdateView.as_view(), name="task_update"),

    # Access
    path("users/<int:pk>/access/", views.UserAccessUpdateView.as_view(), name="user_access"),
]
