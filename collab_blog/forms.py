"""
Forms for django-collab-blog.
"""
from django import forms

from .models import Category, Comment, Post


class PostForm(forms.ModelForm):
    class Meta:
        model = Post
        fields = ["title", "body"]


class InviteMemberForm(forms.Form):
    email = forms.EmailField()


class AddCategoryForm(forms.Form):
    category = forms.ModelChoiceField(queryset=Category.objects.all())


class AccessForm(forms.Form):
    mask = forms.IntegerField(min_value=0)


class CommentForm(forms.Form):
    """Comment body plus an optional parent comment on the same post."""

    # Body rules are enforced by Post.comment()
    body = forms.CharField(required=False, strip=False)
    parent_id = forms.ModelChoiceField(queryset=Comment.objects.none(), required=False)

    def __init__(self, *args, post, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["parent_id"].queryset = post.comments.all()


class TaskForm(forms.Form):
    body = forms.CharField(max_length=255)


class TaskStatusForm(forms.Form):
    done = forms.BooleanField(required=False)
