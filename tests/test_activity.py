"""
Tests for activity recording on posts and comments.
"""
import pytest

from collab_blog.models import (
    Activity,
    Post,
    activity_of,
    latest_activity,
    record,
    recorded,
)


class TestRecord:
    """Tests for the recorder itself."""

    def test_record_appends_activity(self, user, post):
        activity = record(post, user, "custom_tag")

        assert activity.info == "custom_tag"
        assert activity.owner == user
        assert activity.subject == post
        assert latest_activity(post) == activity

    def test_record_leaves_entity_untouched(self, user, post):
        updated_at = post.updated_at
        record(post, user, "custom_tag")
        post.refresh_from_db()
        assert post.updated_at == updated_at

    def test_record_requires_saved_entity(self, user):
        with pytest.raises(ValueError):
            record(Post(title="Unsaved", body="x", owner=user), user, "create_post")

    def test_activity_is_append_only(self, user, post):
        activity = latest_activity(post)
        activity.info = "rewritten"
        with pytest.raises(ValueError):
            activity.save()
        assert latest_activity(post).info == "create_post"

    def test_feed_is_in_insertion_order(self, user, other_user, post):
        record(post, other_user, "first")
        record(post, user, "second")
        record(post, other_user, "third")

        feed = list(activity_of(post))
        assert [a.info for a in feed] == ["create_post", "first", "second", "third"]
        assert feed == sorted(feed, key=lambda a: (a.created_at, a.pk))
        assert latest_activity(post).info == "third"

    def test_feeds_are_per_entity(self, user, post):
        other_post = Post.create_for(user, title="Another", body="Body")
        record(other_post, user, "extra")

        assert activity_of(post).count() == 1
        assert activity_of(other_post).count() == 2

    def test_latest_activity_none_without_feed(self, user):
        bare = Post.objects.create(title="Bare", body="x", owner=user)
        assert latest_activity(bare) is None
        assert list(activity_of(bare)) == []

    def test_recorded_skips_activity_on_error(self, user, post):
        with pytest.raises(RuntimeError):
            with recorded(post, user, "never"):
                raise RuntimeError("boom")

        assert activity_of(post).count() == 1

    def test_mutation_rolls_back_when_recording_fails(self, user, post, monkeypatch):
        def fail(*args, **kwargs):
            raise RuntimeError("database went away")

        monkeypatch.setattr("collab_blog.models.activity.record", fail)

        with pytest.raises(RuntimeError):
            post.edit(user, title="Renamed")

        post.refresh_from_db()
        assert post.title == "Test Post"


class TestPostActivity:
    """Tests for the activity recorded by post mutations."""

    def test_creating_post_records_activity(self, user, post):
        assert post.activity.count() == 1
        activity = latest_activity(post)
        assert activity.info == "create_post"
        assert activity.owner == user

    def test_updating_post_records_activity(self, user, post):
        assert post.edit(user, title="New Title", body="New body")

        assert post.activity.count() == 2
        assert latest_activity(post).info == "update_post"
        assert latest_activity(post).owner == user

    def test_update_by_moderator_is_attributed_to_moderator(self, moderator, post):
        post.edit(moderator, body="Moderated body")
        assert latest_activity(post).owner == moderator

    def test_unchanged_update_records_nothing(self, user, post):
        assert not post.edit(user, title=post.title, body=post.body)
        assert post.activity.count() == 1

    def test_unchanged_update_can_be_recorded(self, user, post, settings):
        settings.COLLAB_BLOG = {"RECORD_UNCHANGED_UPDATES": True}

        assert not post.edit(user, title=post.title)

        assert post.activity.count() == 2
        assert latest_activity(post).info == "update_post"

    def test_inviting_member_records_activity(self, user, other_user, post):
        post.invite(user, other_user)

        assert post.member_list == [other_user]
        activity = latest_activity(post)
        assert activity.info == "add_member"
        assert activity.owner == post.owner

    def test_reinviting_member_records_nothing(self, user, other_user, post):
        post.invite(user, other_user)
        post.invite(user, other_user)

        assert post.members.count() == 1
        assert post.activity.filter(info="add_member").count() == 1

    def test_deleting_user_keeps_their_activity(self, user, other_user, post):
        post.invite(user, other_user)
        post.edit(other_user, body="Member edit")

        other_user.delete()

        feed = list(activity_of(post))
        assert [a.info for a in feed] == ["create_post", "add_member", "update_post"]
        assert feed[-1].owner is None
        assert str(feed[-1]).startswith("deleted user update_post")

    def test_deleting_post_removes_activity(self, user, other_user, post):
        post.invite(user, other_user)
        post.comment(other_user, "First!")
        assert Activity.objects.count() == 3

        post.remove(user)

        assert Activity.objects.count() == 0


class TestTaskActivity:
    """Tests for the activity recorded by checklist changes."""

    def test_adding_task_records_on_post(self, user, other_user, post):
        post.invite(user, other_user)
        task = post.add_task(other_user, "Proofread")

        activity = latest_activity(post)
        assert activity.info == "create_task"
        assert activity.owner == other_user
        assert latest_activity(task) is None

    def test_create_with_tasks_records_each(self, user):
        post = Post.create_for(user, title="Plan", body="Steps", tasks=["One", "Two"])
        assert [a.info for a in activity_of(post)] == ["create_post", "create_task", "create_task"]

    def test_ticking_task_records_on_post(self, user, moderator, post):
        task = post.add_task(user, "Proofread")

        task.complete(moderator)
        assert latest_activity(post).info == "complete_task"
        assert latest_activity(post).owner == moderator

        task.incomplete(user)
        assert latest_activity(post).info == "incomplete_task"

    def test_unchanged_task_records_nothing(self, user, post):
        task = post.add_task(user, "Proofread")
        task.incomplete(user)
        assert post.activity.count() == 2


class TestCommentActivity:
    """Tests for the activity trail of comments."""

    def test_comment_records_activity(self, other_user, post):
        comment = post.comment(other_user, "Great post!")

        assert comment.activity.count() == 1
        assert latest_activity(comment).info == "create_comment"
        assert latest_activity(comment).owner == other_user
        # The post's own feed is unchanged
        assert post.activity.count() == 1

    def test_deleting_comment_removes_activity(self, other_user, post):
        comment = post.comment(other_user, "Great post!")
        comment.remove(other_user)

        assert Activity.objects.count() == 1
        assert latest_activity(post).info == "create_post"
