import collab_blog.models.posts
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("contenttypes", "0002_remove_content_type_name"),
    ]

    operations = [
        migrations.CreateModel(
            name="Category",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=100)),
                ("slug", models.SlugField(max_length=100, unique=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "verbose_name_plural": "Categories",
                "ordering": ["title"],
            },
        ),
        migrations.CreateModel(
            name="Post",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=255)),
                ("slug", models.SlugField(max_length=255, unique=True)),
                ("body", models.TextField()),
                ("image", models.ImageField(blank=True, upload_to=collab_blog.models.posts.get_image_upload_path)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("categories", models.ManyToManyField(blank=True, related_name="posts", to="collab_blog.category")),
                ("owner", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="collab_posts", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="PostMember",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("post", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="memberships", to="collab_blog.post")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="post_memberships", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "verbose_name": "Post Member",
                "ordering": ["created_at", "pk"],
                "unique_together": {("post", "user")},
            },
        ),
        migrations.AddField(
            model_name="post",
            name="members",
            field=models.ManyToManyField(blank=True, related_name="member_posts", through="collab_blog.PostMember", to=settings.AUTH_USER_MODEL),
        ),
        migrations.AddIndex(
            model_name="post",
            index=models.Index(fields=["owner", "-created_at"], name="collab_post_owner_idx"),
        ),
        migrations.CreateModel(
            name="Comment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("body", models.TextField(max_length=5000)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("owner", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="collab_comments", to=settings.AUTH_USER_MODEL)),
                ("parent", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="replies", to="collab_blog.comment")),
                ("post", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="comments", to="collab_blog.post")),
            ],
            options={
                "ordering": ["created_at", "pk"],
                "indexes": [models.Index(fields=["post", "created_at"], name="collab_comment_post_idx")],
            },
        ),
        migrations.CreateModel(
            name="Activity",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("info", models.CharField(help_text="Symbolic action tag", max_length=50)),
                ("object_id", models.PositiveBigIntegerField()),
                ("created_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("content_type", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="contenttypes.contenttype")),
                ("owner", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="collab_activities", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "verbose_name_plural": "Activities",
                "ordering": ["created_at", "pk"],
                "indexes": [models.Index(fields=["content_type", "object_id", "created_at"], name="collab_activity_subject_idx")],
            },
        ),
        migrations.CreateModel(
            name="UserAccess",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("mask", models.PositiveSmallIntegerField(default=0, help_text="Sum of granted capability bits")),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("user", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="collab_access", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "verbose_name": "User Access",
                "verbose_name_plural": "User Access",
            },
        ),
    ]
