import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Tag",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, help_text="Timestamp when the record was created")),
                ("updated_at", models.DateTimeField(auto_now=True, help_text="Timestamp when the record was last updated")),
                ("name", models.CharField(max_length=100, unique=True)),
            ],
            options={
                "verbose_name": "Tag",
                "verbose_name_plural": "Tags",
                "ordering": ["id"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="Blog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, help_text="Timestamp when the record was created")),
                ("updated_at", models.DateTimeField(auto_now=True, help_text="Timestamp when the record was last updated")),
                ("name", models.CharField(help_text="The name of the blog.", max_length=255)),
                ("handle", models.CharField(help_text="The handle of the blog.", max_length=255)),
                (
                    "user",
                    models.ForeignKey(
                        blank=True,
                        help_text="The user who owns the blog.",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="blogs",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Blog",
                "verbose_name_plural": "Blogs",
                "ordering": ["id"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="Post",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, help_text="Timestamp when the record was created")),
                ("updated_at", models.DateTimeField(auto_now=True, help_text="Timestamp when the record was last updated")),
                ("title", models.CharField(help_text="The title of the post.", max_length=255)),
                ("content", models.TextField(help_text="The main content of the post.")),
                ("date", models.DateTimeField(help_text="When the post was published.")),
                (
                    "blog",
                    models.ForeignKey(
                        blank=True,
                        help_text="The blog the post belongs to.",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="posts",
                        to="blog.blog",
                    ),
                ),
                ("tags", models.ManyToManyField(blank=True, related_name="posts", to="blog.tag")),
            ],
            options={
                "verbose_name": "Post",
                "verbose_name_plural": "Posts",
                "ordering": ["id"],
                "abstract": False,
            },
        ),
    ]
