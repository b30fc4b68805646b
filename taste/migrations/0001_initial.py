from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="TasteSettings",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("like_photos_threshold", models.FloatField(default=50.0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "taste_settings",
                "verbose_name_plural": "taste settings",
            },
        ),
        migrations.CreateModel(
            name="Message",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("channel_name", models.CharField(max_length=64)),
                ("channel_message_id", models.CharField(max_length=128)),
                ("recommendation_id", models.CharField(blank=True, default="", max_length=128)),
                ("sender_id", models.CharField(blank=True, default="", max_length=128)),
                ("is_from_recommendation", models.BooleanField(default=False)),
                ("text", models.TextField(blank=True, default="")),
                ("sent_date", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "taste_message",
                "indexes": [models.Index(fields=["channel_name", "sent_date"], name="taste_msg_channel_sent_idx")],
                "unique_together": {("channel_name", "channel_message_id")},
            },
        ),
    ]
