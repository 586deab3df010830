from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='User',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('discord_user_id', models.CharField(help_text="User's unique Discord ID", max_length=32, unique=True)),
                ('email', models.EmailField(help_text='Where review results are sent', max_length=254)),
                ('display_name', models.CharField(blank=True, max_length=100)),
                ('resume_review_count', models.PositiveIntegerField(default=0)),
                ('last_request_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'User',
                'verbose_name_plural': 'Users',
                'ordering': ['-last_request_at'],
            },
        ),
        migrations.CreateModel(
            name='ResumeReviewRequest',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('email', models.EmailField(max_length=254)),
                ('discord_user_id', models.CharField(db_index=True, max_length=32)),
                ('discord_username', models.CharField(blank=True, max_length=100)),
                ('attachment_url', models.URLField(max_length=1000)),
                ('attachment_filename', models.CharField(max_length=255)),
                ('attachment_content_type', models.CharField(blank=True, max_length=100)),
                ('attachment_size', models.PositiveIntegerField(help_text='Attachment size in bytes.')),
                ('status', models.CharField(choices=[('QUEUED', 'Queued'), ('PROCESSING', 'Processing'), ('COMPLETED', 'Completed'), ('FAILED', 'Failed')], default='QUEUED', max_length=16)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='review_requests', to='discordapp.user')),
            ],
            options={
                'verbose_name': 'Resume Review Request',
                'verbose_name_plural': 'Resume Review Requests',
                'ordering': ['-created_at'],
            },
        ),
    ]
