import uuid

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
            name='ActivityLog',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('action', models.CharField(db_index=True, max_length=40, verbose_name='action')),
                ('entity_type', models.CharField(choices=[('product', 'Product'), ('client', 'Client'), ('pharmacy', 'Pharmacy'), ('assignment', 'Assignment'), ('user', 'User'), ('invoice', 'Invoice'), ('payment', 'Payment')], db_index=True, max_length=20, verbose_name='entity type')),
                ('entity_id', models.CharField(blank=True, db_index=True, max_length=40, verbose_name='entity ID')),
                ('details', models.TextField(blank=True, default='', verbose_name='details')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='created at')),
                ('actor', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='activity_logs', to=settings.AUTH_USER_MODEL, verbose_name='actor')),
            ],
            options={
                'verbose_name': 'activity log',
                'verbose_name_plural': 'activity logs',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['entity_type', 'entity_id'], name='core_activi_entity__4c1f0e_idx'),
                    models.Index(fields=['actor', 'created_at'], name='core_activi_actor_i_9a2b7d_idx'),
                ],
            },
        ),
    ]
