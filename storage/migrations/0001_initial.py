from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Storage',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('path', models.CharField(help_text='Directory holding the blobs. Not checked for existence when the row is created.', max_length=1024)),
                ('is_default', models.BooleanField(db_index=True, default=False, help_text='True for the single storage that receives new uploads.')),
            ],
            options={
                'db_table': 'storage',
                'ordering': ['id'],
            },
        ),
        migrations.AddConstraint(
            model_name='storage',
            constraint=models.UniqueConstraint(condition=models.Q(('is_default', True)), fields=('is_default',), name='single_default_storage'),
        ),
    ]
