import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('storage', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='File',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(help_text='Filename without its extension.', max_length=255)),
                ('ext', models.CharField(blank=True, help_text='Extension including the leading dot, or empty.', max_length=255)),
                ('size', models.BigIntegerField(help_text='Byte length read back from disk after the copy.')),
                ('storage', models.ForeignKey(help_text='The storage whose directory holds the blob.', on_delete=django.db.models.deletion.PROTECT, related_name='files', to='storage.storage')),
            ],
            options={
                'db_table': 'file',
                'ordering': ['id'],
            },
        ),
        migrations.AddConstraint(
            model_name='file',
            constraint=models.UniqueConstraint(fields=('storage', 'title', 'ext'), name='unique_file_per_storage'),
        ),
    ]
