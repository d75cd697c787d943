# Generated manually - Initial migration for accounts app

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Perfil',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('role', models.CharField(choices=[('ADMIN', 'Administrador'), ('DIRETOR', 'Diretor'), ('COMERCIAL', 'Comercial'), ('INSPETOR', 'Inspetor'), ('ORCAMENTO', 'Orçamento'), ('TECNICO', 'Técnico'), ('PCP', 'PCP'), ('PRODUCAO', 'Produção'), ('QUALIDADE', 'Qualidade'), ('FINANCEIRO', 'Financeiro'), ('SUPRIMENTOS', 'Suprimentos'), ('ALMOXARIFADO', 'Almoxarifado'), ('RH', 'Recursos Humanos')], default='COMERCIAL', help_text='Define quais páginas e ações o usuário pode acessar', max_length=20, verbose_name='Perfil')),
                ('foto', models.CharField(blank=True, help_text='URL da foto do usuário', max_length=500, verbose_name='Foto')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Data de Atualização')),
                ('usuario', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='perfil', to=settings.AUTH_USER_MODEL, verbose_name='Usuário')),
            ],
            options={
                'verbose_name': 'Perfil',
                'verbose_name_plural': 'Perfis',
                'ordering': ['usuario__first_name'],
            },
        ),
        migrations.CreateModel(
            name='Vendedor',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')),
                ('usuario', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='vendedor', to=settings.AUTH_USER_MODEL, verbose_name='Usuário')),
            ],
            options={
                'verbose_name': 'Vendedor',
                'verbose_name_plural': 'Vendedores',
                'ordering': ['usuario__first_name'],
            },
        ),
    ]
