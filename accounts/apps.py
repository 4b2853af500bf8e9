"""Django AppConfig for the accounts app (custom user, login pages, auth API)."""

from django.apps import AppConfig


class AccountsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "accounts"
