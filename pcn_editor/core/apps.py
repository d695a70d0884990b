from django.apps import AppConfig


class CoreConfig(AppConfig):
    name = "pcn_editor.core"
    label = "core"
    verbose_name = "PCN874 receipts"
