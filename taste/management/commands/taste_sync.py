from django.core.management.base import BaseCommand

from taste.apps import get_taste


class Command(BaseCommand):
    help = "Sincroniza las imágenes de train/ con el collection de Rekognition"

    def handle(self, *args, **options):
        report = get_taste().sync()
        if report is None:
            self.stdout.write(self.style.WARNING("Sync already running, skipped"))
            return
        self.stdout.write(self.style.SUCCESS(
            f"Synced: {report.total} faces (deleted={report.deleted}, indexed={report.indexed}, {report.duration}s)"
        ))
