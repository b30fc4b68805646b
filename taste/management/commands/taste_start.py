from django.core.management.base import BaseCommand

from taste.apps import get_taste


class Command(BaseCommand):
    help = "Crea (si hace falta) el bucket S3 y el collection de Rekognition y los sincroniza"

    def handle(self, *args, **options):
        taste = get_taste()
        report = taste.start()

        self.stdout.write(f"bucket={taste.ctx.bucket} collection={taste.ctx.collection}")
        if report is None:
            self.stdout.write(self.style.WARNING("Sync already running, skipped"))
            return
        self.stdout.write(self.style.SUCCESS(
            f"Synced: {report.total} faces (deleted={report.deleted}, indexed={report.indexed}, {report.duration}s)"
        ))
