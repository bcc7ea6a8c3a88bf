from django.core.management.base import BaseCommand, CommandError
from question_service.lib.db import ensure_sqlalchemy_schema, get_engine


class Command(BaseCommand):
    help = "Create the questions and answers tables if they do not exist"

    def add_arguments(self, parser):
        parser.add_argument(
            '--no-lock',
            action='store_true',
            help='Skip PostgreSQL advisory lock during schema creation',
        )

    def handle(self, *args, **options):
        use_lock = not options['no_lock']

        self.stdout.write("Initializing SQLAlchemy schema...")
        try:
            ensure_sqlalchemy_schema(with_advisory_lock=use_lock)
        except Exception as e:
            raise CommandError(f"Failed to initialize SQLAlchemy schema: {e}") from e

        engine = get_engine()
        if engine is None:
            raise CommandError("SQLAlchemy engine is not initialized; check DATABASE_URL")
        self.stdout.write(f"Target database: {engine.url.render_as_string(hide_password=True)}")
        self.stdout.write(
            self.style.SUCCESS("SQLAlchemy schema initialization completed successfully")
        )
