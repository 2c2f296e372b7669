import logging

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from translations.helpers import (
    get_available_languages,
    get_available_namespaces,
    get_locales_dir,
    load_locale_file,
)
from translations.services import TranslationService

logger = logging.getLogger(__name__)


class DryRun(Exception):
    pass


class Command(BaseCommand):
    help = 'Import frontend locale files (<locales>/<lang>/<namespace>.json) into translation keys'

    def add_arguments(self, parser):
        parser.add_argument(
            '--path',
            help='Locales directory (defaults to settings.LOCALES_DIR)',
        )
        parser.add_argument(
            '--namespace',
            action='append',
            dest='namespaces',
            help='Only import this namespace (repeatable)',
        )
        parser.add_argument(
            '--required',
            action='store_true',
            default=None,
            help='Mark imported keys as required (existing flags are kept otherwise)',
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Report what would change without saving',
        )

    def handle(self, *args, **options):
        locales_dir = get_locales_dir(options.get('path'))
        languages = get_available_languages(locales_dir)
        if 'en' not in languages:
            raise CommandError(f'No English locale files found in {locales_dir}')

        namespaces = options.get('namespaces') or get_available_namespaces(locales_dir, 'en')
        dry_run = options['dry_run']
        service = TranslationService()

        totals = {'created': 0, 'updated': 0, 'unchanged': 0, 'errors': 0}
        for namespace in namespaces:
            en_tree = load_locale_file(locales_dir, 'en', namespace)
            ne_tree = load_locale_file(locales_dir, 'ne', namespace)
            if not en_tree:
                self.stdout.write(self.style.WARNING(f'Skipping {namespace}: no English file'))
                continue

            try:
                with transaction.atomic():
                    result = service.import_locale_tree(
                        namespace, en_tree, ne_tree, is_required=options['required']
                    )
                    if dry_run:
                        raise DryRun()
            except DryRun:
                pass

            for error in result.errors:
                self.stdout.write(self.style.ERROR(error))
            self.stdout.write(
                f'{namespace}: {result.created} created, {result.updated} updated, '
                f'{result.unchanged} unchanged, {len(result.errors)} errors'
            )
            for name in ('created', 'updated', 'unchanged'):
                totals[name] += getattr(result, name)
            totals['errors'] += len(result.errors)

        prefix = '[dry run] ' if dry_run else ''
        summary = (
            f"{prefix}Imported {len(namespaces)} namespaces: {totals['created']} created, "
            f"{totals['updated']} updated, {totals['unchanged']} unchanged, {totals['errors']} errors"
        )
        logger.info(summary)
        style = self.style.WARNING if totals['errors'] else self.style.SUCCESS
        self.stdout.write(style(summary))
