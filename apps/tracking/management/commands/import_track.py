"""
Management command to import a GPX track.
Every track point goes through the same validation as device requests.
"""
import xml.etree.ElementTree as ET

from django.core.management.base import BaseCommand, CommandError

from apps.tracking.apps import get_tracking
from apps.tracking.exceptions import StorageError, ValidationError
from apps.tracking.gpx import read_gpx
from apps.tracking.validator import validate_point


class Command(BaseCommand):
    help = 'Import GPS points from a GPX file'

    def add_arguments(self, parser):
        parser.add_argument('gpxfile', type=str, help='Path to the GPX file')
        parser.add_argument('--user', type=str, required=True, help='User to store the points under')
        parser.add_argument('--session', type=str, required=True, help='Session to store the points under')

    def handle(self, *args, **options):
        gpxfile = options['gpxfile']

        try:
            points = read_gpx(gpxfile)
        except FileNotFoundError:
            raise CommandError(f'GPX file not found: {gpxfile}')
        except ET.ParseError as e:
            raise CommandError(f'Invalid GPX file {gpxfile}: {e}')

        self.import_points(points, options['user'], options['session'])

    def import_points(self, points, user, session):
        """Validate and store parsed track points"""
        store, config = get_tracking()

        imported = 0
        skipped = 0

        for index, params in enumerate(points, 1):
            params = dict(params, user=user, session=session, key=config.key)
            try:
                record = validate_point(params, config)
            except ValidationError as e:
                self.stdout.write(self.style.WARNING(f'Point {index}: {e}'))
                skipped += 1
                continue

            try:
                store.insert(record)
            except StorageError as e:
                raise CommandError(f'Point {index} not stored: {e}')
            imported += 1

        self.stdout.write(
            self.style.SUCCESS(f'Import complete: {imported} imported, {skipped} skipped')
        )
