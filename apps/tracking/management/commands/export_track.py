"""
Management command to export a track as GPX
"""
from django.core.management.base import BaseCommand, CommandError

from apps.tracking.apps import get_tracking
from apps.tracking.exceptions import StorageError, ValidationError
from apps.tracking.gpx import render_gpx, write_gpx
from apps.tracking.store import Scope


class Command(BaseCommand):
    help = 'Write the full track of a user (optionally one session) as GPX'

    def add_arguments(self, parser):
        parser.add_argument('--user', type=str, required=True, help='Track user')
        parser.add_argument('--session', type=str, help='Track session, all sessions when omitted')
        parser.add_argument('--output', type=str, help='Target file, stdout when omitted')

    def handle(self, *args, **options):
        store, _ = get_tracking()
        scope = Scope(user=options['user'], session=options.get('session'))

        try:
            points = store.ordered_track(scope)
        except (StorageError, ValidationError) as e:
            raise CommandError(str(e))

        output = options.get('output')
        if output:
            with open(output, 'w', encoding='utf-8') as f:
                write_gpx(points, f, user=scope.user, session=scope.session)
            self.stderr.write(self.style.SUCCESS(f'Exported {len(points)} points to {output}'))
        else:
            self.stdout.write(render_gpx(points, user=scope.user, session=scope.session), ending="")
