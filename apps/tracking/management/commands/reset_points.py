"""
Management command to delete stored GPS points
Everything, or one user/session pair
"""
from django.core.management.base import BaseCommand, CommandError

from apps.tracking.apps import get_tracking
from apps.tracking.exceptions import StorageError, ValidationError
from apps.tracking.store import Scope


class Command(BaseCommand):
    help = 'Delete all GPS points, or the points of one user/session pair'

    def add_arguments(self, parser):
        parser.add_argument('--user', type=str, help='User of the track to delete')
        parser.add_argument('--session', type=str, help='Session of the track to delete')

    def handle(self, *args, **options):
        store, _ = get_tracking()
        user = options.get('user')
        session = options.get('session')

        scope = None
        if user or session:
            scope = Scope(user=user, session=session)
            if scope.user is None or scope.session is None:
                raise CommandError('--user and --session must be given together')

        try:
            deleted = store.reset(scope)
        except (StorageError, ValidationError) as e:
            raise CommandError(str(e))

        target = f'user {scope.user} session {scope.session}' if scope else 'all users'
        self.stdout.write(self.style.SUCCESS(f'Deleted {deleted} points ({target})'))
