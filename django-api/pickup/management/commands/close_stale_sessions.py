"""Closes open sessions that started more than four hours ago.

Meant to be run periodically, e.g. from cron.
"""

from django.core.management.base import BaseCommand

from pickup.handlers.dependencies import session_service


class Command(BaseCommand):
    help = "Close open sessions whose start time is more than four hours in the past."

    def handle(self, *args, **options):
        outcome = session_service().close_stale_sessions()
        for session in outcome.closed:
            self.stdout.write(f"Closed {session.name} ({session.date.isoformat()})")
        self.stdout.write(self.style.SUCCESS(f"{len(outcome.closed)} session(s) closed"))
