import time
from datetime import timedelta

from django.conf import settings
from django.core.management.base import BaseCommand

from tracking.services import poll_once


class Command(BaseCommand):
    help = "Advance shipped orders along the demo tracking sequence on an interval"

    def add_arguments(self, parser):
        parser.add_argument(
            '--interval',
            type=int,
            default=settings.TRACKING_POLL_INTERVAL_MINUTES,
            help='Minutes between ticks (also the minimum age of the last entry)',
        )
        parser.add_argument(
            '--once',
            action='store_true',
            help='Run a single tick and exit',
        )

    def handle(self, *args, **options):
        minutes = options['interval']
        interval = timedelta(minutes=minutes)

        self.stdout.write(f"Starting tracking poller, interval {minutes} minute(s)")
        while True:
            advanced = poll_once(interval=interval)
            self.stdout.write(self.style.SUCCESS(f"Tick done: {len(advanced)} order(s) advanced"))
            if options['once']:
                return
            time.sleep(minutes * 60)
