"""
Management command that serves the desktop IPC channels over stdin/stdout.

Protocol: one JSON object per line in each direction.

    -> {"id": 1, "channel": "invoice:create", "payload": {...}}
    <- {"id": 1, "ok": true, "result": {...}}

Requests are handled strictly one after another.
"""

import json
import logging
import sys

from django.core.management import call_command
from django.core.management.base import BaseCommand

from rest_framework.utils.encoders import JSONEncoder

from apps.core.ipc import handle_message, registered_channels

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Serve the desktop IPC channels as JSON lines over stdin/stdout"

    stealth_options = ("stdin",)

    def add_arguments(self, parser):
        parser.add_argument(
            "--migrate",
            action="store_true",
            help="Apply database migrations before serving",
        )

    def handle(self, *args, **options):
        if options["migrate"]:
            call_command("migrate", interactive=False, verbosity=0)

        stream = options.get("stdin") or sys.stdin
        logger.info(f"IPC server ready; channels: {', '.join(registered_channels())}")

        for line in stream:
            line = line.strip()
            if not line:
                continue
            self.stdout.write(json.dumps(self.process_line(line), cls=JSONEncoder))
            self.stdout.flush()

        logger.info("IPC input closed, stopping")

    def process_line(self, line):
        try:
            message = json.loads(line)
        except ValueError as e:
            return {
                "id": None,
                "ok": False,
                "error": {"type": "validation", "message": f"Invalid JSON: {e}"},
            }
        return handle_message(message)
