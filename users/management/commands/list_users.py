from django.core.management.base import BaseCommand
from django.contrib.auth import get_user_model

User = get_user_model()


class Command(BaseCommand):
    help = "List registered users with their role"

    def add_arguments(self, parser):
        parser.add_argument(
            '--role',
            choices=[User.ROLE_USER, User.ROLE_ADMIN],
            help='Only show users with this role',
        )

    def handle(self, *args, **options):
        users = User.objects.order_by('date_joined')
        if options['role']:
            users = users.filter(role=options['role'])

        if not users.exists():
            self.stdout.write(self.style.WARNING("No users found in database."))
            return

        self.stdout.write(f"Total Users: {users.count()}\n")
        self.stdout.write(f"{'Email':<40} {'Name':<30} {'Role':<6} {'Created':<10} Disabled")
        for user in users:
            self.stdout.write(
                f"{user.email:<40} {user.get_full_name():<30} {user.role:<6} "
                f"{user.date_joined:%Y-%m-%d} {'yes' if user.disabled else ''}"
            )
