from django.core.management.base import BaseCommand, CommandError
from django.contrib.auth import get_user_model

User = get_user_model()


class Command(BaseCommand):
    help = "Promote an existing user to the admin role"

    def add_arguments(self, parser):
        parser.add_argument('email', type=str)
        parser.add_argument(
            '--staff',
            action='store_true',
            help='Also give access to the django admin site',
        )

    def handle(self, *args, **options):
        email = options['email'].lower()
        try:
            user = User.objects.get(email=email)
        except User.DoesNotExist:
            raise CommandError(f'User with email "{email}" not found.')

        user.role = User.ROLE_ADMIN
        if options['staff']:
            user.is_staff = True
        user.save()

        self.stdout.write(self.style.SUCCESS(f'User "{user.get_full_name()}" ({email}) is now an ADMIN'))
        self.stdout.write(f"Role: {user.role}")
        self.stdout.write(f"User ID: {user.pk}")
