import logging
from django.contrib.auth.models import User
from django.db.models.signals import post_save
from django.dispatch import receiver
from apps.domain.models import UserProfile

logger = logging.getLogger('apps')


def default_full_name(user: User) -> str:
    full_name = user.get_full_name().strip()
    if full_name:
        return full_name
    if user.email:
        return user.email.split('@', 1)[0]
    return user.get_username()


@receiver(post_save, sender=User)
def create_user_profile(sender, instance, created, **kwargs):
    """Provision the member profile when an account is created."""
    if not created:
        return

    profile, was_created = UserProfile.objects.get_or_create(
        user=instance,
        defaults={
            'email': instance.email or None,
            'full_name': default_full_name(instance),
            'role': UserProfile.ROLE_MEMBER,
        },
    )
    if was_created:
        logger.info(f'Profile created for user {instance.pk} with role {profile.role}')
