from django.utils import timezone


def now():
    """Current instant in the configured TIME_ZONE."""
    return timezone.localtime(timezone.now())


def to_local_iso(dt):
    return timezone.localtime(dt).isoformat()
