from django.conf import settings
from django.db import connection
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema


@extend_schema(
    summary='Health Check',
    description='Reports API status, database connectivity and the configured storage backend.',
    tags=['Health'],
    responses={
        200: {
            'type': 'object',
            'properties': {
                'status': {'type': 'string', 'example': 'ok'},
                'database': {'type': 'string', 'example': 'healthy'},
                'storage_backend': {'type': 'string', 'example': 'django'},
            }
        }
    },
)
@api_view(['GET'])
@permission_classes([AllowAny])
def health_check(request):
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
        db_status = "healthy"
    except Exception:
        db_status = "unhealthy"

    return Response({
        "status": "ok",
        "database": db_status,
        "storage_backend": settings.OBJECT_STORAGE_BACKEND,
    }, status=status.HTTP_200_OK)
