import logging
from rest_framework import status
from rest_framework.decorators import api_view, parser_classes, permission_classes
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema
from drf_spectacular.types import OpenApiTypes
from apps.application.facades.file_storage_facade import FileStorageFacade, FileValidationError, UploadInUseError
from apps.domain.interfaces.object_storage_strategy import ObjectStorageError
from apps.presentation.serializers import FileUploadSerializer, UploadRemoveSerializer
from apps.presentation.utils import error_response, get_session

logger = logging.getLogger('apps')


@extend_schema(
    methods=['POST'],
    summary='Upload document file',
    description='Stores one file (PDF, DOC, DOCX, PNG, JPG up to 10MB) under the uploader\'s folder and returns '
                'the reference to send as "file" when creating a document.',
    tags=['Uploads'],
    request={'multipart/form-data': FileUploadSerializer},
    responses={
        201: {
            'type': 'object',
            'properties': {
                'name': {'type': 'string', 'example': 'field-trip.pdf'},
                'url': {'type': 'string', 'example': '/media/1/1718000000000.pdf'},
                'path': {'type': 'string', 'example': '1/1718000000000.pdf'},
            }
        },
        400: OpenApiTypes.OBJECT,
        502: OpenApiTypes.OBJECT,
    },
)
@extend_schema(
    methods=['DELETE'],
    summary='Remove pending upload',
    description='Deletes a stored file that was not attached to a document. Storage failures are logged and reported '
                'as "removed": false without failing the request. Files attached to a document cannot be removed.',
    tags=['Uploads'],
    request=UploadRemoveSerializer,
    responses={
        200: OpenApiTypes.OBJECT,
        400: OpenApiTypes.OBJECT,
        403: OpenApiTypes.OBJECT,
        409: OpenApiTypes.OBJECT,
    },
)
@api_view(['POST', 'DELETE'])
@parser_classes([MultiPartParser, FormParser, JSONParser])
@permission_classes([IsAuthenticated])
def uploads(request):
    facade = FileStorageFacade()
    session = get_session(request)

    if request.method == 'DELETE':
        serializer = UploadRemoveSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            removed = facade.remove_upload(session, serializer.validated_data['path'])
        except FileValidationError as e:
            return error_response(str(e), status.HTTP_400_BAD_REQUEST)
        except UploadInUseError as e:
            return error_response(str(e), status.HTTP_409_CONFLICT)
        return Response({'removed': removed}, status=status.HTTP_200_OK)

    serializer = FileUploadSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        reference = facade.upload(session, serializer.validated_data['file'])
    except FileValidationError as e:
        return error_response(str(e), status.HTTP_400_BAD_REQUEST)
    except ObjectStorageError as e:
        return error_response('Failed to upload file', status.HTTP_502_BAD_GATEWAY, {'detail': str(e)})

    return Response(reference, status=status.HTTP_201_CREATED)
