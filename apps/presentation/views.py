import logging
from rest_framework import mixins, viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiParameter, OpenApiExample
from drf_spectacular.types import OpenApiTypes
from apps.domain.models import Document, Signatory
from apps.presentation.serializers import (
    DocumentSerializer, DocumentCreateSerializer, SignatorySerializer,
    SignatoryToggleSerializer, AdminDecisionSerializer, CommentSerializer,
    CommentCreateSerializer, ActivitySerializer
)
from apps.application.services.document_service import DocumentService
from apps.presentation.utils import error_response, get_session

logger = logging.getLogger('apps')


def _document_queryset():
    return Document.objects.select_related('created_by__profile').prefetch_related('signatories')


@extend_schema_view(
    list=extend_schema(
        summary='List documents',
        description='Paginated list of document trackers, newest first. Filter with ?status=.',
        tags=['Documents'],
        parameters=[
            OpenApiParameter('status', OpenApiTypes.STR, enum=[choice[0] for choice in Document.STATUS_CHOICES]),
        ],
    ),
    create=extend_schema(
        summary='Create document tracker',
        description='Creates the document, its signatories and a "created" activity entry in one transaction. '
                    'The file must be uploaded first through /api/uploads/.',
        tags=['Documents'],
        request=DocumentCreateSerializer,
        responses={
            201: DocumentSerializer,
            400: OpenApiTypes.OBJECT,
        },
        examples=[
            OpenApiExample(
                'Field trip permission',
                value={
                    'name': 'Field Trip Form',
                    'description': 'Permission letter for the spring field trip',
                    'file': {
                        'name': 'field-trip.pdf',
                        'url': '/media/1/1718000000000.pdf',
                        'path': '1/1718000000000.pdf'
                    },
                    'requires_admin_approval': False,
                    'signatories': [
                        {'name': 'A. Dean', 'position': 'Dean'},
                        {'name': 'B. Principal', 'position': 'Principal', 'email': 'principal@example.com'}
                    ]
                }
            ),
        ],
    ),
    retrieve=extend_schema(
        summary='Get document details',
        description='Document with creator, signatories in signing order and signature progress.',
        tags=['Documents'],
    ),
    destroy=extend_schema(
        summary='Delete document',
        description='Deletes the document with its signatories, comments and activity. Creator or admin only.',
        tags=['Documents'],
    ),
)
class DocumentViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = DocumentSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        queryset = _document_queryset()
        status_filter = self.request.query_params.get('status')
        if status_filter:
            queryset = queryset.filter(status=status_filter)
        return queryset

    def get_serializer_class(self):
        if self.action == 'create':
            return DocumentCreateSerializer
        return DocumentSerializer

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context['session'] = get_session(self.request)
        return context

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            document = serializer.save()
        except ValueError as e:
            return error_response(str(e), status.HTTP_400_BAD_REQUEST)
        document = _document_queryset().get(pk=document.pk)
        return Response(DocumentSerializer(document).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, *args, **kwargs):
        document = self.get_object()
        DocumentService().delete_document(get_session(request), document)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        summary='Approve or reject document',
        description='Records the admin decision for a document that requires approval. Admins only, once per document. '
                    'A rejection moves the document to "rejected"; an approval lets it complete when all signatories have signed.',
        tags=['Documents'],
        request=AdminDecisionSerializer,
        responses={
            200: DocumentSerializer,
            400: OpenApiTypes.OBJECT,
            403: OpenApiTypes.OBJECT,
        },
    )
    @action(detail=True, methods=['post'])
    def approval(self, request, pk=None):
        document = self.get_object()
        serializer = AdminDecisionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            document = DocumentService().record_admin_decision(
                get_session(request),
                document,
                serializer.validated_data['approved'],
            )
        except ValueError as e:
            return error_response(str(e), status.HTTP_400_BAD_REQUEST)

        document = _document_queryset().get(pk=document.pk)
        return Response(DocumentSerializer(document).data, status=status.HTTP_200_OK)

    @extend_schema(
        methods=['GET'],
        summary='List comments',
        description='All comments of the document, newest first.',
        tags=['Documents'],
        responses={200: CommentSerializer(many=True)},
    )
    @extend_schema(
        methods=['POST'],
        summary='Add comment',
        description='Adds a comment and records a "comment_added" activity entry.',
        tags=['Documents'],
        request=CommentCreateSerializer,
        responses={201: CommentSerializer, 400: OpenApiTypes.OBJECT},
    )
    @action(detail=True, methods=['get', 'post'])
    def comments(self, request, pk=None):
        document = self.get_object()
        service = DocumentService()

        if request.method == 'POST':
            serializer = CommentCreateSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            try:
                comment = service.add_comment(get_session(request), document, serializer.validated_data['comment'])
            except ValueError as e:
                return error_response(str(e), status.HTTP_400_BAD_REQUEST)
            return Response(CommentSerializer(comment).data, status=status.HTTP_201_CREATED)

        comments = service.list_comments(document)
        return Response(CommentSerializer(comments, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary='Activity log',
        description='Audit trail of the document, newest first.',
        tags=['Documents'],
        responses={200: ActivitySerializer(many=True)},
    )
    @action(detail=True, methods=['get'])
    def activity(self, request, pk=None):
        document = self.get_object()
        entries = DocumentService().list_activity(document)
        return Response(ActivitySerializer(entries, many=True).data, status=status.HTTP_200_OK)


@extend_schema_view(
    list=extend_schema(
        summary='List signatories',
        description='Signatories of a document in signing order.',
        tags=['Signatories'],
        parameters=[
            OpenApiParameter('document_pk', OpenApiTypes.INT, location=OpenApiParameter.PATH, description='Document ID'),
        ],
    ),
    retrieve=extend_schema(
        summary='Get signatory',
        tags=['Signatories'],
    ),
)
class SignatoryViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = SignatorySerializer
    permission_classes = [IsAuthenticated]
    pagination_class = None

    def get_queryset(self):
        document_id = self.kwargs.get('document_pk')
        return Signatory.objects.filter(document_id=document_id)

    def list(self, request, *args, **kwargs):
        get_object_or_404(Document, pk=self.kwargs.get('document_pk'))
        return super().list(request, *args, **kwargs)

    @extend_schema(
        summary='Mark signatory as signed or not signed',
        description='Sets the signature state (and optional note), recomputes the document status '
                    'and records one activity entry. Creator or admin only.',
        tags=['Signatories'],
        request=SignatoryToggleSerializer,
        responses={
            200: OpenApiTypes.OBJECT,
            403: OpenApiTypes.OBJECT,
        },
        examples=[
            OpenApiExample('Mark as signed', value={'is_signed': True, 'notes': 'Signed at the front office'}),
            OpenApiExample('Mark as not signed', value={'is_signed': False}),
        ],
    )
    @action(detail=True, methods=['post'])
    def toggle(self, request, document_pk=None, pk=None):
        signatory = self.get_object()
        serializer = SignatoryToggleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        signatory = DocumentService().toggle_signature(
            get_session(request),
            signatory,
            serializer.validated_data['is_signed'],
            serializer.validated_data.get('notes'),
        )

        document = _document_queryset().get(pk=signatory.document_id)
        return Response({
            'signatory': SignatorySerializer(signatory).data,
            'document': DocumentSerializer(document).data,
        }, status=status.HTTP_200_OK)
