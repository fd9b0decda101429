from django.conf import settings
from django.contrib.auth.models import User
from rest_framework import serializers
from drf_spectacular.utils import extend_schema_field
from apps.domain.models import UserProfile, Document, Signatory, DocumentActivity, DocumentComment
from apps.domain.status import signature_progress
from apps.application.services.document_service import DocumentService


class UserProfileSerializer(serializers.ModelSerializer):
    id = serializers.IntegerField(source='user_id', read_only=True, help_text='User ID')
    email = serializers.EmailField(read_only=True, help_text='E-mail address')
    full_name = serializers.CharField(help_text='Display name')
    role = serializers.ChoiceField(choices=UserProfile.ROLE_CHOICES, read_only=True, help_text='admin or member')

    class Meta:
        model = UserProfile
        fields = ['id', 'email', 'full_name', 'role']


class UserSummarySerializer(serializers.Serializer):
    """Embedded author/creator info: id, full name and role."""
    id = serializers.IntegerField(read_only=True)
    full_name = serializers.SerializerMethodField()
    role = serializers.SerializerMethodField()

    def _profile(self, user):
        return getattr(user, 'profile', None)

    def get_full_name(self, user) -> str:
        profile = self._profile(user)
        return profile.full_name if profile else user.get_username()

    def get_role(self, user) -> str:
        profile = self._profile(user)
        return profile.role if profile else UserProfile.ROLE_MEMBER


class SignupSerializer(serializers.Serializer):
    email = serializers.EmailField(help_text='E-mail, also used as username')
    password = serializers.CharField(write_only=True, min_length=8, style={'input_type': 'password'})
    full_name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    role = serializers.ChoiceField(choices=UserProfile.ROLE_CHOICES, default=UserProfile.ROLE_MEMBER)

    def validate_email(self, value):
        value = value.strip().lower()
        if User.objects.filter(username=value).exists():
            raise serializers.ValidationError('An account with this e-mail already exists')
        return value

    def create(self, validated_data):
        user = User.objects.create_user(
            username=validated_data['email'],
            email=validated_data['email'],
            password=validated_data['password'],
        )
        # the post_save signal has already provisioned a member profile
        profile = user.profile
        full_name = validated_data.get('full_name', '').strip()
        if full_name:
            profile.full_name = full_name
        profile.role = validated_data['role']
        profile.save(update_fields=['full_name', 'role', 'updated_at'])
        return user


class SignatorySerializer(serializers.ModelSerializer):
    id = serializers.IntegerField(read_only=True, help_text='Signatory ID')
    document = serializers.PrimaryKeyRelatedField(read_only=True, help_text='Owning document ID')

    class Meta:
        model = Signatory
        fields = [
            'id', 'document', 'name', 'position', 'email', 'phone',
            'is_signed', 'signed_at', 'notes', 'order_index', 'created_at', 'updated_at'
        ]
        read_only_fields = fields


class SignatoryInputSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, allow_blank=True, help_text='Full name; blank entries are ignored')
    position = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    email = serializers.EmailField(max_length=255, required=False, allow_blank=True, allow_null=True)
    phone = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True)


class FileReferenceSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, help_text='Original file name')
    url = serializers.CharField(max_length=500, help_text='Retrievable URL of the stored file')
    path = serializers.CharField(max_length=500, required=False, help_text='Storage path returned by the upload endpoint')


class DocumentSerializer(serializers.ModelSerializer):
    id = serializers.IntegerField(read_only=True, help_text='Document ID')
    created_by = serializers.PrimaryKeyRelatedField(read_only=True, help_text='Creator user ID')
    created_by_user = UserSummarySerializer(source='created_by', read_only=True)
    admin_approved_by = serializers.PrimaryKeyRelatedField(read_only=True)
    signatories = SignatorySerializer(many=True, read_only=True)
    progress = serializers.SerializerMethodField(help_text='Signed count, total and rounded percentage')

    class Meta:
        model = Document
        fields = [
            'id', 'name', 'description', 'file_url', 'file_name', 'file_path',
            'created_by', 'created_by_user', 'requires_admin_approval',
            'admin_approved', 'admin_approved_by', 'admin_approved_at',
            'status', 'progress', 'signatories', 'created_at', 'updated_at'
        ]
        read_only_fields = fields

    @extend_schema_field({
        'type': 'object',
        'properties': {
            'signed': {'type': 'integer'},
            'total': {'type': 'integer'},
            'percentage': {'type': 'integer'},
        },
    })
    def get_progress(self, obj):
        # uses the prefetched signatories when the queryset provides them
        progress = signature_progress(signatory.is_signed for signatory in obj.signatories.all())
        return progress._asdict()


class DocumentCreateSerializer(serializers.Serializer):
    name = serializers.CharField(
        max_length=255,
        min_length=settings.DOCUMENT_NAME_MIN_LENGTH,
        help_text='Document name (at least 3 characters)'
    )
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    file = FileReferenceSerializer(help_text='File reference returned by the upload endpoint')
    requires_admin_approval = serializers.BooleanField(default=False, required=False)
    signatories = serializers.ListField(
        child=SignatoryInputSerializer(),
        required=False,
        default=list,
        help_text='Signatories in signing order. Entries with a blank name are dropped.'
    )

    def create(self, validated_data):
        service = DocumentService()
        return service.create_document(
            session=self.context['session'],
            name=validated_data['name'],
            file=validated_data['file'],
            description=validated_data.get('description'),
            requires_admin_approval=validated_data.get('requires_admin_approval', False),
            signatories=validated_data.get('signatories', []),
        )


class SignatoryToggleSerializer(serializers.Serializer):
    is_signed = serializers.BooleanField(help_text='True to mark as signed, False to unmark')
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True, help_text='Optional note')


class AdminDecisionSerializer(serializers.Serializer):
    approved = serializers.BooleanField(help_text='True to approve, False to reject')


class CommentSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)

    class Meta:
        model = DocumentComment
        fields = ['id', 'document', 'user', 'comment', 'created_at', 'updated_at']
        read_only_fields = fields


class CommentCreateSerializer(serializers.Serializer):
    comment = serializers.CharField(help_text='Comment text')


class ActivitySerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True, allow_null=True)

    class Meta:
        model = DocumentActivity
        fields = ['id', 'document', 'user', 'action', 'description', 'metadata', 'created_at']
        read_only_fields = fields


class FileUploadSerializer(serializers.Serializer):
    file = serializers.FileField(help_text='PDF, DOC, DOCX, PNG or JPG up to 10MB')


class UploadRemoveSerializer(serializers.Serializer):
    path = serializers.CharField(max_length=500, help_text='Storage path returned by the upload endpoint')
